"""JinjaCompiler - compiles theme tags to Jinja2 template source.

Code tags:
    {{ $user->name }}      -> {{ user.name }}
    {{ :price * 2 }}       -> {{ price * 2 }}
    {{ # a note }}         -> {# a note #}
    {{ ~ set x = 1 }}      -> {% set x = 1 %}

Node tags:
    {% if x > 1 %}..{% elseif x %}..{% else %}..{% :if %}
    {% list for=items key="k" value="v" %}..{% :list %}
    {% include file="header" %}
    {% assign name="total" value="a + b" %}
    {% break %} {% continue %}

`{% tagself %}..{% :tagself %}` is emitted verbatim inside `{% raw %}`.
"""

from __future__ import annotations

import re
from typing import Dict

from themec.ast.node import ThemeNode
from themec.compiler.base import Compiler, Routine
from themec.compiler.markers import decode, revert_encode
from themec.parser.spec import NodeTag

VARIABLE_PREFIX = re.compile(r"\$(?=[A-Za-z_])")


def expression(source: str) -> str:
    """Turn a theme expression into a Jinja2 expression.

    Drops `$` variable prefixes and maps `->` member access to `.`.
    """
    return VARIABLE_PREFIX.sub("", source.strip()).replace("->", ".")


def quote(value: str) -> str:
    """Quote a literal file name unless it already is an expression."""
    value = value.strip()
    if value.startswith(("'", '"', "$")) or "(" in value:
        return expression(value)
    return '"' + value.replace('"', '\\"') + '"'


class JinjaCompiler(Compiler):
    """Compile routines targeting Jinja2."""

    code_tags = {
        "$": "variable",
        ":": "echo",
        "#": "note",
        "~": "statement",
    }

    node_tags = {
        "if": NodeTag("if"),
        "elseif": NodeTag("elseif", single=True),
        "else": NodeTag("else", single=True),
        "list": NodeTag("list"),
        "include": NodeTag("include", single=True),
        "assign": NodeTag("assign", single=True),
        "break": NodeTag("break", single=True),
        "continue": NodeTag("continue", single=True),
    }

    node_attributes = {
        "if": ("condition",),
        "elseif": ("condition",),
        "list": ("for", "key", "value", "index"),
        "include": ("file", "ext"),
        "assign": ("name", "value"),
    }

    required_attributes = {
        "if": ("condition",),
        "elseif": ("condition",),
        "list": ("for",),
        "include": ("file",),
        "assign": ("name",),
    }

    def __init__(self, suffix: str = ".html") -> None:
        self.suffix = suffix
        super().__init__()

    def routines(self) -> Dict[str, Routine]:
        table = super().routines()
        table.update(
            {
                "variableCode": self.variable_code_compiler,
                "echoCode": self.echo_code_compiler,
                "noteCode": self.note_code_compiler,
                "statementCode": self.statement_code_compiler,
                "ifNode": self.if_node_compiler,
                "elseifNode": self.elseif_node_compiler,
                "elseNode": self.else_node_compiler,
                "listNode": self.list_node_compiler,
                "includeNode": self.include_node_compiler,
                "assignNode": self.assign_node_compiler,
                "breakNode": self.break_node_compiler,
                "continueNode": self.continue_node_compiler,
            }
        )
        return table

    # code tags

    def variable_code_compiler(self, theme: ThemeNode) -> None:
        theme.content = revert_encode("{{ " + expression(theme.content) + " }}")

    def echo_code_compiler(self, theme: ThemeNode) -> None:
        theme.content = revert_encode("{{ " + expression(theme.content) + " }}")

    def note_code_compiler(self, theme: ThemeNode) -> None:
        theme.content = revert_encode("{# " + theme.content + " #}")

    def statement_code_compiler(self, theme: ThemeNode) -> None:
        theme.content = revert_encode("{% " + theme.content + " %}")

    # node tags

    def if_node_compiler(self, theme: ThemeNode) -> None:
        condition = expression(theme.attributes()["condition"])
        theme.content = (
            "{% if " + condition + " %}" + theme.body_content() + "{% endif %}"
        )

    def elseif_node_compiler(self, theme: ThemeNode) -> None:
        condition = expression(theme.attributes()["condition"])
        theme.content = "{% elif " + condition + " %}"

    def else_node_compiler(self, theme: ThemeNode) -> None:
        theme.content = "{% else %}"

    def list_node_compiler(self, theme: ThemeNode) -> None:
        attributes = theme.attributes()
        iterable = expression(attributes["for"])
        key = expression(attributes.get("key") or "")
        value = expression(attributes.get("value") or "value")
        index = expression(attributes.get("index") or "")

        if key:
            head = f"{{% for {key}, {value} in {iterable}.items() %}}"
        else:
            head = f"{{% for {value} in {iterable} %}}"
        if index:
            head += f"{{% set {index} = loop.index0 %}}"

        theme.content = head + theme.body_content() + "{% endfor %}"

    def include_node_compiler(self, theme: ThemeNode) -> None:
        attributes = theme.attributes()
        name = attributes["file"].strip()
        ext = attributes.get("ext") or self.suffix
        if not name.startswith(("'", '"', "$")) and "." not in name.rsplit("/", 1)[-1]:
            name += ext
        theme.content = "{% include " + quote(name) + " %}"

    def assign_node_compiler(self, theme: ThemeNode) -> None:
        attributes = theme.attributes()
        name = expression(attributes["name"])
        value = expression(attributes.get("value") or "none")
        theme.content = f"{{% set {name} = {value} %}}"

    def break_node_compiler(self, theme: ThemeNode) -> None:
        theme.content = "{% break %}"

    def continue_node_compiler(self, theme: ThemeNode) -> None:
        theme.content = "{% continue %}"

    def globalrevert_compiler(self, theme: ThemeNode) -> None:
        theme.content = "{% raw %}" + decode(theme.content) + "{% endraw %}"

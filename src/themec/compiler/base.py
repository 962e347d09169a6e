"""Compiler - the compile routines the parser dispatches to.

A compiler declares which code and node tags exist and supplies one routine
per routine identifier. Each routine receives a ThemeNode whose children are
already compiled and rewrites the node's `content`.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Sequence

from themec.ast.node import ThemeNode
from themec.compiler.attributes import parse_attributes
from themec.compiler.markers import decode, global_encode
from themec.errors import MissingAttributeError, UnknownCompilerError
from themec.parser.spec import NodeTag

Routine = Callable[[ThemeNode], None]


class Compiler:
    """Base compiler with the routines every pipeline needs.

    Subclasses add tags by extending `code_tags`/`node_tags` and the lookup
    table returned by `routines()`.
    """

    # code tag name -> routine base name, e.g. {"$": "variable"} -> "variableCode"
    code_tags: Mapping[str, str] = {}

    # node tag name -> NodeTag, e.g. {"if": NodeTag("if")} -> "ifNode"
    node_tags: Mapping[str, NodeTag] = {}

    # node name -> attribute names; the first one receives bare attribute text
    node_attributes: Mapping[str, Sequence[str]] = {}

    # node name -> attributes that must be present
    required_attributes: Mapping[str, Sequence[str]] = {}

    def __init__(self) -> None:
        self._routines: Dict[str, Routine] = dict(self.routines())

    def routines(self) -> Dict[str, Routine]:
        """Routine identifier -> callable lookup table."""
        return {
            "global": self.global_compiler,
            "revert": self.revert_compiler,
            "globalrevert": self.globalrevert_compiler,
            "attributeNode": self.attribute_node_compiler,
        }

    def compile(self, theme: ThemeNode) -> None:
        """Run the routine registered for `theme.compiler`."""
        if theme.compiler is None:
            return
        routine = self._routines.get(theme.compiler)
        if routine is None:
            raise UnknownCompilerError(theme.compiler)
        routine(theme)

    def cache_header(self, timestamp: str) -> str:
        """Comment put in front of cached compiled output."""
        return f"{{# {timestamp} #}}"

    def global_compiler(self, theme: ThemeNode) -> None:
        theme.content = global_encode(theme.content)

    def revert_compiler(self, theme: ThemeNode) -> None:
        theme.content = decode(theme.content)

    def globalrevert_compiler(self, theme: ThemeNode) -> None:
        theme.content = decode(theme.content)

    def attribute_node_compiler(self, theme: ThemeNode) -> None:
        """Parse the head tag attributes into `attribute_list`."""
        name = theme.parent_name or ""
        allowed = self.node_attributes.get(name, ())
        default_key = allowed[0] if allowed else None

        attributes = parse_attributes(theme.content, default_key)
        for key in allowed:
            attributes.setdefault(key, "")

        for key in self.required_attributes.get(name, ()):
            if not attributes.get(key):
                raise MissingAttributeError(name, key, theme.position)

        theme.attribute_list = attributes

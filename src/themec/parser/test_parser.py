"""Tests for the pass pipeline."""

import re

import pytest

from themec.ast.node import ThemeNode
from themec.compiler.base import Compiler
from themec.compiler.markers import revert_encode
from themec.config import ParserConfig
from themec.errors import (
    SourceNotFoundError,
    UnknownCompilerError,
    UnpairedTagError,
)
from themec.parser import NodeTag, Parser


class EchoCompiler(Compiler):
    """Small compile routines producing bracketed markup."""

    code_tags = {"upper": "upper", "keep": "keep", "lost": "lost"}
    node_tags = {"if": NodeTag("if"), "else": NodeTag("else", single=True)}
    node_attributes = {"if": ("condition",)}

    def routines(self):
        table = super().routines()
        table.update(
            {
                "upperCode": self.upper_code,
                "keepCode": self.keep_code,
                "ifNode": self.if_node,
                "elseNode": self.else_node,
            }
        )
        return table

    def upper_code(self, theme: ThemeNode) -> None:
        theme.content = theme.content.upper()

    def keep_code(self, theme: ThemeNode) -> None:
        theme.content = revert_encode("{% if " + theme.content + " %}")

    def if_node(self, theme: ThemeNode) -> None:
        cond = theme.attributes()["condition"]
        theme.content = f"[if {cond}]{theme.body_content()}[/if]"

    def else_node(self, theme: ThemeNode) -> None:
        theme.content = "[else]"


@pytest.fixture
def parser():
    return Parser(EchoCompiler())


def test_text_without_tags_is_unchanged(parser):
    text = "plain { text }\nwith {braces} and 100% {{ unknown }} {% foo %}"
    assert parser.compile_string(text) == text


def test_single_paired_tag_tree(parser):
    root = parser.build_tree("{% if cond %}A{% :if %}", "node")

    assert root.compiler is None
    [node] = root.children
    assert node.name == "if"
    assert node.attribute_node().content == "cond"
    assert node.body().content == "A"


def test_disjoint_tags_are_sorted_siblings(parser):
    root = parser.build_tree("{% if a %}1{% :if %}-{% if b %}2{% :if %}", "node")

    first, second = root.children
    assert first.position.start < second.position.start
    assert first.body_content() == "1"
    assert second.body_content() == "2"


def test_nested_tag_is_reachable_through_body(parser):
    root = parser.build_tree("{% if a %}x{% if b %}y{% :if %}z{% :if %}", "node")

    [outer] = root.children
    [inner] = outer.body().children
    assert inner.name == "if"
    assert inner.body_content() == "y"


def test_single_tag_nests_inside_paired(parser):
    root = parser.build_tree("{% if a %}X{% else %}Y{% :if %}", "node")

    [node] = root.children
    [else_node] = node.body().children
    assert else_node.compiler == "elseNode"


def test_code_tag_tree(parser):
    root = parser.build_tree("{{upper foo}}", "code")

    [node] = root.children
    assert node.compiler == "upperCode"
    assert node.content == "foo"


def test_compiles_bottom_up(parser):
    text = "<{% if ok %}A{{upper b}}{% else %}c{% :if %}>"
    assert parser.compile_string(text) == "<[if ok]AB[else]c[/if]>"


def test_nested_compile(parser):
    text = "{% if a %}({% if b %}{{upper y}}{% :if %}){% :if %}"
    assert parser.compile_string(text) == "[if a]([if b]Y[/if])[/if]"


def test_repeated_identical_tags(parser):
    text = "{{upper a}} {{upper a}} {{upper a}}"
    assert parser.compile_string(text) == "A A A"


def test_compiled_output_is_idempotent(parser):
    once = parser.compile_string("{% if ok %}A{{upper b}}{% :if %}")
    assert parser.compile_string(once) == once


def test_tagself_is_protected(parser):
    text = "x{% tagself %}{{upper a}}{% if q %}{% :tagself %}y"
    assert parser.compile_string(text) == "x{{upper a}}{% if q %}y"


def test_revert_markers_hide_code_output_from_node_pass(parser):
    assert parser.compile_string("{{keep ready}}") == "{% if ready %}"


def test_unpaired_tag_error_location(parser):
    text = "line one\n  {% if x %} open"
    with pytest.raises(UnpairedTagError) as ex_info:
        parser.compile_string(text)

    message = str(ex_info.value)
    assert "must be used in pairs" in message
    assert "Line:1; column:2;" in message
    assert "  {% if x %} open\n  ^^^^^^^^^^" in message


def test_error_location_after_code_tag_on_same_line(parser):
    with pytest.raises(UnpairedTagError) as ex_info:
        parser.compile_string("{{upper a}} {% if x %}open")

    message = str(ex_info.value)
    assert "Line:0; column:12;" in message
    assert "{{upper a}} {% if x %}open\n            ^^^^^^^^^^" in message


def test_error_location_after_multiline_code_tag(parser):
    with pytest.raises(UnpairedTagError) as ex_info:
        parser.compile_string("{{upper\na}}\n{% if x %}open")

    message = str(ex_info.value)
    assert "Line:2; column:0;" in message
    assert "{% if x %}open\n^^^^^^^^^^" in message
    assert ex_info.value.position.start == 12


def test_unknown_routine_raises(parser):
    with pytest.raises(UnknownCompilerError) as ex_info:
        parser.compile_string("{{lost x}}")
    assert ex_info.value.identifier == "lostCode"


def test_missing_source_file(parser, tmp_path):
    missing = tmp_path / "missing.html"
    with pytest.raises(SourceNotFoundError) as ex_info:
        parser.do_compile(missing)
    assert isinstance(ex_info.value, FileNotFoundError)
    assert str(missing) in str(ex_info.value)


def test_compile_file_writes_cache(parser, tmp_path):
    source = tmp_path / "page.html"
    source.write_text("{% if ok %}{{upper a}}{% :if %}", encoding="utf-8")
    cache = tmp_path / "cache" / "page.j2"

    compiled = parser.do_compile(source, cache)

    assert compiled == "[if ok]A[/if]"
    header, body = cache.read_text(encoding="utf-8").split("\n", 1)
    assert re.fullmatch(r"\{# \d{4}-\d\d-\d\d \d\d:\d\d:\d\d #\}", header)
    assert body == compiled


def test_error_location_names_file(parser, tmp_path):
    source = tmp_path / "bad.html"
    source.write_text("{% if x %}", encoding="utf-8")

    with pytest.raises(UnpairedTagError) as ex_info:
        parser.do_compile(source)
    assert f"file:{source}." in str(ex_info.value)


def test_strict_pairing_from_config():
    class PrefixCompiler(EchoCompiler):
        node_tags = {"if": NodeTag("if"), "ifx": NodeTag("ifx")}
        node_attributes = {"if": ("condition",), "ifx": ("condition",)}

        def routines(self):
            table = super().routines()
            table["ifxNode"] = self.if_node
            return table

    text = "{% ifx c %}A{% :if %}"
    assert Parser(PrefixCompiler()).compile_string(text) == "[if c]A[/if]"
    with pytest.raises(UnpairedTagError):
        Parser(PrefixCompiler(), ParserConfig(strict_pairing=True)).compile_string(text)


def test_unknown_pass_name(parser):
    with pytest.raises(ValueError):
        parser.build_tree("x", "bogus")

from themec.ast.position import (
    NO_POSITION,
    Interval,
    format_location,
    get_position,
    relocate,
)


def test_empty_find_returns_sentinel():
    assert get_position("some text", "", 0) == NO_POSITION
    assert get_position("", "", 0) == Interval(-1, -1, -1, -1, -1, -1)


def test_missing_find_returns_sentinel():
    assert get_position("abc", "x", 0) == NO_POSITION


def test_lines_and_columns():
    pos = get_position("ab\ncd{x}", "{x}", 0)
    assert (pos.start, pos.end) == (5, 7)
    assert (pos.start_line, pos.end_line) == (1, 1)
    assert (pos.start_in, pos.end_in) == (2, 4)
    assert len(pos) == 3


def test_first_occurrence_at_or_after_start():
    assert get_position("aXbX", "X", 0).start == 1
    assert get_position("aXbX", "X", 2).start == 3


def test_span_over_lines():
    text = "a\n{% if %}\nbody\n{% :if %}"
    pos = get_position(text, text[2:], 2)
    assert pos.start_line == 1
    assert pos.end_line == 3
    assert pos.start_in == 0
    assert pos.end_in == len("{% :if %}") - 1


def test_format_location_marks_token():
    text = "ab\ncd{x}"
    location = format_location(get_position(text, "{x}", 0), text, "page.html")
    assert location == "Line:1; column:2; file:page.html.\ncd{x}\n  ^^^"


def test_format_location_without_content():
    location = format_location(get_position("abc", "b", 0))
    assert location == "Line:0; column:1; file:None."


def test_relocate_follows_rewritten_prefix():
    content = "X\n{% if %}"
    original = "{{ $a\n }}\n{% if %}"

    moved = relocate(get_position(content, "{% if %}"), content, original)

    assert (moved.start, moved.start_line, moved.start_in) == (10, 2, 0)


def test_relocate_keeps_occurrence():
    content = "ab{x}ab{x}"
    original = "abcdef{x}abcdef{x}"
    second = get_position(content, "{x}", 3)

    assert relocate(second, content, original).start == 15


def test_relocate_gone():
    assert relocate(get_position("ab{x}", "{x}"), "ab{x}", "ab") is None
    assert relocate(NO_POSITION, "ab", "ab") is None

"""Position tracking - offsets, lines and columns of located template text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LINE_SEPARATOR = "\n"


@dataclass(frozen=True)
class Interval:
    """Inclusive span of a located substring.

    `start_line`/`end_line` are 0-based line numbers and `start_in`/`end_in`
    the offsets of `start`/`end` within their line.
    """

    start: int
    end: int
    start_line: int = 0
    end_line: int = 0
    start_in: int = 0
    end_in: int = 0

    @property
    def is_located(self) -> bool:
        return self.start >= 0

    def __len__(self) -> int:
        return self.end - self.start + 1 if self.is_located else 0


NO_POSITION = Interval(-1, -1, -1, -1, -1, -1)


def get_position(content: str, find: str, start: int = 0) -> Interval:
    """Locate the first occurrence of `find` in `content` at or after `start`.

    Args:
        content: Full text being scanned.
        find: Substring to locate.
        start: Offset to start searching from.

    Returns:
        Interval of the occurrence, or NO_POSITION when `find` is empty or
        does not occur.
    """
    if not find:
        return NO_POSITION

    begin = content.find(find, start)
    if begin < 0:
        return NO_POSITION
    end = begin + len(find) - 1

    start_line = content.count(LINE_SEPARATOR, 0, begin)
    end_line = content.count(LINE_SEPARATOR, 0, end)

    start_in = begin - (content.rfind(LINE_SEPARATOR, 0, begin) + 1)
    end_in = end - (content.rfind(LINE_SEPARATOR, 0, end) + 1)

    return Interval(begin, end, start_line, end_line, start_in, end_in)


def format_location(
    position: Interval,
    content: Optional[str] = None,
    source_file: Optional[str | Path] = None,
) -> str:
    """Render a human readable location for error messages.

    The excerpt shows the line the located token starts on with a caret
    marker under the token.
    """
    location = (
        f"Line:{position.start_line}; column:{position.start_in}; "
        f"file:{source_file if source_file else None}."
    )
    if content is None or not position.is_located:
        return location

    lines = content.split(LINE_SEPARATOR)
    if position.start_line >= len(lines):
        return location

    line = lines[position.start_line]
    if position.end_line == position.start_line:
        width = position.end_in - position.start_in + 1
    else:
        width = len(line) - position.start_in
    marker = " " * position.start_in + "^" * max(width, 1)

    return f"{location}\n{line}\n{marker}"


def relocate(position: Interval, content: str, original: str) -> Optional[Interval]:
    """Map a span of a rewritten pass text back onto the original text.

    Earlier passes replace tags with markers of another length, so offsets
    shift. The located substring is searched again in `original`, taking
    the same occurrence as in `content`.

    Returns:
        Interval in `original`, or None when the substring is gone there.
    """
    if not position.is_located:
        return None

    find = content[position.start : position.end + 1]
    nth = content.count(find, 0, position.start)

    offset = 0
    for _ in range(nth):
        found = original.find(find, offset)
        if found < 0:
            return None
        offset = found + len(find)

    moved = get_position(original, find, offset)
    return moved if moved.is_located else None

"""themec exceptions

Every error raised by the compiler core is fatal for the current compile
unit: nothing is cached and no partial output is returned.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from themec.ast.position import Interval


class ThemecError(Exception):
    """Base exception for all themec errors."""

    pass


class TemplateError(ThemecError):
    """An error pointing at a span of template text.

    The parser fills `location` (line, column, file and a source excerpt)
    once it knows which pass text the `position` refers to.
    """

    def __init__(self, message: str, position: "Interval | None" = None):
        self.message = message
        self.position = position
        self.location: str | None = None
        super().__init__(message)

    def attach_location(
        self, content: str | None = None, source_file: str | Path | None = None
    ) -> None:
        from themec.ast.position import format_location

        if self.position is not None and self.location is None:
            self.location = format_location(self.position, content, source_file)

    def __str__(self) -> str:
        if self.location:
            return f"{self.message}\n{self.location}"
        return self.message


class CrossingIntervalError(TemplateError):
    """Two tag spans overlap without one containing the other."""

    def __init__(self, value: "Interval", beyond: "Interval"):
        self.value = value
        self.beyond = beyond
        super().__init__(
            "Template engine tag library does not support cross: "
            f"[{value.start}, {value.end}] crosses [{beyond.start}, {beyond.end}].",
            value,
        )


class UnpairedTagError(TemplateError):
    """A node tag that is not self-closing has no matching tail tag."""

    def __init__(self, name: str, position: "Interval"):
        self.name = name
        super().__init__(
            f"{name} type nodes must be used in pairs, "
            "and no corresponding tail tags are found.",
            position,
        )


class MissingAttributeError(TemplateError):
    """A node tag lacks one of its required attributes."""

    def __init__(self, name: str, attribute: str, position: "Interval | None" = None):
        self.name = name
        self.attribute = attribute
        super().__init__(
            f"The node {name} lacks the required property: {attribute}.", position
        )


class SourceNotFoundError(ThemecError, FileNotFoundError):
    """Raised when the template file to compile does not exist."""

    def __init__(self, path: str | Path):
        self.path = path
        super().__init__(f"File {path} does not exist.")

    def __str__(self) -> str:
        return f"File {self.path} does not exist."


class UnknownCompilerError(ThemecError):
    """Raised when a node names a compile routine nobody registered."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Compile routine not registered: {identifier}")


class ConfigError(ThemecError):
    """Raised for invalid or incomplete configuration."""

    pass

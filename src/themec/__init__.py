"""themec - template markup compiler.

Turns theme templates with `{% %}` node tags and `{{ }}` code tags into
target source text: tags are scanned, nested into a theme tree by interval
containment and compiled bottom-up, one pass per tag category.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from themec._version import __version__
from themec.compiler import Compiler, JinjaCompiler
from themec.errors import (
    ConfigError,
    CrossingIntervalError,
    MissingAttributeError,
    SourceNotFoundError,
    TemplateError,
    ThemecError,
    UnknownCompilerError,
    UnpairedTagError,
)
from themec.parser import Parser

if TYPE_CHECKING:
    from themec.config import ThemecConfig


def create_parser(config: Optional["ThemecConfig"] = None) -> Parser:
    """Parser with the Jinja2 compile routines, configured from themec.yaml."""
    from themec.config import ThemecConfig

    config = config or ThemecConfig()
    return Parser(JinjaCompiler(suffix=config.view.suffix), config.parser)


__all__ = [
    "__version__",
    "create_parser",
    "Parser",
    "Compiler",
    "JinjaCompiler",
    "ThemecError",
    "TemplateError",
    "CrossingIntervalError",
    "UnpairedTagError",
    "MissingAttributeError",
    "SourceNotFoundError",
    "UnknownCompilerError",
    "ConfigError",
]

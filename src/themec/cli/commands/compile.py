"""Compile command - compile one theme file"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from themec import create_parser

from ..utils import get_config, handle_error

log = logging.getLogger(__name__)


def compile_command(
    file: Path,
    output: Optional[Path] = None,
    config_file: Optional[Path] = None,
) -> None:
    """Compile `file` and print the result, or write it to `output`."""
    try:
        config = get_config(config_file)
        parser = create_parser(config)
        compiled = parser.do_compile(file, output)
    except Exception as exc:
        handle_error(exc)

    if output is not None:
        typer.echo(f"Wrote compiled theme to {output}")
    else:
        typer.echo(compiled, nl=False)

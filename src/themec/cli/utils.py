"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from themec.config import ThemecConfig, find_config_file, load_config
from themec.errors import ThemecError

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the themec CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - shows written cache files
    - Debug (THEMEC_DEBUG=1): DEBUG level - shows every pass
    """
    if os.environ.get("THEMEC_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=bool(os.environ.get("THEMEC_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("themec")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def get_config(path: Optional[Path] = None) -> ThemecConfig:
    """Load the given config file, or themec.yaml found from cwd, or defaults."""
    if path is not None:
        return load_config(path)
    found = find_config_file()
    if found is None:
        return ThemecConfig()
    return load_config(found)


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Handle and exit on themec errors."""
    if isinstance(error, ThemecError):
        exit_with_error(str(error))
    typer.secho(f"Unexpected error: {error}", err=True, fg=typer.colors.RED)
    sys.exit(1)

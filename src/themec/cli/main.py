"""themec CLI Main Entry Point

Usage:
    themec compile page.html               # Print compiled theme
    themec compile page.html -o page.j2    # Write compiled theme to file
    themec cache                           # Compile all themes of themec.yaml
    themec cache themes/ vendor/themes/    # Compile all themes of given dirs
    themec tree page.html --pass node      # Show the theme tree of a pass
    themec --version                       # Show version
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from themec._version import __version__
from themec.parser.spec import PASSES

from .commands import cache_command, compile_command, tree_command
from .utils import setup_logging

typer_app = typer.Typer(
    help="Template markup compiler - compiles theme tags to Jinja2 source.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"themec {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    setup_logging(verbose)


@typer_app.command("compile")
def compile_cmd(
    file: Path = typer.Argument(..., help="Theme file to compile."),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write compiled output to this file."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to themec.yaml file."
    ),
) -> None:
    """Compile one theme file."""
    compile_command(file, output, config)


@typer_app.command("cache")
def cache_cmd(
    paths: Optional[List[Path]] = typer.Argument(
        None, help="Theme directories (default: view paths of themec.yaml)."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to themec.yaml file."
    ),
) -> None:
    """Compile all theme files into the cache directory."""
    compile_paths = list(paths) if paths else None
    cache_command(compile_paths, config)


@typer_app.command("tree")
def tree_cmd(
    file: Path = typer.Argument(..., help="Theme file to inspect."),
    pass_name: str = typer.Option(
        "node", "-p", "--pass", help=f"Pass to build: {', '.join(PASSES)}."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to themec.yaml file."
    ),
) -> None:
    """Show the theme tree one pass builds for a file."""
    tree_command(file, pass_name, config)


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    typer_app(args=argv)


if __name__ == "__main__":
    app()

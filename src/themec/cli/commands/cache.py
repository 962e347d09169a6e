"""Cache command - compile every theme file of the configured directories"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from rich.progress import BarColumn, MofNCompleteColumn, Progress, TimeElapsedColumn

from themec import create_parser
from themec.cache import cache_path_for
from themec.config import ThemecConfig
from themec.errors import ConfigError

from ..utils import console, get_config, handle_error

log = logging.getLogger(__name__)


def find_files(path: Path, suffix: str, exclude: Iterable[str]) -> List[Path]:
    """Theme files under `path`, skipping excluded directory names."""
    excluded = set(exclude)
    files = []
    for candidate in sorted(path.rglob(f"*{suffix}")):
        relative = candidate.relative_to(path)
        if excluded.intersection(relative.parts[:-1]):
            continue
        if candidate.is_file():
            files.append(candidate)
    return files


def scan_paths(config: ThemecConfig, paths: Optional[List[Path]] = None) -> List[Path]:
    """Directories to cache: explicit ones, else theme path plus view.paths."""
    if paths:
        candidates = list(paths)
    else:
        candidates = []
        if config.view.theme_path is not None:
            candidates.append(config.view.theme_path)
        candidates.extend(config.view.paths)

    if not candidates:
        raise ConfigError("No view dir given and view.theme_path is not set.")

    for candidate in candidates:
        if not candidate.is_dir():
            raise ConfigError(f"View dir `{candidate}` does not exist.")
    return candidates


def cache_command(
    paths: Optional[List[Path]] = None,
    config_file: Optional[Path] = None,
) -> None:
    """Compile all theme files into the cache directory."""
    try:
        config = get_config(config_file)
        dirs = scan_paths(config, paths)
        parser = create_parser(config)

        console.print("Start to cache view.")
        for directory in dirs:
            files = find_files(directory, config.view.suffix, config.view.exclude)
            if not files:
                console.print(
                    f"[yellow]Compile files not found in path `{directory}` and skipped.[/yellow]"
                )
                continue

            console.print(f"[green]Start to compile path `{directory}`[/green]")
            with Progress(
                "[progress.description]{task.description}",
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=console,
            ) as progress:
                task = progress.add_task("[View:cache]", total=len(files))
                for file in files:
                    cache = cache_path_for(file, config.view.cache_path)
                    log.debug("compiling %s -> %s", file, cache)
                    parser.do_compile(file, cache)
                    progress.advance(task)
    except Exception as exc:
        handle_error(exc)

    console.print("[green]View files cache succeed.[/green]")

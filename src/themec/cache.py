"""Compiled template cache files."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

log = logging.getLogger(__name__)

CACHE_SUFFIX = ".j2"


def make_cache_file(path: str | Path, compiled: str, header: str) -> Path:
    """Write compiled output, prefixed by a generation header line."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(f"{header}\n{compiled}", encoding="utf-8")
    log.info("cached %s", p)
    return p


def cache_path_for(file: str | Path, cache_dir: str | Path) -> Path:
    """Cache file location for a theme file.

    The name combines a hash of the absolute theme path with its stem, so
    themes with the same name in different directories do not collide.
    """
    source = Path(file).resolve()
    digest = hashlib.md5(str(source).encode("utf-8")).hexdigest()
    return Path(cache_dir) / f"{digest}.{source.stem}{CACHE_SUFFIX}"


def is_stale(file: str | Path, cache: str | Path) -> bool:
    """Whether the cache is missing or older than its theme file."""
    source, cached = Path(file), Path(cache)
    if not cached.exists():
        return True
    return cached.stat().st_mtime < source.stat().st_mtime

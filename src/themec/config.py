"""Configuration parsing for themec.yaml

Schema:
- parser: delimiters per tag category and the pairing mode
- view: where themes live, where compiled caches go, which files to cache

Example:
    parser:
      tags:
        code: {left: "[[", right: "]]"}
      strict_pairing: false
    view:
      theme_path: themes
      cache_path: .themec/cache
      suffix: .html
      paths: [themes, vendor/acme/themes]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from themec.errors import ConfigError
from themec.parser.spec import DELIMITED_PASSES, TagDelimiter, resolve_tags

CONFIG_FILE = "themec.yaml"


class DelimiterConfig(BaseModel):
    """Left and right delimiter of one tag category."""

    left: str = Field(min_length=1)
    right: str = Field(min_length=1)


class ParserConfig(BaseModel):
    """Parser settings."""

    tags: Dict[str, DelimiterConfig] = Field(
        default_factory=dict, description="Delimiter overrides per tag category"
    )
    strict_pairing: bool = Field(
        default=False,
        description="Require tail tag names to equal head tag names exactly",
    )

    @field_validator("tags")
    @classmethod
    def only_delimited_categories(
        cls, value: Dict[str, DelimiterConfig]
    ) -> Dict[str, DelimiterConfig]:
        for category in value:
            if category not in DELIMITED_PASSES:
                raise ValueError(
                    f"Tag category '{category}' has no delimiters "
                    f"(expected one of: {', '.join(DELIMITED_PASSES)})"
                )
        return value

    def delimiters(self) -> Dict[str, TagDelimiter]:
        return resolve_tags(
            {name: TagDelimiter(d.left, d.right) for name, d in self.tags.items()}
        )


class ViewConfig(BaseModel):
    """Theme lookup and cache settings."""

    theme_path: Optional[Path] = Field(default=None, description="Theme directory")
    cache_path: Path = Field(
        default=Path(".themec/cache"), description="Compiled cache directory"
    )
    suffix: str = Field(default=".html", description="Theme file suffix")
    paths: List[Path] = Field(
        default_factory=list, description="Extra directories for batch caching"
    )
    exclude: List[str] = Field(
        default_factory=lambda: ["vendor", "node_modules"],
        description="Directory names skipped by batch caching",
    )


class ThemecConfig(BaseModel):
    """Main themec.yaml configuration."""

    parser: ParserConfig = Field(default_factory=ParserConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find themec.yaml in the start directory or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILE
        if candidate.exists():
            return candidate
    return None


def load_config(path: Path) -> ThemecConfig:
    """Load and validate a themec.yaml file.

    Relative view paths are resolved against the file's directory.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must hold a mapping at the top level")

    try:
        config = ThemecConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}:\n{exc}") from exc

    return _resolve_paths(config, path.parent)


def _resolve_paths(config: ThemecConfig, base: Path) -> ThemecConfig:
    view = config.view

    def resolve(p: Path) -> Path:
        return p if p.is_absolute() else base / p

    resolved = view.model_copy(
        update={
            "theme_path": resolve(view.theme_path) if view.theme_path else None,
            "cache_path": resolve(view.cache_path),
            "paths": [resolve(p) for p in view.paths],
        }
    )
    return config.model_copy(update={"view": resolved})

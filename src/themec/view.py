"""View - compiles theme files on demand and renders them."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from jinja2 import BaseLoader, Environment, TemplateNotFound

from themec.cache import cache_path_for, is_stale
from themec.config import ThemecConfig, ViewConfig
from themec.errors import ConfigError, SourceNotFoundError
from themec.parser import Parser
from themec.render import get_themec_jinja_env

log = logging.getLogger(__name__)


class CompilingLoader(BaseLoader):
    """Jinja2 loader serving compiled themes, so includes are compiled too."""

    def __init__(self, view: "View"):
        self.view = view

    def get_source(
        self, environment: Environment, template: str
    ) -> Tuple[str, str, Callable[[], bool]]:
        try:
            file = self.view.parse_display_file(template)
        except (SourceNotFoundError, ConfigError) as exc:
            raise TemplateNotFound(template) from exc

        cache = self.view.compile(file)
        mtime = cache.stat().st_mtime

        def uptodate() -> bool:
            return not is_stale(file, cache) and cache.stat().st_mtime == mtime

        # first line is the generation header
        source = cache.read_text(encoding="utf-8").partition("\n")[2]
        return source, str(file), uptodate


class View:
    """Theme view: template variables plus compile-and-render of theme files."""

    def __init__(self, parser: Parser, config: Optional[ViewConfig] = None):
        self.parser = parser
        self.config = config or ViewConfig()
        self.vars: Dict[str, Any] = {}
        self.environment = get_themec_jinja_env(CompilingLoader(self))

    def set_var(self, name: str | Dict[str, Any], value: Any = None) -> None:
        """Set one variable, or merge a mapping of variables."""
        if isinstance(name, dict):
            self.vars.update(name)
        else:
            self.vars[name] = value

    def get_var(self, name: Optional[str] = None) -> Any:
        """Value of `name`, or every variable when `name` is None."""
        if name is None:
            return self.vars
        return self.vars.get(name)

    def delete_var(self, names: Iterable[str]) -> None:
        for name in names:
            self.vars.pop(name, None)

    def clear_var(self) -> None:
        self.vars = {}

    def display(
        self,
        file: str | Path,
        variables: Optional[Dict[str, Any]] = None,
        ext: Optional[str] = None,
    ) -> str:
        """Compile (if needed) and render a theme file."""
        if variables:
            self.set_var(variables)

        path = self.parse_display_file(file, ext)
        template = self.environment.get_template(str(path))
        return template.render(**self.vars)

    def compile(self, file: str | Path) -> Path:
        """Compile a theme file into its cache unless the cache is fresh."""
        cache = self.parse_cache_path(file)
        if is_stale(file, cache):
            log.debug("compiling %s -> %s", file, cache)
            self.parser.do_compile(file, cache)
        return cache

    def parse_cache_path(self, file: str | Path) -> Path:
        return cache_path_for(file, self.config.cache_path)

    def parse_display_file(self, file: str | Path, ext: Optional[str] = None) -> Path:
        """Resolve a theme name or path to an existing theme file."""
        path = Path(file)
        if not path.is_file():
            path = self.parse_file(str(file), ext)

        if not path.is_file():
            raise SourceNotFoundError(path)

        return path

    def parse_file(self, file: str, ext: Optional[str] = None) -> Path:
        """Map a theme name such as `user/profile` to a path under the theme path."""
        file = file.strip()
        if Path(file).suffix:
            if Path(file).is_absolute() or self.config.theme_path is None:
                return Path(file)
            return self.config.theme_path / file

        if self.config.theme_path is None:
            raise ConfigError("Theme path must be set.")

        return self.config.theme_path / (file + (ext or self.config.suffix))


def create_view(config: Optional[ThemecConfig] = None) -> View:
    """Build a View with a JinjaCompiler parser from a themec config."""
    from themec import create_parser

    config = config or ThemecConfig()
    return View(create_parser(config), config.view)

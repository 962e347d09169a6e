"""Jinja2 environment for rendering compiled themes."""

from typing import Any, Dict, Optional

from jinja2 import BaseLoader, Environment


def get_themec_jinja_env(loader: Optional[BaseLoader] = None) -> Environment:
    """Create a Jinja2 Environment able to run JinjaCompiler output.

    `{% break %}`/`{% continue %}` need the loopcontrols extension.
    """
    return Environment(loader=loader, extensions=["jinja2.ext.loopcontrols"])


def render_string(template: str, context: Optional[Dict[str, Any]] = None) -> str:
    """Render compiled template text with context."""
    env = get_themec_jinja_env()
    return env.from_string(template).render(**(context or {}))

"""themec command line interface"""

from .main import app, typer_app

__all__ = ["app", "typer_app"]

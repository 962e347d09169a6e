"""CLI commands"""

from .cache import cache_command, find_files
from .compile import compile_command
from .tree import tree_command

__all__ = ["cache_command", "compile_command", "tree_command", "find_files"]

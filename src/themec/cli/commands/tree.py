"""Tree command - show the theme tree one pass builds"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.tree import Tree

from themec import create_parser
from themec.ast.node import ThemeNode
from themec.errors import SourceNotFoundError

from ..utils import console, get_config, handle_error


def _label(theme: ThemeNode) -> str:
    pos = theme.position
    if theme.is_body:
        kind = "[dim]body[/dim]"
    elif theme.is_attribute:
        kind = f"[magenta]attribute[/magenta] {escape(theme.content)!r}"
    elif theme.compiler:
        kind = f"[cyan]{escape(theme.compiler)}[/cyan]"
    else:
        kind = "[bold]root[/bold]"
    if not pos.is_located:
        return kind
    return f"{kind} [dim]{pos.start_line}:{pos.start_in} [{pos.start}, {pos.end}][/dim]"


def _add(branch: Tree, theme: ThemeNode) -> None:
    for child in theme.children:
        _add(branch.add(_label(child)), child)


def tree_command(
    file: Path,
    pass_name: str = "node",
    config_file: Optional[Path] = None,
) -> None:
    """Print the uncompiled theme tree of one pass over `file`."""
    try:
        if not file.is_file():
            raise SourceNotFoundError(file)
        parser = create_parser(get_config(config_file))
        root = parser.build_tree(file.read_text(encoding="utf-8"), pass_name)
    except Exception as exc:
        handle_error(exc)

    tree = Tree(f"[bold]{escape(str(file))}[/bold] ({pass_name})")
    _add(tree, root)
    console.print(tree)

"""Theme tree structures - positions, nodes and the interval tree builder."""

from themec.ast.node import HEAD, TAIL, ThemeNode
from themec.ast.position import (
    NO_POSITION,
    Interval,
    format_location,
    get_position,
    relocate,
)
from themec.ast.tree import Relation, add_theme_tree, position_relative

__all__ = [
    "HEAD",
    "TAIL",
    "ThemeNode",
    "Interval",
    "NO_POSITION",
    "get_position",
    "relocate",
    "format_location",
    "Relation",
    "position_relative",
    "add_theme_tree",
]

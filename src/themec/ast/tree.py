"""Theme tree builder - nests located spans by interval containment.

Two spans relate like two time periods: one is in front of, behind,
inside or around the other. Crossing spans cannot be nested and are
rejected.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from themec.ast.node import ThemeNode
from themec.ast.position import Interval
from themec.errors import CrossingIntervalError


class Relation(str, Enum):
    FRONT = "front"
    BEHIND = "behind"
    IN = "in"
    OUT = "out"


def position_relative(value: Interval, beyond: Interval) -> Relation:
    """Classify where `value` sits relative to `beyond`.

    Raises:
        CrossingIntervalError: The intervals overlap without containment.
    """
    # {% if %}value{% :if %} {% for %}beyond{% :for %}
    if value.end <= beyond.start:
        return Relation.FRONT

    # {% for %}beyond{% :for %} {% if %}value{% :if %}
    if value.start >= beyond.end:
        return Relation.BEHIND

    # {% for %} {% if %}value{% :if %} {% :for %}
    if value.start >= beyond.start and value.end <= beyond.end:
        return Relation.IN

    # {% if %} {% for %}beyond{% :for %} {% :if %}
    if value.start <= beyond.start and value.end >= beyond.end:
        return Relation.OUT

    raise CrossingIntervalError(value, beyond)


def add_theme_tree(top: ThemeNode, new: ThemeNode) -> ThemeNode:
    """Insert `new` into the children of `top`, keeping them nested and sorted.

    Siblings found inside `new` move into `new`; `new` moves into the
    sibling that contains it. `top` is updated in place and returned.
    """
    pending: Optional[ThemeNode] = new
    result = []

    for child in top.children:
        if pending is None:
            result.append(child)
            continue

        relative = position_relative(pending.position, child.position)
        if relative is Relation.FRONT:
            result.append(pending)
            result.append(child)
            pending = None
        elif relative is Relation.BEHIND:
            result.append(child)
        elif relative is Relation.IN:
            add_theme_tree(child, pending)
            result.append(child)
            pending = None
        else:
            add_theme_tree(pending, child)

    if pending is not None:
        result.append(pending)

    top.children = result
    return top

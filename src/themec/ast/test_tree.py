import pytest

from themec.ast.node import ThemeNode
from themec.ast.position import Interval
from themec.ast.tree import Relation, add_theme_tree, position_relative
from themec.errors import CrossingIntervalError


def span(start: int, end: int, name: str = "") -> ThemeNode:
    return ThemeNode(source=name, content=name, name=name, position=Interval(start, end))


def names(theme: ThemeNode) -> list:
    return [child.name for child in theme.children]


def test_position_relative_classifies():
    assert position_relative(Interval(0, 4), Interval(5, 9)) is Relation.FRONT
    assert position_relative(Interval(10, 12), Interval(0, 4)) is Relation.BEHIND
    assert position_relative(Interval(2, 3), Interval(0, 10)) is Relation.IN
    assert position_relative(Interval(0, 10), Interval(2, 3)) is Relation.OUT


def test_position_relative_crossing_raises():
    with pytest.raises(CrossingIntervalError) as ex_info:
        position_relative(Interval(0, 10), Interval(5, 15))
    assert ex_info.value.value == Interval(0, 10)
    assert ex_info.value.beyond == Interval(5, 15)
    assert "does not support cross" in str(ex_info.value)


def test_disjoint_siblings_sorted_in_any_insert_order():
    for order in (("a", "b"), ("b", "a")):
        nodes = {"a": span(0, 4, "a"), "b": span(10, 14, "b")}
        root = ThemeNode()
        for key in order:
            add_theme_tree(root, nodes[key])
        assert names(root) == ["a", "b"]


def test_new_node_moves_into_container():
    root = ThemeNode()
    add_theme_tree(root, span(0, 10, "outer"))
    add_theme_tree(root, span(3, 5, "inner"))

    assert names(root) == ["outer"]
    assert names(root.children[0]) == ["inner"]


def test_container_swallows_existing_siblings():
    root = ThemeNode()
    for child in (span(2, 3, "a"), span(5, 6, "b"), span(20, 21, "c")):
        add_theme_tree(root, child)

    add_theme_tree(root, span(0, 10, "outer"))

    assert names(root) == ["outer", "c"]
    assert names(root.children[0]) == ["a", "b"]


def test_deep_nesting_recurses():
    root = ThemeNode()
    add_theme_tree(root, span(0, 30, "l1"))
    add_theme_tree(root, span(5, 25, "l2"))
    add_theme_tree(root, span(10, 12, "l3"))
    add_theme_tree(root, span(26, 28, "l2b"))

    l1 = root.children[0]
    assert names(l1) == ["l2", "l2b"]
    assert names(l1.children[0]) == ["l3"]


def test_crossing_insert_raises():
    root = ThemeNode()
    add_theme_tree(root, span(0, 10, "a"))
    with pytest.raises(CrossingIntervalError):
        add_theme_tree(root, span(5, 15, "b"))

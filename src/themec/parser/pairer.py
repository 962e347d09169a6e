"""Node pairer - matches head and tail node tags into nodes.

Tags are discovered left to right but nesting has to be resolved innermost
first, so the discovered tags are consumed as a stack. Tail tags wait on a
second stack until a compatible head tag shows up.
"""

from __future__ import annotations

from typing import List

from themec.ast.node import TAIL, ThemeNode
from themec.ast.position import get_position
from themec.ast.tree import add_theme_tree
from themec.errors import UnpairedTagError
from themec.parser.spec import Registry


def tail_matches(head: ThemeNode, tail: ThemeNode, strict: bool = False) -> bool:
    """Whether `tail` closes `head`.

    By default the tail name only has to be a case-insensitive prefix of the
    head name; `strict` requires equal names.
    """
    head_name = (head.name or "").lower()
    tail_name = (tail.name or "").lower()
    if strict:
        return head_name == tail_name
    return head_name.startswith(tail_name)


def pack_nodes(
    tags: List[ThemeNode], text: str, registry: Registry, strict: bool = False
) -> List[ThemeNode]:
    """Assemble raw node tags into paired and self-closing nodes.

    Args:
        tags: Raw head/tail tags in discovery order.
        text: The pass text the tags were found in.
        registry: Tag registry, consulted for self-closing tags.
        strict: Require exact names when pairing tails with heads.

    Returns:
        Nodes in the order they were assembled (innermost and last first).

    Raises:
        UnpairedTagError: A head tag that is not self-closing has no tail.
    """
    tag_stack = list(tags)
    tail_stack: List[ThemeNode] = []
    nodes: List[ThemeNode] = []

    while tag_stack:
        tag = tag_stack.pop()

        if tag.type == TAIL:
            tail_stack.append(tag)
            continue

        tail = tail_stack.pop() if tail_stack else None
        if tail is None or not tail_matches(tag, tail, strict):
            if not registry.is_single(tag.name or ""):
                raise UnpairedTagError(tag.name or "", tag.position)

            if tail is not None:
                tail_stack.append(tail)

            node = ThemeNode(
                source=tag.source,
                content=tag.content,
                compiler=registry.node_compiler(tag.name or ""),
                name=tag.name,
                position=tag.position,
            )
        else:
            node = _pair(tag, tail, text, registry)

        add_theme_tree(
            node,
            ThemeNode(
                source=tag.source,
                content=tag.content,
                compiler="attributeNode",
                position=tag.position,
                is_attribute=True,
                parent_name=node.name,
            ),
        )
        nodes.append(node)

    return nodes


def _pair(head: ThemeNode, tail: ThemeNode, text: str, registry: Registry) -> ThemeNode:
    start = head.position.start
    source = text[start : tail.position.end + 1]
    node = ThemeNode(
        source=source,
        content=source,
        compiler=registry.node_compiler(head.name or ""),
        name=head.name,
        position=get_position(text, source, start),
    )

    body_start = head.position.end + 1
    body = text[body_start : tail.position.start]
    if body:
        add_theme_tree(
            node,
            ThemeNode(
                source=body,
                content=body,
                position=get_position(text, body, body_start),
                is_body=True,
            ),
        )

    return node

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from themec.ast.position import NO_POSITION, Interval

HEAD = "head"
TAIL = "tail"


@dataclass
class ThemeNode:
    """A located span of template text and its compile metadata.

    `source` is the text the node was cut from and never changes; `content`
    starts as the node's payload and is rewritten by child substitution and
    by the node's own compile routine.
    """

    source: str = ""
    content: str = ""
    compiler: Optional[str] = None  # routine identifier, None for structure only
    children: List["ThemeNode"] = field(default_factory=list)
    position: Interval = NO_POSITION

    name: Optional[str] = None
    type: Optional[str] = None  # HEAD or TAIL for raw node tags
    attribute: str = ""
    is_body: bool = False
    is_attribute: bool = False
    parent_name: Optional[str] = None
    attribute_list: Dict[str, Any] = field(default_factory=dict)

    def body(self) -> Optional["ThemeNode"]:
        for child in self.children:
            if child.is_body:
                return child
        return None

    def attribute_node(self) -> Optional["ThemeNode"]:
        for child in self.children:
            if child.is_attribute:
                return child
        return None

    def body_content(self) -> str:
        body = self.body()
        return body.content if body is not None else ""

    def attributes(self) -> Dict[str, Any]:
        attr = self.attribute_node()
        return attr.attribute_list if attr is not None else {}

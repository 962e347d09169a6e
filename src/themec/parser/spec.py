"""Parser spec - pass order, delimiters and the tag registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Mapping

if TYPE_CHECKING:
    from themec.compiler.base import Compiler


PASSES = ("global", "code", "node", "revert", "globalrevert")

# categories that are scanned with configurable delimiters; the revert
# passes match the fixed opaque marker grammar instead
DELIMITED_PASSES = ("global", "code", "node")


@dataclass(frozen=True)
class TagDelimiter:
    """Left and right delimiter of a tag category."""

    left: str
    right: str


DEFAULT_TAGS: Mapping[str, TagDelimiter] = MappingProxyType(
    {
        "global": TagDelimiter("{%", "%}"),
        "code": TagDelimiter("{{", "}}"),
        "node": TagDelimiter("{%", "%}"),
    }
)


@dataclass(frozen=True)
class NodeTag:
    """Registry entry of a node tag."""

    compiler: str  # e.g. "if" -> routine "ifNode"
    single: bool = False  # self-closing, no tail tag required


@dataclass(frozen=True)
class Registry:
    """Read-only tag registry shared by every compile of a parser.

    code: code tag name -> routine base name (suffixed with "Code")
    node: node top-level tag name -> NodeTag
    """

    code: Mapping[str, str] = field(default_factory=dict)
    node: Mapping[str, NodeTag] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", MappingProxyType(dict(self.code)))
        object.__setattr__(
            self,
            "node",
            MappingProxyType({name.lower(): tag for name, tag in self.node.items()}),
        )

    @classmethod
    def from_compiler(cls, compiler: "Compiler") -> "Registry":
        return cls(code=dict(compiler.code_tags), node=dict(compiler.node_tags))

    def code_compiler(self, name: str) -> str:
        return f"{self.code[name]}Code"

    def node_compiler(self, name: str) -> str:
        return f"{name}Node"

    def is_single(self, name: str) -> bool:
        for tag in self.node.values():
            if tag.compiler == name:
                return tag.single
        return False


def resolve_tags(overrides: Dict[str, TagDelimiter] | None = None) -> Dict[str, TagDelimiter]:
    """Merge delimiter overrides onto the defaults."""
    tags = dict(DEFAULT_TAGS)
    if overrides:
        tags.update(overrides)
    return tags

"""Tag scanner - finds the tags of one pass category in a text."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Pattern

from themec.ast.node import HEAD, TAIL, ThemeNode
from themec.ast.position import get_position
from themec.parser.spec import DEFAULT_TAGS, Registry, TagDelimiter

REVERT_PATTERN = re.compile(r"__##revert##START##\d+@(.+?)##END##revert##__")
GLOBALREVERT_PATTERN = re.compile(r"__##global##START##\d+@(.+?)##END##global##__")


def _names_alternation(names: Iterable[str]) -> str:
    # longest first so that e.g. "elseif" is tried before "else"
    ordered = sorted(names, key=len, reverse=True)
    return "|".join(re.escape(name) for name in ordered)


def _char_class(text: str) -> str:
    return "".join(re.escape(char) for char in dict.fromkeys(text))


class TagScanner:
    """Compiled tag patterns for every pass category.

    Patterns are built once from the registry and the delimiters; scanning
    keeps no state, so one scanner serves any number of compiles.
    """

    def __init__(
        self, registry: Registry, tags: Optional[Dict[str, TagDelimiter]] = None
    ):
        self.registry = registry
        self.tags = dict(tags or DEFAULT_TAGS)

        self.global_pattern = self._global_pattern(self.tags["global"])
        self.code_pattern = self._code_pattern(self.tags["code"])
        self.node_pattern = self._node_pattern(self.tags["node"])

    def _global_pattern(self, tag: TagDelimiter) -> Pattern[str]:
        left, right = re.escape(tag.left), re.escape(tag.right)
        return re.compile(
            rf"{left}\s*tagself\s*{right}(.+?){left}\s*:\s*tagself\s*{right}",
            re.IGNORECASE | re.DOTALL | re.ASCII,
        )

    def _code_pattern(self, tag: TagDelimiter) -> Optional[Pattern[str]]:
        if not self.registry.code:
            return None
        names = _names_alternation(self.registry.code)
        left, right = re.escape(tag.left), re.escape(tag.right)
        return re.compile(rf"{left}\s*({names})(|.+?){right}", re.DOTALL)

    def _node_pattern(self, tag: TagDelimiter) -> Optional[Pattern[str]]:
        if not self.registry.node:
            return None
        names = _names_alternation(self.registry.node)
        left, right = re.escape(tag.left), re.escape(tag.right)
        stop = _char_class(tag.right)
        return re.compile(
            rf"{left}\s*(:?)\s*(({names})(:[^\s{stop}]+)?)(\s[^{stop}]*?)?{right}",
            re.IGNORECASE | re.DOTALL | re.ASCII,
        )

    def scan_global(self, text: str) -> List[ThemeNode]:
        """Find `tagself ... :tagself` spans; each is one node."""
        themes = []
        for match in self.global_pattern.finditer(text):
            source = match.group(0)
            themes.append(
                ThemeNode(
                    source=source,
                    content=match.group(1).strip(),
                    compiler="global",
                    position=get_position(text, source, match.start()),
                )
            )
        return themes

    def scan_code(self, text: str) -> List[ThemeNode]:
        """Find code tags such as `{{ $name }}`; the payload is the content."""
        if self.code_pattern is None:
            return []

        themes = []
        for match in self.code_pattern.finditer(text):
            source = match.group(0)
            name = match.group(1).strip()
            themes.append(
                ThemeNode(
                    source=source,
                    content=match.group(2).strip(),
                    compiler=self.registry.code_compiler(name),
                    name=name,
                    position=get_position(text, source, match.start()),
                )
            )
        return themes

    def scan_node(self, text: str) -> List[ThemeNode]:
        """Find raw head and tail node tags, in discovery order."""
        if self.node_pattern is None:
            return []

        themes = []
        for match in self.node_pattern.finditer(text):
            source = match.group(0)
            top_name = match.group(3).lower()
            tag_type = TAIL if match.group(1) == ":" else HEAD
            attribute = (match.group(5) or "").strip() if tag_type == HEAD else ""
            themes.append(
                ThemeNode(
                    source=source,
                    content=attribute,
                    name=self.registry.node[top_name].compiler,
                    type=tag_type,
                    attribute=attribute,
                    position=get_position(text, source, match.start()),
                )
            )
        return themes

    def scan_revert(self, text: str) -> List[ThemeNode]:
        return self._scan_marker(REVERT_PATTERN, "revert", text)

    def scan_globalrevert(self, text: str) -> List[ThemeNode]:
        return self._scan_marker(GLOBALREVERT_PATTERN, "globalrevert", text)

    def _scan_marker(
        self, pattern: Pattern[str], compiler: str, text: str
    ) -> List[ThemeNode]:
        themes = []
        for match in pattern.finditer(text):
            source = match.group(0)
            themes.append(
                ThemeNode(
                    source=source,
                    content=match.group(1),
                    compiler=compiler,
                    position=get_position(text, source, match.start()),
                )
            )
        return themes

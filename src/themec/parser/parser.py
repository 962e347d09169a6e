"""Parser - runs the compile passes over a template.

Each pass builds a fresh theme tree for its tag category, compiles the tree
bottom-up and hands the resulting text to the next pass:

    global -> code -> node -> revert -> globalrevert

`global`/`globalrevert` and `code`/`revert` are protect/restore pairs: the
first pass of a pair replaces spans with opaque markers so that later passes
cannot mistake them for tags, the second decodes the markers again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from themec.ast.node import ThemeNode
from themec.ast.position import get_position, relocate
from themec.ast.tree import add_theme_tree
from themec.cache import make_cache_file
from themec.errors import SourceNotFoundError, TemplateError
from themec.parser.pairer import pack_nodes
from themec.parser.scanner import TagScanner
from themec.parser.spec import PASSES, Registry

if TYPE_CHECKING:
    from themec.compiler.base import Compiler
    from themec.config import ParserConfig

log = logging.getLogger(__name__)


@dataclass
class _CompileState:
    """Mutable state of one `do_compile` call."""

    source_file: Optional[Path] = None
    source_text: str = ""  # template as given, before any pass
    text: str = ""  # input of the running pass

    def locate(self, exc: TemplateError) -> None:
        """Attach a location in the template as given to `exc`.

        Later passes see rewritten text, so the offending span is looked up
        again in the source text; if it no longer occurs there the pass text
        is reported instead.
        """
        if exc.position is not None and self.text != self.source_text:
            moved = relocate(exc.position, self.text, self.source_text)
            if moved is not None:
                exc.position = moved
                exc.attach_location(self.source_text, self.source_file)
                return
        exc.attach_location(self.text, self.source_file)


class Parser:
    """Template parser driving a compiler through the fixed passes.

    The registry, scanner patterns and routine table are built once and only
    read afterwards; everything a compile mutates lives in a per-call
    `_CompileState`, so one parser can serve concurrent compiles as long as
    its compiler's routines keep no state of their own.
    """

    def __init__(self, compiler: "Compiler", config: Optional["ParserConfig"] = None):
        from themec.config import ParserConfig

        self.compiler = compiler
        self.config = config or ParserConfig()
        self.registry = Registry.from_compiler(compiler)
        self.scanner = TagScanner(self.registry, self.config.delimiters())
        self._parses: Dict[str, Callable[[str], List[ThemeNode]]] = {
            "global": self.scanner.scan_global,
            "code": self.scanner.scan_code,
            "node": self._node_parse,
            "revert": self.scanner.scan_revert,
            "globalrevert": self.scanner.scan_globalrevert,
        }

    def do_compile(
        self,
        file: str | Path,
        cache_path: Optional[str | Path] = None,
        is_content: bool = False,
    ) -> str:
        """Compile a template file (or raw template text) through every pass.

        Args:
            file: Template file path, or the template text when `is_content`.
            cache_path: Where to write the compiled output, if anywhere.
            is_content: Treat `file` as template text instead of a path.

        Returns:
            The compiled text.

        Raises:
            SourceNotFoundError: `file` is not an existing file.
            TemplateError: Crossing or unpaired tags, bad attributes.
        """
        state = _CompileState()
        if is_content:
            compiled = str(file)
        else:
            path = Path(file)
            if not path.is_file():
                raise SourceNotFoundError(path)
            compiled = path.read_text(encoding="utf-8")
            state.source_file = path
        state.source_text = compiled

        for pass_name in PASSES:
            state.text = compiled
            try:
                root = self._build_tree(pass_name, compiled)
                compiled = self.compile_theme_tree(root)
            except TemplateError as exc:
                state.locate(exc)
                raise

        if cache_path is not None:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            make_cache_file(cache_path, compiled, self.compiler.cache_header(timestamp))

        return compiled

    def compile_string(self, text: str) -> str:
        """Compile template text without touching the filesystem."""
        return self.do_compile(text, is_content=True)

    def build_tree(self, text: str, pass_name: str = "node") -> ThemeNode:
        """Build the uncompiled theme tree one pass would compile for `text`."""
        if pass_name not in self._parses:
            raise ValueError(f"Unknown pass: {pass_name}")
        try:
            return self._build_tree(pass_name, text)
        except TemplateError as exc:
            exc.attach_location(text)
            raise

    def _build_tree(self, pass_name: str, text: str) -> ThemeNode:
        root = ThemeNode(source=text, content=text, position=get_position(text, text))

        themes = self._parses[pass_name](text)
        log.debug("pass %s: %d tags", pass_name, len(themes))

        for theme in themes:
            add_theme_tree(root, theme)
        return root

    def _node_parse(self, text: str) -> List[ThemeNode]:
        tags = self.scanner.scan_node(text)
        return pack_nodes(tags, text, self.registry, self.config.strict_pairing)

    def compile_theme_tree(self, root: ThemeNode) -> str:
        self.compile_theme(root)
        return root.content

    def compile_theme(self, theme: ThemeNode) -> None:
        """Compile `theme` bottom-up: children first, then substitute, then self."""
        cursor = 0
        for child in theme.children:
            self.compile_theme(child)

            start = theme.content.find(child.source, cursor)
            if start < 0:
                continue
            end = start + len(child.source)
            theme.content = theme.content[:start] + child.content + theme.content[end:]
            cursor = start + len(child.content)

        self.compiler.compile(theme)

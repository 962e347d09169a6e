"""themec parser - scanning, pairing and the compile passes."""

from themec.parser.parser import Parser
from themec.parser.spec import DEFAULT_TAGS, PASSES, NodeTag, Registry, TagDelimiter

__all__ = ["Parser", "PASSES", "DEFAULT_TAGS", "NodeTag", "Registry", "TagDelimiter"]

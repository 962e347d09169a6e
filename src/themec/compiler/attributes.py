"""Attribute parsing for node head tags."""

import re
from typing import Dict, Optional

ATTRIBUTE_PATTERN = re.compile(
    r"""(?:^|(?<=\s))([A-Za-z_][\w\-]*)\s*=(?!=)\s*(?:"([^"]*)"|'([^']*)'|([^\s"']+))"""
)


def parse_attributes(text: str, default_key: Optional[str] = None) -> Dict[str, str]:
    """Parse `key="value"` style attributes of a head tag.

    Supports double quoted, single quoted and bare values. When the text
    holds no `key=value` pair at all it is stored whole under
    `default_key`, so `{% if x > 1 %}` reads as `condition="x > 1"`.

    Example:
        >>> parse_attributes('for=items value="item"')
        {'for': 'items', 'value': 'item'}
        >>> parse_attributes("x > 1", "condition")
        {'condition': 'x > 1'}
    """
    text = text.strip()
    attributes: Dict[str, str] = {}
    if not text:
        return attributes

    for match in ATTRIBUTE_PATTERN.finditer(text):
        key, double, single, bare = match.groups()
        if double is not None:
            value = double
        elif single is not None:
            value = single
        else:
            value = bare
        attributes[key.lower()] = value

    if not attributes and default_key:
        attributes[default_key] = text

    return attributes

"""Opaque markers - hide literal text from later passes.

A marker looks like `__##revert##START##1234567@<base64>##END##revert##__`;
the revert passes scan for exactly this grammar and decode the payload.
"""

from __future__ import annotations

import base64
import random

REVERT = "revert"
GLOBAL = "global"


def encode(content: str, kind: str) -> str:
    rand = random.randint(1000000, 9999999)
    payload = base64.b64encode(content.encode("utf-8")).decode("ascii")
    return f"__##{kind}##START##{rand}@{payload}##END##{kind}##__"


def revert_encode(content: str) -> str:
    """Protect compiled code output until the revert pass."""
    return encode(content, REVERT)


def global_encode(content: str) -> str:
    """Protect a `tagself` literal until the globalrevert pass."""
    return encode(content, GLOBAL)


def decode(payload: str) -> str:
    return base64.b64decode(payload).decode("utf-8")

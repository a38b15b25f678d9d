# -*- coding: utf-8 -*-
"""
Contracts tooling: deploy/call helpers over a local `chainsim.Host`, and the
`tokensale-sim` command line.
"""
from __future__ import annotations

from typing import Any

__all__ = ["jsonable"]


def jsonable(obj: Any) -> Any:
    """Recursively convert bytes to 0x-hex so `obj` can be JSON-encoded."""
    if isinstance(obj, (bytes, bytearray)):
        return "0x" + bytes(obj).hex()
    if isinstance(obj, dict):
        return {str(k): jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [jsonable(v) for v in obj]
    return obj

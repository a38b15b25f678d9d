"""
chainsim.runtime.call_api — raw byte-level calls between contracts.

    res = call(token_address, encode_call("balanceOf(address)", [me]))
    if res.success and len(res.output) == 32: ...

The callee runs in its own frame and journal checkpoint. Whatever goes wrong
on the other side (revert, malformed calldata, unknown selector, call depth
exceeded) comes back as `success=False` with the revert payload in `output`;
it never propagates into the caller. An address without code accepts any call
and returns empty output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import ExecError, Revert
from .context import current_frame, current_host, normalize_address

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallResult:
    success: bool
    output: bytes = b""
    error: Optional[BaseException] = None

    def __bool__(self) -> bool:
        return self.success


def call(to: bytes, data: bytes, value: int = 0) -> CallResult:
    frame = current_frame()
    host = current_host()
    dest = normalize_address(to)
    try:
        out = host.call(frame.address, dest, bytes(data), value, depth=frame.depth + 1)
    except Revert as exc:
        return CallResult(False, exc.return_data, exc.error or exc)
    except ExecError as exc:
        log.debug("outbound call failed before entry: %s", exc)
        return CallResult(False, b"", exc)
    return CallResult(True, out)


__all__ = ["CallResult", "call"]

"""
chainsim.runtime.context — call frames and address helpers.

A `CallFrame` is the only view of the environment a contract gets:

  sender   the immediate caller (an account or another contract)
  address  the contract's own address
  value    native currency attached to this call (already credited)
  depth    nesting level, 0 for a top-level transaction

Frames live in a context variable so nested calls push and pop naturally and
the contract-facing APIs (storage, events, treasury, calls) can find "the
current contract" without being handed anything.

Design notes
------------
- Addresses are raw 20-byte values. Hex strings (with or without "0x") are
  accepted by helpers and normalized to bytes.
- All numeric fields are validated to be non-negative.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from ..config import ADDRESS_LEN
from ..errors import InvalidAccess

# ----------------------------- helpers ----------------------------- #


class ContextError(ValueError):
    """Validation or coercion failure for frame fields and addresses."""


def _strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_bytes(value: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Coerce `value` to bytes.
    - If str, interpret as hex (with or without '0x'); odd-length hex is rejected.
    - If a bytes-like object, copy to immutable bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        h = _strip_0x(value.strip())
        if len(h) % 2 != 0:
            raise ContextError(f"hex string must have even length, got {len(h)}")
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise ContextError(f"invalid hex string: {value!r}") from e
    raise ContextError(f"cannot convert type {type(value).__name__} to bytes")


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


def normalize_address(value: Union[bytes, bytearray, memoryview, str]) -> bytes:
    b = to_bytes(value)
    if len(b) != ADDRESS_LEN:
        raise ContextError(f"address must be exactly {ADDRESS_LEN} bytes, got {len(b)}")
    return b


def _require_non_negative_int(name: str, v: Any) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ContextError(f"{name} must be int, got {type(v).__name__}")
    if v < 0:
        raise ContextError(f"{name} must be non-negative, got {v}")
    return v


# ----------------------------- models ------------------------------ #


@dataclass(frozen=True)
class CallFrame:
    sender: bytes
    address: bytes
    value: int = 0
    depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", normalize_address(self.sender))
        object.__setattr__(self, "address", normalize_address(self.address))
        object.__setattr__(self, "value", _require_non_negative_int("value", self.value))
        object.__setattr__(self, "depth", _require_non_negative_int("depth", self.depth))

    def to_dict(self) -> dict:
        return {
            "sender": to_hex(self.sender),
            "address": to_hex(self.address),
            "value": self.value,
            "depth": self.depth,
        }


# ------------------------- active frame ---------------------------- #

_FRAME: ContextVar[Optional[CallFrame]] = ContextVar("chainsim_frame", default=None)
_HOST: ContextVar[Optional[Any]] = ContextVar("chainsim_host", default=None)


def current_frame() -> CallFrame:
    frame = _FRAME.get()
    if frame is None:
        raise InvalidAccess("no active call frame", op="frame")
    return frame


def current_host() -> Any:
    host = _HOST.get()
    if host is None:
        raise InvalidAccess("no active host", op="host")
    return host


def in_frame() -> bool:
    return _FRAME.get() is not None


@contextmanager
def enter_frame(host: Any, frame: CallFrame) -> Iterator[CallFrame]:
    """Make `frame` (running on `host`) the active frame for the block."""
    t_host = _HOST.set(host)
    t_frame = _FRAME.set(frame)
    try:
        yield frame
    finally:
        _FRAME.reset(t_frame)
        _HOST.reset(t_host)


__all__ = [
    "ContextError",
    "to_bytes",
    "to_hex",
    "normalize_address",
    "CallFrame",
    "current_frame",
    "current_host",
    "in_frame",
    "enter_frame",
]

"""
chainsim.runtime.storage_api — contract-facing key/value storage.

Every call is scoped to the current frame's contract address, so two
contracts using the same key never collide. Reads and writes go through the
host's journal; a reverted frame loses its writes automatically.

Public API (re-exported by chainsim.stdlib.storage)
---------------------------------------------------
- get(key: bytes) -> Optional[bytes]
- set(key: bytes, value: bytes) -> None
- delete(key: bytes) -> None
- exists(key: bytes) -> bool
- get_int(key: bytes) -> int                     # big-endian, unsigned, 0 if unset
- set_int(key: bytes, value: int) -> None        # big-endian, unsigned

Notes
-----
Key and value length caps are read from chainsim.config. Storing an empty
value (or the integer 0) deletes the key.
"""

from __future__ import annotations

from typing import Optional

from ..config import load_config
from ..errors import ExecError
from .context import current_frame, current_host


def _invalid(msg: str, **data: object) -> ExecError:
    return ExecError(message=msg, code="STORAGE_INVALID", data=dict(data) or None)


# --------------------------- Validation helpers --------------------------- #


def _check_key(key: bytes) -> bytes:
    if not isinstance(key, (bytes, bytearray)):
        raise _invalid("storage key must be bytes")
    if len(key) == 0:
        raise _invalid("storage key must be non-empty")
    cap = load_config().max_storage_key_bytes
    if len(key) > cap:
        raise _invalid(f"storage key too long (>{cap} bytes)", len=len(key))
    return bytes(key)


def _check_value(value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise _invalid("storage value must be bytes")
    cap = load_config().max_storage_value_bytes
    if len(value) > cap:
        raise _invalid(f"storage value too large (>{cap} bytes)", len=len(value))
    return bytes(value)


# --------------------------- Contract-facing API --------------------------- #


def get(key: bytes) -> Optional[bytes]:
    """Return the value for `key`, or None if not set."""
    k = _check_key(key)
    return current_host().journal.storage_get(current_frame().address, k)


def set(key: bytes, value: bytes) -> None:
    """Set `key` to `value` (overwrites existing)."""
    k = _check_key(key)
    v = _check_value(value)
    current_host().journal.storage_set(current_frame().address, k, v)


def delete(key: bytes) -> None:
    """Delete `key` if present (no-op otherwise)."""
    k = _check_key(key)
    current_host().journal.storage_delete(current_frame().address, k)


def exists(key: bytes) -> bool:
    return get(key) is not None


# ------------------------------ Typed helpers ----------------------------- #


def get_int(key: bytes) -> int:
    """Read a big-endian unsigned integer at `key`; unset reads as 0."""
    raw = get(key)
    if not raw:
        return 0
    return int.from_bytes(raw, byteorder="big", signed=False)


def set_int(key: bytes, value: int) -> None:
    """
    Store `value` as a big-endian unsigned integer. Enforces 0 <= value <= 2^256-1.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid("set_int value must be int")
    if value < 0 or value > load_config().uint_max:
        raise _invalid("set_int out of range (must fit in 256 bits)")
    if value == 0:
        delete(key)
        return
    width = (value.bit_length() + 7) // 8
    set(key, value.to_bytes(width, "big"))


__all__ = ["get", "set", "delete", "exists", "get_int", "set_int"]

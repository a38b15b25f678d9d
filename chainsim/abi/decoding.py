"""
Inverse decoder for the word-oriented ABI (see encoding.py).

Conventions mirrored from encoder:
- uintN:    32-byte big-endian word; strict mode rejects values wider than N
- bool:     word equal to 0 or 1
- address:  upper 12 bytes of the word must be zero in strict mode
- string:   head word is an offset to (length word || padded UTF-8 bytes)

Top-level:
- decode_values(types, data, strict=True) -> tuple
- split_call(data) -> (selector, args_bytes)

Every malformed input raises chainsim.errors.AbiDecodeError, never IndexError
or ValueError, so callers can treat "malformed" as one failure class.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from ..config import ADDRESS_LEN, WORD_BYTES
from ..errors import AbiDecodeError
from .selectors import SELECTOR_LEN
from .types import (AbiType, AddressType, BoolType, StringType, UIntType,
                    parse_types)

__all__ = [
    "decode_uint",
    "decode_bool",
    "decode_address",
    "decode_string",
    "decode_value",
    "decode_values",
    "split_call",
]


def _word(buf: bytes, offset: int, type_name: str) -> bytes:
    end = offset + WORD_BYTES
    if offset < 0 or end > len(buf):
        raise AbiDecodeError("data too short", type_name=type_name, offset=offset)
    return buf[offset:end]


# ──────────────────────────────────────────────────────────────────────────────
# Primitive decoders
# ──────────────────────────────────────────────────────────────────────────────


def decode_uint(buf: bytes, offset: int = 0, *, bits: int = 256, strict: bool = True) -> int:
    v = int.from_bytes(_word(buf, offset, f"uint{bits}"), "big")
    if strict and v.bit_length() > bits:
        raise AbiDecodeError(f"uint{bits} out of range", type_name=f"uint{bits}", offset=offset)
    return v


def decode_bool(buf: bytes, offset: int = 0, *, strict: bool = True) -> bool:
    v = int.from_bytes(_word(buf, offset, "bool"), "big")
    if strict and v not in (0, 1):
        raise AbiDecodeError("bool must be 0 or 1", type_name="bool", offset=offset)
    return v != 0


def decode_address(buf: bytes, offset: int = 0, *, strict: bool = True) -> bytes:
    w = _word(buf, offset, "address")
    pad = WORD_BYTES - ADDRESS_LEN
    if strict and any(w[:pad]):
        raise AbiDecodeError("dirty address padding", type_name="address", offset=offset)
    return w[pad:]


def decode_string(buf: bytes, head_offset: int, *, base: int = 0) -> str:
    start = base + int.from_bytes(_word(buf, head_offset, "string"), "big")
    length = int.from_bytes(_word(buf, start, "string"), "big")
    data_start = start + WORD_BYTES
    data_end = data_start + length
    if data_end > len(buf):
        raise AbiDecodeError("string data out of bounds", type_name="string", offset=start)
    try:
        return buf[data_start:data_end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise AbiDecodeError("string is not valid UTF-8", type_name="string", offset=start) from e


def decode_value(buf: bytes, offset: int, typ: AbiType, *, base: int = 0, strict: bool = True) -> Any:
    if isinstance(typ, UIntType):
        return decode_uint(buf, offset, bits=typ.bits, strict=strict)
    if isinstance(typ, BoolType):
        return decode_bool(buf, offset, strict=strict)
    if isinstance(typ, AddressType):
        return decode_address(buf, offset, strict=strict)
    if isinstance(typ, StringType):
        return decode_string(buf, offset, base=base)
    raise AbiDecodeError(f"unsupported type: {typ!r}")


# ──────────────────────────────────────────────────────────────────────────────
# Sequences
# ──────────────────────────────────────────────────────────────────────────────


def decode_values(types: Sequence[Any], data: bytes, *, strict: bool = True) -> Tuple[Any, ...]:
    """
    Decode a head/tail-encoded tuple. Trailing bytes beyond the encoded values
    are ignored, as on-chain decoders do.
    """
    parsed = parse_types(types)
    buf = bytes(data)
    out: List[Any] = []
    for i, typ in enumerate(parsed):
        out.append(decode_value(buf, i * WORD_BYTES, typ, base=0, strict=strict))
    return tuple(out)


def split_call(data: bytes) -> Tuple[bytes, bytes]:
    """Split calldata into (selector, encoded args)."""
    buf = bytes(data)
    if len(buf) < SELECTOR_LEN:
        raise AbiDecodeError("calldata shorter than a selector", offset=0)
    return buf[:SELECTOR_LEN], buf[SELECTOR_LEN:]

"""
Word-oriented ABI encoding for cross-contract calls.

Layout
------
Every static value occupies one 32-byte word:

- uintN:    big-endian, left-padded with zeros
- bool:     word with value 0 or 1
- address:  20 raw bytes right-aligned in the word (upper 12 bytes zero)

Dynamic values (string) are placed in the *tail*; the head holds the byte
offset of the tail section measured from the start of the argument block:

- string:   length word || UTF-8 bytes right-padded with zeros to 32

Calls and errors
----------------
encode_call(signature, args)  => selector(signature) || encode_values(types, args)

Structured errors reuse the same shape with the error signature, e.g.
`InsufficientBalance(address,uint256,uint256)`.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from ..config import WORD_BYTES
from .selectors import selector, split_signature
from .types import (AbiType, AddressType, BoolType, StringType, UIntType,
                    ValidationError, coerce_address, coerce_bool,
                    coerce_string, coerce_uint, parse_types)

__all__ = [
    "encode_uint",
    "encode_bool",
    "encode_address",
    "encode_string",
    "encode_value",
    "encode_values",
    "encode_call",
]


# ──────────────────────────────────────────────────────────────────────────────
# Primitive encoders
# ──────────────────────────────────────────────────────────────────────────────


def encode_uint(value: Any, *, bits: int = 256) -> bytes:
    v = coerce_uint(value, bits=bits)
    return v.to_bytes(WORD_BYTES, "big")


def encode_bool(value: Any) -> bytes:
    return encode_uint(1 if coerce_bool(value) else 0)


def encode_address(value: Any) -> bytes:
    addr = coerce_address(value)
    return addr.rjust(WORD_BYTES, b"\x00")


def _pad_right(b: bytes) -> bytes:
    rem = len(b) % WORD_BYTES
    return b if rem == 0 else b + b"\x00" * (WORD_BYTES - rem)


def encode_string(value: Any) -> bytes:
    """Tail encoding of a string: length word followed by padded UTF-8 bytes."""
    raw = coerce_string(value).encode("utf-8")
    return encode_uint(len(raw)) + _pad_right(raw)


def encode_value(value: Any, typ: AbiType) -> bytes:
    """Encode one *static* value as a single word."""
    if isinstance(typ, UIntType):
        return encode_uint(value, bits=typ.bits)
    if isinstance(typ, BoolType):
        return encode_bool(value)
    if isinstance(typ, AddressType):
        return encode_address(value)
    if isinstance(typ, StringType):
        raise ValidationError("string is dynamic; use encode_values")
    raise ValidationError(f"unsupported type: {typ!r}")


# ──────────────────────────────────────────────────────────────────────────────
# Sequences
# ──────────────────────────────────────────────────────────────────────────────


def encode_values(types: Sequence[Any], values: Sequence[Any]) -> bytes:
    """
    Head/tail encoding of an argument (or return) tuple.
    """
    parsed = parse_types(types)
    if len(parsed) != len(values):
        raise ValidationError(f"expected {len(parsed)} values, got {len(values)}")

    head_len = WORD_BYTES * len(parsed)
    heads: List[bytes] = []
    tails: List[bytes] = []
    tail_len = 0
    for typ, val in zip(parsed, values):
        if typ.dynamic:
            heads.append(encode_uint(head_len + tail_len))
            t = encode_string(val)
            tails.append(t)
            tail_len += len(t)
        else:
            heads.append(encode_value(val, typ))
    return b"".join(heads) + b"".join(tails)


def encode_call(signature: str, args: Sequence[Any] = ()) -> bytes:
    """selector(signature) || encoded args."""
    _, types = split_signature(signature)
    return selector(signature) + encode_values(types, list(args))

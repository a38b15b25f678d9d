"""
ABI type definitions and validation for the call boundary.

The surface is intentionally small and mirrors the word-oriented layout used
by the token contracts:
  - uintN (N in 8..256, multiple of 8; canonical default = 256 bits)
  - bool
  - address (20 raw bytes; hex strings are accepted and normalized)
  - string (UTF-8, dynamic)

Utilities here *only* coerce/validate Python values; the on-wire encoding is
implemented in chainsim.abi.encoding/decoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from ..config import ADDRESS_LEN

__all__ = [
    "ABITypeError",
    "ValidationError",
    "ZERO_ADDRESS",
    "coerce_bool",
    "coerce_uint",
    "coerce_address",
    "coerce_string",
    "UIntType",
    "BoolType",
    "AddressType",
    "StringType",
    "AbiType",
    "parse_type",
    "parse_types",
]

# ──────────────────────────────────────────────────────────────────────────────
# Errors
# ──────────────────────────────────────────────────────────────────────────────


class ABITypeError(TypeError):
    """Raised when an ABI type spec is malformed or unsupported."""


class ValidationError(ValueError):
    """Raised when a Python value does not conform to an ABI type."""


ZERO_ADDRESS: bytes = b"\x00" * ADDRESS_LEN


# ──────────────────────────────────────────────────────────────────────────────
# Scalar coercion helpers
# ──────────────────────────────────────────────────────────────────────────────


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValidationError("bool must be True/False (or 0/1)")


def coerce_uint(value: Any, *, bits: int = 256) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"uint{bits} must be int")
    if value < 0:
        raise ValidationError(f"uint{bits} cannot be negative")
    if value.bit_length() > bits:
        raise ValidationError(f"uint{bits} overflow")
    return value


def coerce_address(value: Any) -> bytes:
    """
    Accept 20 raw bytes or a 0x-prefixed 40-digit hex string.
    """
    if isinstance(value, str):
        h = value[2:] if value.startswith(("0x", "0X")) else value
        try:
            value = bytes.fromhex(h)
        except ValueError as e:
            raise ValidationError(f"invalid address hex: {value!r}") from e
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise ValidationError("address must be bytes or hex string")
    b = bytes(value)
    if len(b) != ADDRESS_LEN:
        raise ValidationError(f"address must be exactly {ADDRESS_LEN} bytes, got {len(b)}")
    return b


def coerce_string(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError("string bytes must be valid UTF-8") from e
    if not isinstance(value, str):
        raise ValidationError("string must be str")
    return value


# ──────────────────────────────────────────────────────────────────────────────
# Type objects
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UIntType:
    bits: int = 256

    def __post_init__(self) -> None:
        if self.bits <= 0 or self.bits > 256 or self.bits % 8 != 0:
            raise ABITypeError(f"uint width must be in 8..256 step 8, got {self.bits}")

    @property
    def name(self) -> str:
        return f"uint{self.bits}"

    dynamic = False


@dataclass(frozen=True)
class BoolType:
    name: str = "bool"
    dynamic = False


@dataclass(frozen=True)
class AddressType:
    name: str = "address"
    dynamic = False


@dataclass(frozen=True)
class StringType:
    name: str = "string"
    dynamic = True


AbiType = Union[UIntType, BoolType, AddressType, StringType]


def parse_type(spec: Union[str, AbiType]) -> AbiType:
    """
    Parse a canonical type name ("uint256", "uint8", "bool", "address", "string").
    `uint` alone is an alias of `uint256`.
    """
    if isinstance(spec, (UIntType, BoolType, AddressType, StringType)):
        return spec
    if not isinstance(spec, str):
        raise ABITypeError(f"type spec must be str, got {type(spec).__name__}")
    s = spec.strip()
    if s == "bool":
        return BoolType()
    if s == "address":
        return AddressType()
    if s == "string":
        return StringType()
    if s.startswith("uint"):
        width = s[4:]
        if width == "":
            return UIntType(256)
        if not width.isdigit():
            raise ABITypeError(f"bad uint width: {spec!r}")
        return UIntType(int(width))
    raise ABITypeError(f"unsupported ABI type: {spec!r}")


def parse_types(specs: Any) -> Tuple[AbiType, ...]:
    return tuple(parse_type(s) for s in specs)

"""
chainsim.abi
============

Public ABI surface for the call boundary.

This package provides:
  • Type definitions and value coercion (uintN, bool, address, string).
  • Word-oriented encoder/decoder for arguments and return values.
  • Keccak-256 selectors for functions and errors.
  • `AbiError`, the base class for structured contract errors.
  • `@external` / `DispatchTable` used by the host to route calldata.

Everything here is pure-Python and deterministic apart from the Keccak
primitive, which is provided by pycryptodome.
"""

from __future__ import annotations

from .decoding import (decode_address, decode_bool, decode_string,
                       decode_uint, decode_value, decode_values, split_call)
from .dispatch import DispatchTable, ExternalMethod, external, receiver
from .encoding import (encode_address, encode_bool, encode_call,
                       encode_string, encode_uint, encode_value,
                       encode_values)
from .errors import AbiError, ErrorRegistry
from .selectors import (SELECTOR_LEN, canonical_signature, keccak256,
                        selector, split_signature)
from .types import (ZERO_ADDRESS, ABITypeError, ValidationError,
                    coerce_address, coerce_uint, parse_type, parse_types)

__all__ = (
    "ABITypeError",
    "ValidationError",
    "ZERO_ADDRESS",
    "coerce_address",
    "coerce_uint",
    "parse_type",
    "parse_types",
    "SELECTOR_LEN",
    "keccak256",
    "selector",
    "split_signature",
    "canonical_signature",
    "encode_uint",
    "encode_bool",
    "encode_address",
    "encode_string",
    "encode_value",
    "encode_values",
    "encode_call",
    "decode_uint",
    "decode_bool",
    "decode_address",
    "decode_string",
    "decode_value",
    "decode_values",
    "split_call",
    "AbiError",
    "ErrorRegistry",
    "ExternalMethod",
    "DispatchTable",
    "external",
    "receiver",
)

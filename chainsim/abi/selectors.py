"""
Function and error selectors for the call boundary.

    selector = keccak256(canonical_signature)[:4]

    canonical_signature := name "(" type [ "," type ]* ")"

Keccak-256 (the pre-standard SHA-3 padding) comes from pycryptodome; Python's
hashlib.sha3_256 is a different function and must not be substituted.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from Crypto.Hash import keccak as _keccak

from .types import ABITypeError, parse_type

__all__ = [
    "keccak256",
    "split_signature",
    "canonical_signature",
    "selector",
    "SELECTOR_LEN",
]

SELECTOR_LEN = 4


def keccak256(data: bytes) -> bytes:
    """Keccak-256 as used by Ethereum-style ABIs."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("keccak256 expects bytes-like input")
    h = _keccak.new(digest_bits=256)
    h.update(bytes(data))
    return h.digest()


def split_signature(signature: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Split "transfer(address,uint256)" into ("transfer", ("address", "uint256")).
    Whitespace is ignored; every type must parse.
    """
    if not isinstance(signature, str):
        raise ABITypeError("signature must be str")
    s = "".join(signature.split())
    lp = s.find("(")
    if lp <= 0 or not s.endswith(")"):
        raise ABITypeError(f"malformed signature: {signature!r}")
    name = s[:lp]
    inner = s[lp + 1 : -1]
    types = tuple(t for t in inner.split(",")) if inner else ()
    for t in types:
        parse_type(t)
    return name, types


def canonical_signature(signature: str) -> str:
    name, types = split_signature(signature)
    canon = tuple(parse_type(t).name for t in types)
    return f"{name}(" + ",".join(canon) + ")"


@lru_cache(maxsize=512)
def selector(signature: str) -> bytes:
    """4-byte selector of a function or error signature."""
    return keccak256(canonical_signature(signature).encode("ascii"))[:SELECTOR_LEN]

# -*- coding: utf-8 -*-
"""
contracts.stdlib.token
======================

Shared conventions for fungible token contracts: storage prefixes, event
names, the runtime token configuration, and the remote-ledger client used by
contracts that hold tokens of another contract (`contracts.stdlib.token.remote`).

Conventions
-----------
Storage keys (prefixed bytes):
  - balances:   BAL_PREFIX || <addr>
  - allowances: ALLOW_PREFIX || <owner> || b"|" || <spender>
Addresses are raw 20-byte values.

Events (names as bytes):
  - b"Transfer" with payload { "from": bytes, "to": bytes, "value": int }
  - b"Approval" with payload { "owner": bytes, "spender": bytes, "value": int }

Symbols/Names:
  - Symbols: 1..11 printable ASCII (e.g., "TKN").
  - Names:   1..64 printable ASCII, mixed case allowed.

Numeric domain:
  - Amounts fit U256 (0 <= n <= 2**256-1). Use `contracts.stdlib.math.safe_uint`
    for arithmetic inside token implementations.

Configuration
-------------
`TokenConfig` carries the per-token constants (name, symbol, decimals,
initial supply). It is validated on construction and handed to the Ledger's
constructor at deploy time; after that the values are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Final

from ..math import U8_MAX, is_u256

# -----------------------------------------------------------------------------
# Public constants: storage prefixes, event names, limits
# -----------------------------------------------------------------------------

BAL_PREFIX: Final[bytes] = b"tok:bal:"
ALLOW_PREFIX: Final[bytes] = b"tok:allow:"

EVT_TRANSFER: Final[bytes] = b"Transfer"
EVT_APPROVAL: Final[bytes] = b"Approval"

DEFAULT_DECIMALS: Final[int] = 18

MAX_SYMBOL_LEN: Final[int] = 11
MAX_NAME_LEN: Final[int] = 64


# -----------------------------------------------------------------------------
# Key derivation helpers (no storage I/O here)
# -----------------------------------------------------------------------------


def key_balance(addr: bytes) -> bytes:
    """
    Derive the canonical balance key for an address.
    """
    return BAL_PREFIX + bytes(addr)


def key_allow(owner: bytes, spender: bytes) -> bytes:
    """
    Derive the canonical allowance key for (owner, spender).
    """
    return ALLOW_PREFIX + bytes(owner) + b"|" + bytes(spender)


# -----------------------------------------------------------------------------
# Validation helpers
# -----------------------------------------------------------------------------


def is_printable_ascii(s: str) -> bool:
    """
    True iff every character is printable ASCII (32..126).
    """
    if not isinstance(s, str) or len(s) == 0:
        return False
    return all(32 <= ord(c) <= 126 for c in s)


class TokenConfigError(ValueError):
    """Raised when token metadata is out of range."""


@dataclass(frozen=True)
class TokenConfig:
    name: str
    symbol: str
    decimals: int = DEFAULT_DECIMALS
    initial_supply: int = 0

    def __post_init__(self) -> None:
        if not is_printable_ascii(self.name) or len(self.name) > MAX_NAME_LEN:
            raise TokenConfigError(f"name must be 1..{MAX_NAME_LEN} printable ASCII chars")
        if not is_printable_ascii(self.symbol) or len(self.symbol) > MAX_SYMBOL_LEN:
            raise TokenConfigError(f"symbol must be 1..{MAX_SYMBOL_LEN} printable ASCII chars")
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int) or not 0 <= self.decimals <= U8_MAX:
            raise TokenConfigError("decimals must fit uint8")
        if not is_u256(self.initial_supply):
            raise TokenConfigError("initial_supply must fit uint256")

    def as_args(self) -> tuple:
        """Positional constructor arguments for the Ledger."""
        return (self.name, self.symbol, self.decimals, self.initial_supply)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "initial_supply": self.initial_supply,
        }


# -----------------------------------------------------------------------------
# Public exports
# -----------------------------------------------------------------------------

__all__ = [
    # prefixes
    "BAL_PREFIX",
    "ALLOW_PREFIX",
    # events
    "EVT_TRANSFER",
    "EVT_APPROVAL",
    # defaults/limits
    "DEFAULT_DECIMALS",
    "MAX_SYMBOL_LEN",
    "MAX_NAME_LEN",
    # key derivation
    "key_balance",
    "key_allow",
    # config
    "TokenConfig",
    "TokenConfigError",
    "is_printable_ascii",
]

# -*- coding: utf-8 -*-
"""
contracts.stdlib.access
=======================

Single-writer privileged roles for token contracts.

- **Owner** (`ownable`): set exactly once by `init_owner`; the zero address
  means "uninitialized". There is no transfer or renounce path.
- **Minter** (`roles`): a single account allowed to mint; changed only by the
  owner. The zero address is a legal minter and disables minting.

Both helpers take an explicit `caller: bytes` plumbed from the contract entry
point and raise `contracts.errors.Unauthorized` on a mismatch.

Storage layout (by convention)
------------------------------
- Owner:  key `b"access:owner"`  → 20-byte address
- Minter: key `b"access:minter"` → 20-byte address

These keys are deterministic byte strings; *do not* change them after deploy.
"""
from __future__ import annotations

from typing import Final

OWNER_KEY: Final[bytes] = b"access:owner"
MINTER_KEY: Final[bytes] = b"access:minter"

from .ownable import get_owner, init_owner, is_initialized, require_owner  # noqa: E402
from .roles import get_minter, require_minter, set_minter  # noqa: E402

__all__ = [
    "OWNER_KEY",
    "MINTER_KEY",
    "get_owner",
    "init_owner",
    "is_initialized",
    "require_owner",
    "get_minter",
    "set_minter",
    "require_minter",
]

# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.roles
=============================

Single-holder minter role. The owner (see `ownable`) is the only account that
may change it; the zero address is accepted and leaves nobody able to mint.
"""
from __future__ import annotations

from chainsim.abi import ZERO_ADDRESS
from chainsim.stdlib import storage

from ...errors import Unauthorized
from . import MINTER_KEY
from .ownable import require_owner

__all__ = ["get_minter", "set_minter", "require_minter", "assign_minter"]


def get_minter() -> bytes:
    v = storage.get(MINTER_KEY)
    return v if v else ZERO_ADDRESS


def assign_minter(account: bytes) -> None:
    """Write the minter without an authorization check (initialization only)."""
    storage.set(MINTER_KEY, bytes(account))


def set_minter(caller: bytes, new_minter: bytes) -> None:
    """Owner-only: replace the minter."""
    require_owner(caller)
    assign_minter(new_minter)


def require_minter(caller: bytes) -> None:
    # An unset or zeroed minter matches nobody, including the zero address.
    minter = get_minter()
    if minter == ZERO_ADDRESS or minter != caller:
        raise Unauthorized()

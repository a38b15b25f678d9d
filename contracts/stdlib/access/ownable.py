# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.ownable
================================

One-shot owner storage for contracts with an explicit `init` step.

- read the current owner (`get_owner`, zero address while unset)
- initialize the owner once (`init_owner`)
- check that a caller is the owner (`require_owner`)

Typical usage
-------------
    from contracts.stdlib.access.ownable import init_owner, require_owner

    @external("init(address)", caller=True)
    def init(caller: bytes, owner: bytes) -> None:
        init_owner(owner)

    @external("endSale()", caller=True)
    def end_sale(caller: bytes) -> None:
        require_owner(caller)
        ...
"""
from __future__ import annotations

from chainsim.abi import ZERO_ADDRESS
from chainsim.stdlib import storage

from ...errors import Unauthorized
from . import OWNER_KEY

__all__ = ["get_owner", "is_initialized", "init_owner", "require_owner"]


def get_owner() -> bytes:
    """Return the owner address, or the zero address if not set."""
    v = storage.get(OWNER_KEY)
    return v if v else ZERO_ADDRESS


def is_initialized() -> bool:
    return get_owner() != ZERO_ADDRESS


def init_owner(owner: bytes) -> None:
    """
    Set the owner. Raises Unauthorized if an owner is already set.
    """
    if is_initialized():
        raise Unauthorized()
    storage.set(OWNER_KEY, bytes(owner))


def require_owner(caller: bytes) -> None:
    if get_owner() != caller:
        raise Unauthorized()

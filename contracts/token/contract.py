# -*- coding: utf-8 -*-
"""
Ledger — fungible token with owner and minter roles
---------------------------------------------------

A deterministic fungible token that follows the ERC-20 surface. Per-token
metadata (name, symbol, decimals, initial supply) is fixed by the constructor
at deploy time; `init` then assigns the owner and mints the initial supply.

Views:
  - name() -> string
  - symbol() -> string
  - decimals() -> uint8
  - totalSupply() -> uint256
  - balanceOf(owner) -> uint256
  - allowance(owner, spender) -> uint256
  - owner() -> address
  - minter() -> address
State-changing (caller is the frame sender):
  - init(owner)                          one-shot; owner = minter = `owner`
  - mint(to, amount)                     minter-only
  - burn(from, amount)                   no caller check (see below)
  - setMinter(new_minter)                owner-only
  - transfer(to, value) -> bool
  - transferFrom(from, to, value) -> bool
  - approve(spender, value) -> bool

Notes
- Invariant: the sum of all balances equals totalSupply after every call.
- All arithmetic is checked in 256-bit unsigned space; overflow reverts the
  call with Panic(0x11) instead of wrapping.
- `burn` accepts any caller and only checks the balance of `from`. This
  mirrors the deployed behaviour of the ledger and is intentionally kept.
- `approve` overwrites the allowance; the usual race when changing a
  non-zero allowance is not mitigated.

Event names (bytes):
  b"Transfer" {from, to, value}, b"Approval" {owner, spender, value}
"""
from __future__ import annotations

from typing import Final

from chainsim.abi import ZERO_ADDRESS, external
from chainsim.stdlib import events, storage

from ..errors import (ApprovalFailed, BurnFromZeroAddress, InsufficientAllowance,
                      InsufficientBalance, MintToZeroAddress, TransferFailed,
                      Unauthorized)
from ..stdlib.access import (get_minter, get_owner, init_owner,
                             require_minter)
from ..stdlib.access import set_minter as _set_minter
from ..stdlib.access.roles import assign_minter
from ..stdlib.math.safe_uint import u256_add, u256_sub
from ..stdlib.token import (EVT_APPROVAL, EVT_TRANSFER, TokenConfig,
                            key_allow, key_balance)

# ----------------------------
# Storage keys & helpers
# ----------------------------

K_NAME: Final[bytes] = b"tok:meta:name"
K_SYMBOL: Final[bytes] = b"tok:meta:symbol"
K_DECIMALS: Final[bytes] = b"tok:meta:dec"
K_INITIAL: Final[bytes] = b"tok:meta:initial"
K_TOTAL: Final[bytes] = b"tok:meta:total"


def _balance(addr: bytes) -> int:
    return storage.get_int(key_balance(addr))


def _set_balance(addr: bytes, amount: int) -> None:
    storage.set_int(key_balance(addr), amount)


def _emit_transfer(frm: bytes, to: bytes, value: int) -> None:
    events.emit(EVT_TRANSFER, {"from": frm, "to": to, "value": value})


def _emit_approval(owner: bytes, spender: bytes, value: int) -> None:
    events.emit(EVT_APPROVAL, {"owner": owner, "spender": spender, "value": value})


# ----------------------------
# Deployment
# ----------------------------


def constructor(name: str, symbol: str, decimals: int, initial_supply: int) -> None:
    """Persist the token metadata. Runs once, when the host installs the code."""
    cfg = TokenConfig(name, symbol, decimals, initial_supply)
    storage.set(K_NAME, cfg.name.encode("ascii"))
    storage.set(K_SYMBOL, cfg.symbol.encode("ascii"))
    storage.set_int(K_DECIMALS, cfg.decimals)
    storage.set_int(K_INITIAL, cfg.initial_supply)


# ----------------------------
# Views
# ----------------------------


@external("name()", returns=("string",))
def name() -> str:
    return (storage.get(K_NAME) or b"").decode("ascii")


@external("symbol()", returns=("string",))
def symbol() -> str:
    return (storage.get(K_SYMBOL) or b"").decode("ascii")


@external("decimals()", returns=("uint8",))
def decimals() -> int:
    return storage.get_int(K_DECIMALS)


@external("totalSupply()", returns=("uint256",))
def total_supply() -> int:
    return storage.get_int(K_TOTAL)


@external("balanceOf(address)", returns=("uint256",))
def balance_of(owner: bytes) -> int:
    return _balance(owner)


@external("allowance(address,address)", returns=("uint256",))
def allowance(owner: bytes, spender: bytes) -> int:
    return storage.get_int(key_allow(owner, spender))


@external("owner()", returns=("address",))
def owner() -> bytes:
    return get_owner()


@external("minter()", returns=("address",))
def minter() -> bytes:
    return get_minter()


# ----------------------------
# Initialization & roles
# ----------------------------


@external("init(address)")
def init(owner: bytes) -> None:
    """
    Assign owner and minter, and credit the whole initial supply to `owner`.
    Raises Unauthorized if an owner is already set or `owner` is the zero
    address, which is also the "unset" sentinel.
    """
    if owner == ZERO_ADDRESS:
        raise Unauthorized()
    init_owner(owner)
    assign_minter(owner)
    supply = storage.get_int(K_INITIAL)
    storage.set_int(K_TOTAL, supply)
    _set_balance(owner, supply)
    _emit_transfer(ZERO_ADDRESS, owner, supply)


@external("setMinter(address)", caller=True)
def set_minter(caller: bytes, new_minter: bytes) -> None:
    _set_minter(caller, new_minter)


# ----------------------------
# Supply
# ----------------------------


@external("mint(address,uint256)", caller=True)
def mint(caller: bytes, to: bytes, amount: int) -> None:
    require_minter(caller)
    if to == ZERO_ADDRESS:
        raise MintToZeroAddress()
    _set_balance(to, u256_add(_balance(to), amount))
    storage.set_int(K_TOTAL, u256_add(total_supply(), amount))
    _emit_transfer(ZERO_ADDRESS, to, amount)


@external("burn(address,uint256)")
def burn(account: bytes, amount: int) -> None:
    if account == ZERO_ADDRESS:
        raise BurnFromZeroAddress()
    have = _balance(account)
    if have < amount:
        raise InsufficientBalance(account, have, amount)
    _set_balance(account, have - amount)
    storage.set_int(K_TOTAL, u256_sub(total_supply(), amount))
    _emit_transfer(account, ZERO_ADDRESS, amount)


# ----------------------------
# Transfers & allowances
# ----------------------------


def _transfer(frm: bytes, to: bytes, value: int) -> None:
    """Move `value` from `frm` to `to`. No allowance check."""
    have = _balance(frm)
    if have < value:
        raise InsufficientBalance(frm, have, value)
    _set_balance(frm, have - value)
    _set_balance(to, u256_add(_balance(to), value))
    _emit_transfer(frm, to, value)


@external("transfer(address,uint256)", returns=("bool",), caller=True)
def transfer(caller: bytes, to: bytes, value: int) -> bool:
    if to == ZERO_ADDRESS:
        raise TransferFailed()
    _transfer(caller, to, value)
    return True


@external("transferFrom(address,address,uint256)", returns=("bool",), caller=True)
def transfer_from(caller: bytes, owner: bytes, to: bytes, value: int) -> bool:
    """
    Spend `value` of the caller's allowance over `owner` and move it to `to`.
    Emits Approval with the remaining allowance after the Transfer.
    """
    if to == ZERO_ADDRESS:
        raise TransferFailed()
    key = key_allow(owner, caller)
    current = storage.get_int(key)
    if current < value:
        raise InsufficientAllowance(owner, caller, current, value)
    remaining = current - value
    storage.set_int(key, remaining)
    _transfer(owner, to, value)
    _emit_approval(owner, caller, remaining)
    return True


@external("approve(address,uint256)", returns=("bool",), caller=True)
def approve(caller: bytes, spender: bytes, value: int) -> bool:
    if spender == ZERO_ADDRESS:
        raise ApprovalFailed()
    storage.set_int(key_allow(caller, spender), value)
    _emit_approval(caller, spender, value)
    return True

# -*- coding: utf-8 -*-
"""
Sale Controller — fixed-price token sale
----------------------------------------

Sells units of a token ledger deployed at another address for native
currency. The controller never mints: someone must transfer inventory to the
controller's address on the ledger before buyers can buy.

Views:
  - tokenAddress() -> address
  - tokenPrice() -> uint256
  - tokensSold() -> uint256
  - owner() -> address
State-changing:
  - init(token_address, token_price)     one-shot; owner = caller
  - buyTokens(number_of_tokens)          payable
  - endSale()                            owner-only

The ledger is reached only through `AbiTokenRemote` (raw calls by address).
Its answers are checked, never assumed: a failed or malformed transfer
response is `TokenTransferFailed`, and a failed balance query reads as 0.

Ordering
--------
buyTokens runs: validate payment → check inventory → transfer tokens →
bump tokensSold → refund excess → emit. endSale moves tokens before native
currency. Native payouts run after all bookkeeping, so a receiver that calls
back in observes consistent state.

Event names (bytes):
  b"TokensPurchased" {buyer, amount}, b"SaleEnded" {owner, tokens_sold}
"""
from __future__ import annotations

from typing import Final

from chainsim.abi import ZERO_ADDRESS, external
from chainsim.errors import ExecError
from chainsim.stdlib import events, msg, storage, treasury

from ..errors import (InsufficientFunds, TokenTransferFailed, TransferFailed)
from ..stdlib.access import get_owner, init_owner, require_owner
from ..stdlib.math.safe_uint import u256_add, u256_mul
from ..stdlib.token.remote import AbiTokenRemote, TokenRemote

# ----------------------------
# Storage keys & helpers
# ----------------------------

K_TOKEN: Final[bytes] = b"sale:token"
K_PRICE: Final[bytes] = b"sale:price"
K_SOLD: Final[bytes] = b"sale:sold"

EVT_PURCHASED: Final[bytes] = b"TokensPurchased"
EVT_ENDED: Final[bytes] = b"SaleEnded"


def _token() -> TokenRemote:
    return AbiTokenRemote(token_address())


def _pay(to: bytes, amount: int) -> None:
    try:
        treasury.transfer(to, amount)
    except ExecError as exc:
        raise TransferFailed() from exc


# ----------------------------
# Views
# ----------------------------


@external("tokenAddress()", returns=("address",))
def token_address() -> bytes:
    return storage.get(K_TOKEN) or ZERO_ADDRESS


@external("tokenPrice()", returns=("uint256",))
def token_price() -> int:
    return storage.get_int(K_PRICE)


@external("tokensSold()", returns=("uint256",))
def tokens_sold() -> int:
    return storage.get_int(K_SOLD)


@external("owner()", returns=("address",))
def owner() -> bytes:
    return get_owner()


# ----------------------------
# Lifecycle
# ----------------------------


@external("init(address,uint256)", caller=True)
def init(caller: bytes, token: bytes, price: int) -> None:
    """
    Configure the sale. Raises Unauthorized when already initialized and
    InsufficientFunds(0, 0) for a zero price.
    """
    init_owner(caller)
    if price == 0:
        raise InsufficientFunds(0, 0)
    storage.set(K_TOKEN, token)
    storage.set_int(K_PRICE, price)
    storage.set_int(K_SOLD, 0)


@external("buyTokens(uint256)", caller=True, payable=True)
def buy_tokens(caller: bytes, number_of_tokens: int) -> None:
    sent = msg.value()
    total_cost = u256_mul(token_price(), number_of_tokens)
    if sent < total_cost:
        raise InsufficientFunds(sent, total_cost)

    token = _token()
    if token.query_balance(msg.address()) < number_of_tokens:
        raise TokenTransferFailed()
    if not token.transfer(caller, number_of_tokens):
        raise TokenTransferFailed()

    storage.set_int(K_SOLD, u256_add(tokens_sold(), number_of_tokens))

    excess = sent - total_cost
    if excess > 0:
        _pay(caller, excess)

    events.emit(EVT_PURCHASED, {"buyer": caller, "amount": number_of_tokens})


@external("endSale()", caller=True)
def end_sale(caller: bytes) -> None:
    """Owner-only: send unsold tokens and collected currency to the owner."""
    require_owner(caller)
    owner_addr = get_owner()

    token = _token()
    remaining = token.query_balance(msg.address())
    if remaining > 0 and not token.transfer(owner_addr, remaining):
        raise TokenTransferFailed()

    proceeds = treasury.balance()
    if proceeds > 0:
        _pay(owner_addr, proceeds)

    events.emit(EVT_ENDED, {"owner": owner_addr, "tokens_sold": tokens_sold()})

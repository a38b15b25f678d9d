# -*- coding: utf-8 -*-
"""
Contracts as buyers and owners: native payouts run the receiver's hook, which
may call back into the sale while the outer call is still running.
"""
from __future__ import annotations

import types

import pytest

from chainsim.abi import AbiError, encode_call, receiver
from chainsim.stdlib import calls, storage
from contracts.errors import TransferFailed
from contracts.tools.deploy import deploy_sale

from .conftest import INVENTORY, PRICE, SALE, TOKEN, det_address, events_named

BUYER_C = det_address("buyer-contract")
OWNER_C = det_address("owner-contract")


class Refused(AbiError):
    SIGNATURE = "Refused()"
    FIELDS = ()


def _module(name: str, **attrs) -> types.ModuleType:
    mod = types.ModuleType(f"contracts_test_{name}")
    for k, v in attrs.items():
        setattr(mod, k, v)
    return mod


@pytest.fixture
def rebuyer() -> types.ModuleType:
    @receiver
    def receive(caller: bytes, amount: int) -> None:
        if caller != SALE or storage.get_int(b"entered"):
            return
        storage.set_int(b"entered", 1)
        res = calls.call(SALE, encode_call("buyTokens(uint256)", [1]), PRICE)
        storage.set_int(b"inner", 1 if res.success else 2)

    return _module("rebuyer", receive=receive)


def test_refund_hook_can_buy_again(sale_ready, rebuyer):
    host = sale_ready.host
    host.deploy(BUYER_C, rebuyer)
    host.credit(BUYER_C, 1_000 * PRICE)

    rcpt = sale_ready.send(BUYER_C, SALE, "buyTokens(uint256)", 10, value=13 * PRICE)
    assert rcpt.ok
    assert sale_ready.tokens(BUYER_C) == 11
    assert sale_ready.view(SALE, "tokensSold()") == 11
    assert sale_ready.tokens(SALE) == INVENTORY - 11
    assert sale_ready.native(SALE) == 11 * PRICE
    assert sale_ready.native(BUYER_C) == 1_000 * PRICE - 11 * PRICE
    # the inner purchase completes before the outer one emits
    assert events_named(rcpt, b"TokensPurchased") == [
        {"buyer": BUYER_C, "amount": 1},
        {"buyer": BUYER_C, "amount": 10},
    ]


def test_refusing_receiver_reverts_the_purchase(sale_ready):
    @receiver
    def receive(caller: bytes, amount: int) -> None:
        raise Refused()

    host = sale_ready.host
    host.deploy(BUYER_C, _module("refuser", receive=receive))
    host.credit(BUYER_C, 100 * PRICE)
    before = sale_ready.snapshot(BUYER_C, SALE)

    rcpt = sale_ready.send(BUYER_C, SALE, "buyTokens(uint256)", 10, value=11 * PRICE)
    assert rcpt.error == TransferFailed()
    assert sale_ready.snapshot(BUYER_C, SALE) == before

    # exact payment has no refund, so the hook never runs
    assert sale_ready.send(BUYER_C, SALE, "buyTokens(uint256)", 10, value=10 * PRICE).ok


def test_owner_hook_reentering_end_sale_is_paid_once(ledger, accounts):
    @receiver
    def receive(caller: bytes, amount: int) -> None:
        storage.set_int(b"hits", storage.get_int(b"hits") + 1)
        if storage.get_int(b"hits") == 1:
            res = calls.call(SALE, encode_call("endSale()"))
            storage.set_int(b"inner", 1 if res.success else 2)

    host = ledger.host
    host.deploy(OWNER_C, _module("owner", receive=receive))
    deploy_sale(host, SALE)
    assert ledger.send(OWNER_C, SALE, "init(address,uint256)", TOKEN, PRICE).ok
    assert ledger.send(accounts["owner"], TOKEN, "transfer(address,uint256)", SALE, INVENTORY).ok
    host.credit(accounts["alice"], 10**6)
    assert ledger.send(accounts["alice"], SALE, "buyTokens(uint256)", 40, value=40 * PRICE).ok

    rcpt = ledger.send(OWNER_C, SALE, "endSale()")
    assert rcpt.ok
    assert ledger.native(OWNER_C) == 40 * PRICE
    assert ledger.native(SALE) == 0
    assert ledger.tokens(OWNER_C) == INVENTORY - 40
    assert len(events_named(rcpt, b"SaleEnded")) == 2

# -*- coding: utf-8 -*-
"""
Property tests for buyTokens payment handling: underpayment always fails with
the exact amounts, overpayment is always refunded in full.
"""
from __future__ import annotations

from hypothesis import given, seed, settings
from hypothesis import strategies as st

from chainsim import Host
from contracts.errors import InsufficientFunds
from contracts.stdlib.token import TokenConfig
from contracts.tools.deploy import deploy_sale, deploy_token

from . import PROJECT_TEST_SEED
from .conftest import SALE, TOKEN, Chain, det_address

OWNER = det_address("owner")
BUYER = det_address("buyer")
STOCK = 500
FUNDS = 10**12


def _sale(price: int) -> Chain:
    chain = Chain(Host())
    deploy_token(chain.host, TOKEN, TokenConfig("Prop", "PRP", 0, STOCK))
    deploy_sale(chain.host, SALE)
    assert chain.send(OWNER, TOKEN, "init(address)", OWNER).ok
    assert chain.send(OWNER, SALE, "init(address,uint256)", TOKEN, price).ok
    assert chain.send(OWNER, TOKEN, "transfer(address,uint256)", SALE, STOCK).ok
    chain.host.credit(BUYER, FUNDS)
    return chain


@seed(PROJECT_TEST_SEED)
@settings(max_examples=30, deadline=None)
@given(
    price=st.integers(min_value=1, max_value=10**6),
    n=st.integers(min_value=1, max_value=STOCK),
    delta=st.integers(min_value=-1_000, max_value=10**6),
)
def test_payment_is_checked_and_excess_refunded(price, n, delta):
    chain = _sale(price)
    cost = price * n
    sent = max(0, cost + delta)
    rcpt = chain.send(BUYER, SALE, "buyTokens(uint256)", n, value=sent)
    if sent < cost:
        assert rcpt.error == InsufficientFunds(sent, cost)
        assert chain.native(BUYER) == FUNDS
        assert chain.tokens(BUYER) == 0
    else:
        assert rcpt.ok
        assert chain.native(BUYER) == FUNDS - cost
        assert chain.native(SALE) == cost
        assert chain.tokens(BUYER) == n
        assert chain.view(SALE, "tokensSold()") == n

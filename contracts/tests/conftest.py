# -*- coding: utf-8 -*-
"""
contracts.tests.conftest
========================

Pytest fixtures for the Ledger and the Sale Controller.

Goals:
- Run both contracts on a fresh, deterministic `chainsim.Host` per test.
- Expose **stable named accounts** (owner, alice, bob, ...) as raw 20-byte
  addresses derived from a tag.
- Offer small drivers (`Chain`) so tests read as transactions, not as ABI
  plumbing.

Usage (inside a test file):
    def test_buy(chain, sale_ready, accounts):
        rcpt = chain.send(accounts["alice"], SALE, "buyTokens(uint256)", 10, value=100)
        assert rcpt.ok
        assert chain.tokens(accounts["alice"]) == 10
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import pytest
from hypothesis import HealthCheck, settings

from chainsim import Host, Receipt
from chainsim.config import load_config
from contracts.stdlib.token import TokenConfig
from contracts.tools.deploy import deploy_sale, deploy_token, send, view

TOKEN = bytes.fromhex("00000000000000000000000000000000000a0001")
SALE = bytes.fromhex("00000000000000000000000000000000000a0002")

PRICE = 10
SUPPLY = 1_000_000
INVENTORY = 1_000


settings.register_profile("contracts", deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("contracts")


def det_address(tag: str) -> bytes:
    """Stable 20-byte address derived from a tag."""
    return hashlib.sha3_256(tag.encode("utf-8")).digest()[:20]


@dataclass
class Chain:
    """Thin driver over a Host with the two contract addresses baked in."""

    host: Host

    def send(self, sender: bytes, to: bytes, signature: str, *args: Any, value: int = 0) -> Receipt:
        return send(self.host, sender, to, signature, *args, value=value)

    def view(self, to: bytes, signature: str, *args: Any, returns: Any = "uint256") -> Any:
        return view(self.host, to, signature, *args, returns=returns)

    def tokens(self, addr: bytes) -> int:
        return self.view(TOKEN, "balanceOf(address)", addr)

    def allowance(self, owner: bytes, spender: bytes) -> int:
        return self.view(TOKEN, "allowance(address,address)", owner, spender)

    def total_supply(self) -> int:
        return self.view(TOKEN, "totalSupply()")

    def native(self, addr: bytes) -> int:
        return self.host.balance_of(addr)

    def snapshot(self, *addrs: bytes) -> Tuple[Any, ...]:
        """Token and native balances of `addrs`, plus supply and tokens sold."""
        rows: List[Any] = [(self.tokens(a), self.native(a)) for a in addrs]
        rows.append(self.total_supply())
        if self.host.code_at(SALE) is not None:
            rows.append(self.view(SALE, "tokensSold()"))
        return tuple(rows)


def events_named(rcpt: Receipt, name: bytes) -> List[Dict[str, Any]]:
    return [ev.args for ev in rcpt.logs if ev.name == name]


# --- fixtures -----------------------------------------------------------------


@pytest.fixture(autouse=True)
def _fresh_config():
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def accounts() -> Dict[str, bytes]:
    return {tag: det_address(tag) for tag in ("owner", "alice", "bob", "carol", "mallory")}


@pytest.fixture
def host() -> Host:
    return Host()


@pytest.fixture
def chain(host: Host) -> Chain:
    return Chain(host)


@pytest.fixture
def token_config() -> TokenConfig:
    return TokenConfig("Test Token", "TST", 18, SUPPLY)


@pytest.fixture
def ledger(chain: Chain, accounts: Dict[str, bytes], token_config: TokenConfig) -> Chain:
    """Ledger deployed and initialized; owner holds the whole supply."""
    deploy_token(chain.host, TOKEN, token_config, deployer=accounts["owner"])
    assert chain.send(accounts["owner"], TOKEN, "init(address)", accounts["owner"]).ok
    return chain


@pytest.fixture
def sale(ledger: Chain, accounts: Dict[str, bytes]) -> Chain:
    """Sale deployed and initialized at PRICE, without inventory."""
    deploy_sale(ledger.host, SALE, deployer=accounts["owner"])
    assert ledger.send(accounts["owner"], SALE, "init(address,uint256)", TOKEN, PRICE).ok
    return ledger


@pytest.fixture
def sale_ready(sale: Chain, accounts: Dict[str, bytes]) -> Chain:
    """Sale holding INVENTORY tokens; alice and bob hold native currency."""
    assert sale.send(accounts["owner"], TOKEN, "transfer(address,uint256)", SALE, INVENTORY).ok
    for tag in ("alice", "bob"):
        sale.host.credit(accounts[tag], 10**9)
    return sale

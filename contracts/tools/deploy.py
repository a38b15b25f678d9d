# -*- coding: utf-8 -*-
"""
deploy.py
=========

Deploy and drive the Ledger and Sale Controller on a local `chainsim.Host`.

    host = Host()
    deploy_token(host, TOKEN, TokenConfig("Test Token", "TST", 18, 1_000_000))
    deploy_sale(host, SALE)
    send(host, alice, TOKEN, "init(address)", alice)
    view(host, TOKEN, "balanceOf(address)", alice, returns="uint256")

Every helper returns the raw `Receipt` (for `send`) or the decoded value
(for `view`), so tests can assert on either.
"""
from __future__ import annotations

import logging
from types import ModuleType
from typing import Any, Sequence, Union

from chainsim import Host, Receipt
from chainsim.abi import ZERO_ADDRESS, decode_values, encode_call
from chainsim.errors import Revert

from ..stdlib.token import TokenConfig
from ..token import contract as token_contract
from ..token_sale import contract as sale_contract

log = logging.getLogger(__name__)

__all__ = ["deploy_token", "deploy_sale", "send", "view", "decode_output"]


def deploy_token(host: Host, address: bytes, config: TokenConfig, *, deployer: bytes = ZERO_ADDRESS) -> ModuleType:
    log.info("deploying ledger %s (%s)", config.symbol, config.name)
    return host.deploy(address, token_contract, *config.as_args(), deployer=deployer)


def deploy_sale(host: Host, address: bytes, *, deployer: bytes = ZERO_ADDRESS) -> ModuleType:
    return host.deploy(address, sale_contract, deployer=deployer)


def send(host: Host, sender: bytes, to: bytes, signature: str, *args: Any, value: int = 0) -> Receipt:
    """Encode `signature(args)` and run it as a transaction."""
    return host.transact(sender, to, encode_call(signature, args), value=value)


def decode_output(receipt: Receipt, returns: Union[str, Sequence[str]]) -> Any:
    """Decode a successful receipt's output; one return type yields a scalar."""
    types = (returns,) if isinstance(returns, str) else tuple(returns)
    values = decode_values(types, receipt.output)
    return values[0] if len(values) == 1 else values


def view(host: Host, to: bytes, signature: str, *args: Any, returns: Union[str, Sequence[str]] = "uint256") -> Any:
    """Run a read-only call and decode its result. Raises Revert if it fails."""
    rcpt = host.static_call(to, encode_call(signature, args))
    if not rcpt.ok:
        raise Revert(rcpt.message or "view reverted", return_data=rcpt.output, error=rcpt.error)
    return decode_output(rcpt, returns)

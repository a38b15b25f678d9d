# -*- coding: utf-8 -*-
"""
AbiTokenRemote trusts nothing: answers from the remote ledger are checked for
success, length and value before the caller acts on them.
"""
from __future__ import annotations

from typing import List, Tuple

import pytest

from chainsim.abi import encode_call, selector
from chainsim.runtime.call_api import CallResult
from contracts.stdlib.token.remote import (AbiTokenRemote, Erc20CallCodec,
                                           TokenRemote)

from .conftest import TOKEN, det_address

WHO = det_address("who")


class FakeCall:
    def __init__(self, result: CallResult) -> None:
        self.result = result
        self.seen: List[Tuple[bytes, bytes]] = []

    def __call__(self, to: bytes, data: bytes, value: int = 0) -> CallResult:
        self.seen.append((to, data))
        return self.result


def _word(n: int) -> bytes:
    return n.to_bytes(32, "big")


def test_remote_satisfies_protocol():
    assert isinstance(AbiTokenRemote(TOKEN), TokenRemote)


def test_requests_are_erc20_calls():
    fake = FakeCall(CallResult(True, _word(1)))
    remote = AbiTokenRemote(TOKEN, call=fake)
    remote.query_balance(WHO)
    remote.transfer(WHO, 5)
    assert fake.seen == [
        (TOKEN, encode_call("balanceOf(address)", [WHO])),
        (TOKEN, encode_call("transfer(address,uint256)", [WHO, 5])),
    ]
    assert fake.seen[1][1][:4] == selector("transfer(address,uint256)")


@pytest.mark.parametrize(
    "result,expected",
    [
        (CallResult(True, _word(42)), 42),
        (CallResult(True, b""), 0),
        (CallResult(True, _word(42) + b"\x00"), 0),
        (CallResult(True, b"\x01" * 31), 0),
        (CallResult(False, _word(42)), 0),
    ],
)
def test_query_balance(result, expected):
    assert AbiTokenRemote(TOKEN, call=FakeCall(result)).query_balance(WHO) == expected


@pytest.mark.parametrize(
    "result,expected",
    [
        (CallResult(True, _word(1)), True),
        (CallResult(True, _word(0)), False),
        (CallResult(True, b""), False),
        (CallResult(True, b"\x01"), False),
        (CallResult(True, _word(1) + _word(1)), False),
        (CallResult(False, _word(1)), False),
    ],
)
def test_transfer_success_is_checked(result, expected):
    assert AbiTokenRemote(TOKEN, call=FakeCall(result)).transfer(WHO, 1) is expected


def test_custom_codec():
    class EchoCodec(Erc20CallCodec):
        def decode_uint(self, output: bytes) -> int:
            return len(output)

    remote = AbiTokenRemote(TOKEN, codec=EchoCodec(), call=FakeCall(CallResult(True, b"abc")))
    assert remote.query_balance(WHO) == 3

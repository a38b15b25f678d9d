# -*- coding: utf-8 -*-
"""
contracts.stdlib.token.remote
=============================

Client side of a token ledger that lives at another address.

A contract that holds tokens never reads the ledger's storage; it talks to it
through `TokenRemote`:

    token = AbiTokenRemote(token_address)
    if token.query_balance(msg.address()) < n: ...
    if not token.transfer(buyer, n): ...

Trust model
-----------
The answer of the remote ledger is the only truth, and it is checked, never
assumed:

- `transfer` succeeds only when the call succeeded *and* the returned payload
  is exactly one 32-byte word whose last byte is 1. Anything else (revert,
  empty output, wrong length, false) is a failure.
- `query_balance` returns the decoded word when the call succeeded with a
  32-byte payload and 0 otherwise. A failed balance query is reported as an
  empty balance, not as an error.

The byte layout is delegated to an `Erc20CallCodec`, so a ledger with a
different wire format only needs a different codec.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from chainsim.abi import encode_call
from chainsim.config import WORD_BYTES
from chainsim.runtime.call_api import CallResult
from chainsim.stdlib import calls

__all__ = ["TokenRemote", "Erc20CallCodec", "AbiTokenRemote"]

BALANCE_OF_SIG = "balanceOf(address)"
TRANSFER_SIG = "transfer(address,uint256)"


@runtime_checkable
class TokenRemote(Protocol):
    """Narrow view of a remote token ledger."""

    def query_balance(self, owner: bytes) -> int: ...
    def transfer(self, to: bytes, value: int) -> bool: ...


class Erc20CallCodec:
    """Request/response layout of the ERC-20 style ledger."""

    def encode_balance_of(self, owner: bytes) -> bytes:
        return encode_call(BALANCE_OF_SIG, [owner])

    def encode_transfer(self, to: bytes, value: int) -> bytes:
        return encode_call(TRANSFER_SIG, [to, value])

    def decode_uint(self, output: bytes) -> int:
        if len(output) != WORD_BYTES:
            return 0
        return int.from_bytes(output, "big")

    def decode_success(self, output: bytes) -> bool:
        return len(output) == WORD_BYTES and output[-1] == 1


CallFn = Callable[..., CallResult]


class AbiTokenRemote:
    """`TokenRemote` backed by raw calls through the host call boundary."""

    def __init__(
        self,
        address: bytes,
        codec: Erc20CallCodec | None = None,
        call: CallFn | None = None,
    ) -> None:
        self.address = bytes(address)
        self.codec = codec or Erc20CallCodec()
        self._call = call or calls.call

    def query_balance(self, owner: bytes) -> int:
        res = self._call(self.address, self.codec.encode_balance_of(owner))
        if not res.success:
            return 0
        return self.codec.decode_uint(res.output)

    def transfer(self, to: bytes, value: int) -> bool:
        res = self._call(self.address, self.codec.encode_transfer(to, value))
        return res.success and self.codec.decode_success(res.output)

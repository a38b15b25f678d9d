"""
chainsim.runtime.treasury_api — native-currency balances for contracts.

Contract-facing API (re-exported by chainsim.stdlib.treasury):

- balance(addr=None) -> int         # defaults to this contract's own balance
- transfer(to, amount) -> None      # debit self, credit `to`

`transfer` is a value-bearing call: when `to` holds contract code, its
receive hook runs in a nested frame before `transfer` returns, and it may call
back into the sender. A failure (insufficient balance, no receive hook,
receiver revert) raises `chainsim.errors.Revert` and leaves no trace.
"""

from __future__ import annotations

from typing import Optional

from ..errors import ExecError
from .context import current_frame, current_host, normalize_address


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ExecError(message="amount must be int", code="TREASURY_INVALID")
    if amount < 0:
        raise ExecError(message="amount must be non-negative", code="TREASURY_INVALID")
    return amount


def balance(addr: Optional[bytes] = None) -> int:
    """Return the native balance of `addr`, or of the current contract if omitted."""
    a = current_frame().address if addr is None else normalize_address(addr)
    return current_host().journal.balance(a)


def transfer(to: bytes, amount: int) -> None:
    """Move `amount` from the current contract to `to`."""
    frame = current_frame()
    dest = normalize_address(to)
    current_host().call(frame.address, dest, b"", _check_amount(amount), depth=frame.depth + 1)


__all__ = ["balance", "transfer"]

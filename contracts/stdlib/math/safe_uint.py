# -*- coding: utf-8 -*-
"""
contracts.stdlib.math.safe_uint
===============================

Checked U256 arithmetic.

`u256_add`, `u256_sub` and `u256_mul` raise `ArithmeticOverflow` on overflow,
underflow or out-of-range operands. Token and sale contracts use them for
every balance, supply and price computation.
"""

from __future__ import annotations

from ...errors import ArithmeticOverflow
from . import U256_MAX, require_u256

# ---------------------------------------------------------------------------
# Checked (fail-fast on errors)
# ---------------------------------------------------------------------------


def u256_add(x: int, y: int) -> int:
    """Checked add: raise on overflow."""
    require_u256(x, y)
    s = x + y
    if s > U256_MAX:
        raise ArithmeticOverflow()
    return s


def u256_sub(x: int, y: int) -> int:
    """Checked sub: raise on underflow (y > x)."""
    require_u256(x, y)
    if y > x:
        raise ArithmeticOverflow()
    return x - y


def u256_mul(x: int, y: int) -> int:
    """Checked multiply: raise on overflow."""
    require_u256(x, y)
    p = x * y
    if p > U256_MAX:
        raise ArithmeticOverflow()
    return p


__all__ = ["u256_add", "u256_sub", "u256_mul"]

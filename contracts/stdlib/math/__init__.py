# -*- coding: utf-8 -*-
"""
contracts.stdlib.math
=====================

Deterministic, integer-only numeric envelope for token contracts.

Conventions
-----------
- Amounts live in [0, U256_MAX]; nothing here uses floats.
- Range failures raise `contracts.errors.ArithmeticOverflow` (Panic 0x11).
  The host turns it into a revert of the whole call, so a value-moving
  operation never wraps.

The checked operators live in `contracts.stdlib.math.safe_uint`.
"""

from __future__ import annotations

from typing import Final

from ...errors import ArithmeticOverflow

# ---------------------------------------------------------------------------
# Numeric envelopes & constants
# ---------------------------------------------------------------------------

U256_MAX: Final[int] = (1 << 256) - 1
U8_MAX: Final[int] = (1 << 8) - 1


# ---------------------------------------------------------------------------
# Guard helpers
# ---------------------------------------------------------------------------


def is_u256(n: int) -> bool:
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n <= U256_MAX


def require_u256(*xs: int) -> None:
    """Raise ArithmeticOverflow if any value is outside [0, U256_MAX]."""
    for n in xs:
        if not is_u256(n):
            raise ArithmeticOverflow()


__all__ = ["U256_MAX", "U8_MAX", "is_u256", "require_u256"]

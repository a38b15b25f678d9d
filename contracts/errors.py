# -*- coding: utf-8 -*-
"""
contracts.errors
================

Structured errors raised by the Ledger and the Sale Controller.

Every error is an `AbiError` with a Solidity-style signature, so it travels
across the call boundary as `selector || encoded fields` and can be decoded on
the other side with `decode_error`.

Categories
----------
- AuthorizationError:  Unauthorized
- ValidationError:     MintToZeroAddress, BurnFromZeroAddress, TransferFailed,
                       ApprovalFailed
- InsufficiencyError:  InsufficientBalance, InsufficientAllowance,
                       InsufficientFunds
- RemoteCallError:     TokenTransferFailed, TransferFailed (when the Sale
                       Controller's native payout fails)

`TransferFailed` and `Unauthorized` share one signature across both contracts,
so a single class serves both. `ArithmeticOverflow` is the checked-math
failure, encoded like a compiler panic: `Panic(uint256)` with code 0x11.
"""

from __future__ import annotations

from typing import Final, Optional

from chainsim.abi import AbiError, ErrorRegistry

REGISTRY: Final[ErrorRegistry] = ErrorRegistry()

PANIC_ARITHMETIC: Final[int] = 0x11


# ---------------------------------------------------------------------------
# Category mixins
# ---------------------------------------------------------------------------


class AuthorizationError(AbiError):
    """Caller lacks the required role."""


class ValidationError(AbiError):
    """Structurally invalid argument (typically the zero address)."""


class InsufficiencyError(AbiError):
    """Not enough balance, allowance or payment; fields carry have/want."""


class RemoteCallError(AbiError):
    """An outbound call failed or answered with an unexpected payload."""


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


@REGISTRY.register
class Unauthorized(AuthorizationError):
    SIGNATURE = "Unauthorized()"
    FIELDS = ()


@REGISTRY.register
class MintToZeroAddress(ValidationError):
    SIGNATURE = "MintToZeroAddress()"
    FIELDS = ()


@REGISTRY.register
class BurnFromZeroAddress(ValidationError):
    SIGNATURE = "BurnFromZeroAddress()"
    FIELDS = ()


@REGISTRY.register
class TransferFailed(ValidationError, RemoteCallError):
    SIGNATURE = "TransferFailed()"
    FIELDS = ()


@REGISTRY.register
class ApprovalFailed(ValidationError):
    SIGNATURE = "ApprovalFailed()"
    FIELDS = ()


@REGISTRY.register
class InsufficientBalance(InsufficiencyError):
    SIGNATURE = "InsufficientBalance(address,uint256,uint256)"
    FIELDS = ("sender", "have", "want")


@REGISTRY.register
class InsufficientAllowance(InsufficiencyError):
    SIGNATURE = "InsufficientAllowance(address,address,uint256,uint256)"
    FIELDS = ("owner", "spender", "have", "want")


@REGISTRY.register
class InsufficientFunds(InsufficiencyError):
    SIGNATURE = "InsufficientFunds(uint256,uint256)"
    FIELDS = ("sent", "required")


@REGISTRY.register
class TokenTransferFailed(RemoteCallError):
    SIGNATURE = "TokenTransferFailed()"
    FIELDS = ()


@REGISTRY.register
class ArithmeticOverflow(AbiError):
    SIGNATURE = "Panic(uint256)"
    FIELDS = ("code",)

    def __init__(self, code: int = PANIC_ARITHMETIC) -> None:
        super().__init__(code)


def decode_error(data: bytes) -> Optional[AbiError]:
    """Map a revert payload back to its error instance (None if unknown)."""
    return REGISTRY.decode(data)


__all__ = [
    "REGISTRY",
    "PANIC_ARITHMETIC",
    "AuthorizationError",
    "ValidationError",
    "InsufficiencyError",
    "RemoteCallError",
    "Unauthorized",
    "MintToZeroAddress",
    "BurnFromZeroAddress",
    "TransferFailed",
    "ApprovalFailed",
    "InsufficientBalance",
    "InsufficientAllowance",
    "InsufficientFunds",
    "TokenTransferFailed",
    "ArithmeticOverflow",
    "decode_error",
]

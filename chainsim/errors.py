"""
chainsim.errors — host-level exceptions for the local execution environment.

The host communicates failures via *typed exceptions* that are converted into
receipts at the top of a call. These exceptions are pure-Python and
dependency-free so they can be raised from the lowest layers (journal, ABI
codec, call frames) without import cycles.

Hierarchy
---------
ExecError (base)
 ├─ Revert          : Callee failed; carries the raw revert payload and, when the
 │                    callee raised a structured contract error, that error object
 ├─ InvalidAccess   : Illegal operation under host rules (no active frame, call
 │                    depth exceeded, value sent to a non-payable entry point)
 └─ AbiDecodeError  : Calldata or return data that does not match the expected layout

Notes
-----
* A `Revert` is a *semantic* failure of a call, not a host bug. The host rolls
  back the failing frame's writes and events before surfacing it.
* Contract code never raises `Revert` itself; it raises an `AbiError` subclass
  (see chainsim.abi.types) and the host wraps it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class ExecError(Exception):
    """
    Base execution error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g., 'REVERT', 'INVALID_ACCESS').
        data:    Optional structured details (kept JSON-serializable).
    """
    message: str = "execution error"
    code: str = "EXEC_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for receipts/logs."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class Revert(ExecError):
    """
    Callee-triggered revert.

    Optional fields:
        return_data:  ABI-encoded error payload (selector || args), empty when the
                      failure had no structured error.
        error:        The structured exception the callee raised, if any.

    Usage:
        raise Revert("Unauthorized()", return_data=err.encode(), error=err)
    """
    def __init__(
        self,
        message: str = "reverted",
        *,
        return_data: bytes = b"",
        error: Optional[BaseException] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        d: Dict[str, Any] = {}
        if data:
            d.update(data)
        if return_data:
            d.setdefault("return_data", "0x" + bytes(return_data).hex())
        super().__init__(message=message, code="REVERT", data=d or None)
        self.return_data = bytes(return_data)
        self.error = error


class InvalidAccess(ExecError):
    """
    Illegal access or forbidden operation under host rules.

    Examples:
      - Contract API used outside of an active call frame
      - Nested call depth above the configured limit
      - Native value attached to a non-payable entry point
    """
    def __init__(
        self,
        message: str = "invalid access",
        *,
        op: Optional[str] = None,
        address: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        d: Dict[str, Any] = {}
        if data:
            d.update(data)
        if op is not None:
            d.setdefault("op", op)
        if address is not None:
            d.setdefault("address", address)
        super().__init__(message=message, code="INVALID_ACCESS", data=d or None)


class AbiDecodeError(ExecError):
    """Calldata or return data that cannot be decoded for the expected types."""
    def __init__(
        self,
        message: str = "abi decode error",
        *,
        type_name: Optional[str] = None,
        offset: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        d: Dict[str, Any] = {}
        if data:
            d.update(data)
        if type_name is not None:
            d.setdefault("type", type_name)
        if offset is not None:
            d.setdefault("offset", offset)
        super().__init__(message=message, code="ABI_DECODE", data=d or None)


__all__ = [
    "ExecError",
    "Revert",
    "InvalidAccess",
    "AbiDecodeError",
]

"""
Structured, self-encoding errors for contract code.

Contracts signal failure by raising an `AbiError` subclass. Each subclass names
a Solidity-style error signature and its field names:

    class InsufficientBalance(AbiError):
        SIGNATURE = "InsufficientBalance(address,uint256,uint256)"
        FIELDS = ("sender", "have", "want")

The host turns a raised error into a rollback plus a revert payload:

    payload = selector(SIGNATURE) || encode_values(types, field values)

`ErrorRegistry` performs the inverse mapping so receipts and callers can
recover the typed error from raw return data.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterator, Optional, Tuple, Type, TypeVar

from ..errors import AbiDecodeError
from .decoding import decode_values
from .encoding import encode_values
from .selectors import SELECTOR_LEN, selector, split_signature

__all__ = ["AbiError", "ErrorRegistry"]

E = TypeVar("E", bound="AbiError")


class AbiError(Exception):
    """Base class for errors that travel across the call boundary as bytes."""

    SIGNATURE: ClassVar[str] = "Error(string)"
    FIELDS: ClassVar[Tuple[str, ...]] = ("reason",)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        if len(args) > len(self.FIELDS):
            raise TypeError(f"{type(self).__name__} takes {len(self.FIELDS)} fields, got {len(args)}")
        values: Dict[str, Any] = dict(zip(self.FIELDS, args))
        for k, v in kwargs.items():
            if k not in self.FIELDS:
                raise TypeError(f"{type(self).__name__} has no field {k!r}")
            if k in values:
                raise TypeError(f"{type(self).__name__} got field {k!r} twice")
            values[k] = v
        missing = [f for f in self.FIELDS if f not in values]
        if missing:
            raise TypeError(f"{type(self).__name__} missing fields: {', '.join(missing)}")
        for k in self.FIELDS:
            setattr(self, k, values[k])
        super().__init__(*(values[f] for f in self.FIELDS))

    # ---- introspection ---- #

    @classmethod
    def error_name(cls) -> str:
        return split_signature(cls.SIGNATURE)[0]

    @classmethod
    def arg_types(cls) -> Tuple[str, ...]:
        return split_signature(cls.SIGNATURE)[1]

    @classmethod
    def error_selector(cls) -> bytes:
        return selector(cls.SIGNATURE)

    def values(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, f) for f in self.FIELDS)

    # ---- wire form ---- #

    def encode(self) -> bytes:
        return self.error_selector() + encode_values(self.arg_types(), self.values())

    @classmethod
    def decode(cls: Type[E], data: bytes) -> E:
        buf = bytes(data)
        if buf[:SELECTOR_LEN] != cls.error_selector():
            raise AbiDecodeError(f"selector does not match {cls.error_name()}", offset=0)
        return cls(*decode_values(cls.arg_types(), buf[SELECTOR_LEN:]))

    # ---- value semantics ---- #

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.values() == other.values()  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self), self.values()))

    def __str__(self) -> str:
        parts = []
        for k, v in zip(self.FIELDS, self.values()):
            if isinstance(v, (bytes, bytearray)):
                v = "0x" + bytes(v).hex()
            parts.append(f"{k}={v}")
        return f"{self.error_name()}(" + ", ".join(parts) + ")"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.error_name()}
        for k, v in zip(self.FIELDS, self.values()):
            out[k] = "0x" + bytes(v).hex() if isinstance(v, (bytes, bytearray)) else v
        return out


class ErrorRegistry:
    """Selector → error class lookup used to decode revert payloads."""

    def __init__(self) -> None:
        self._by_selector: Dict[bytes, Type[AbiError]] = {}

    def register(self, cls: Type[E]) -> Type[E]:
        sel = cls.error_selector()
        existing = self._by_selector.get(sel)
        if existing is not None and existing is not cls:
            raise ValueError(
                f"error selector collision: {cls.SIGNATURE} vs {existing.SIGNATURE}"
            )
        self._by_selector[sel] = cls
        return cls

    def lookup(self, data: bytes) -> Optional[Type[AbiError]]:
        return self._by_selector.get(bytes(data[:SELECTOR_LEN]))

    def decode(self, data: bytes) -> Optional[AbiError]:
        """
        Return the typed error encoded in `data`, or None if the selector is
        unknown or the payload is malformed.
        """
        cls = self.lookup(data)
        if cls is None:
            return None
        try:
            return cls.decode(data)
        except AbiDecodeError:
            return None

    def __iter__(self) -> Iterator[Type[AbiError]]:
        return iter(self._by_selector.values())

    def __contains__(self, cls: object) -> bool:
        return cls in self._by_selector.values()

    def __len__(self) -> int:
        return len(self._by_selector)

"""
Selector dispatch for contract modules.

Contracts mark their entry points with `@external`:

    @external("transfer(address,uint256)", returns=("bool",), caller=True)
    def transfer(caller: bytes, to: bytes, value: int) -> bool: ...

    @external("balanceOf(address)", returns=("uint256",))
    def balance_of(account: bytes) -> int: ...

`DispatchTable.from_module(module)` collects every marked function, computes
its 4-byte selector and rejects collisions. The host uses the table to:

  1. split calldata into selector + args
  2. decode args for the declared input types
  3. prepend the frame's sender when `caller=True`
  4. encode the return value for the declared output types

A module may also define a `@receiver` function that runs when native value
arrives with empty calldata.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .decoding import decode_values
from .encoding import encode_values
from .selectors import canonical_signature, selector, split_signature

__all__ = ["ExternalMethod", "DispatchTable", "external", "receiver"]

_ATTR = "__abi_external__"
_RECV_ATTR = "__abi_receiver__"


@dataclass(frozen=True)
class ExternalMethod:
    signature: str
    fn: Callable[..., Any]
    returns: Tuple[str, ...] = ()
    caller: bool = False
    payable: bool = False

    @property
    def name(self) -> str:
        return split_signature(self.signature)[0]

    @property
    def inputs(self) -> Tuple[str, ...]:
        return split_signature(self.signature)[1]

    @property
    def selector(self) -> bytes:
        return selector(self.signature)

    def decode_args(self, body: bytes, *, strict: bool = True) -> Tuple[Any, ...]:
        return decode_values(self.inputs, body, strict=strict)

    def encode_result(self, result: Any) -> bytes:
        if not self.returns:
            return b""
        values: Sequence[Any] = result if len(self.returns) > 1 else (result,)
        return encode_values(self.returns, list(values))

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "signature": canonical_signature(self.signature),
            "selector": "0x" + self.selector.hex(),
            "inputs": list(self.inputs),
            "outputs": list(self.returns),
            "payable": self.payable,
        }


def external(
    signature: str,
    *,
    returns: Sequence[str] = (),
    caller: bool = False,
    payable: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a module-level function as an ABI entry point."""

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        split_signature(signature)
        setattr(
            fn,
            _ATTR,
            ExternalMethod(
                signature=signature,
                fn=fn,
                returns=tuple(returns),
                caller=caller,
                payable=payable,
            ),
        )
        return fn

    return deco


def receiver(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Mark `fn(caller, amount)` as the native-value receive hook."""
    setattr(fn, _RECV_ATTR, True)
    return fn


class DispatchTable:
    """Selector → ExternalMethod mapping for one contract module."""

    def __init__(self, methods: Sequence[ExternalMethod], receive: Optional[Callable[..., Any]] = None) -> None:
        self._by_selector: Dict[bytes, ExternalMethod] = {}
        for m in methods:
            sel = m.selector
            other = self._by_selector.get(sel)
            if other is not None:
                raise ValueError(
                    f"selector collision 0x{sel.hex()}: {m.signature} vs {other.signature}"
                )
            self._by_selector[sel] = m
        self.receive = receive

    @classmethod
    def from_module(cls, module: ModuleType) -> "DispatchTable":
        methods: List[ExternalMethod] = []
        receive: Optional[Callable[..., Any]] = None
        for attr in vars(module).values():
            m = getattr(attr, _ATTR, None)
            if isinstance(m, ExternalMethod):
                methods.append(m)
            if callable(attr) and getattr(attr, _RECV_ATTR, False):
                receive = attr
        methods.sort(key=lambda m: m.signature)
        return cls(methods, receive=receive)

    def lookup(self, sel: bytes) -> Optional[ExternalMethod]:
        return self._by_selector.get(bytes(sel))

    def __iter__(self) -> Iterator[ExternalMethod]:
        return iter(self._by_selector.values())

    def __len__(self) -> int:
        return len(self._by_selector)

    def describe(self) -> List[Dict[str, Any]]:
        return [m.describe() for m in self]

"""
chainsim.state.world — the persisted base state of the local host.

`WorldState` is what survives a committed top-level call:

  - storage:  address -> {key -> value}     (per-contract key/value)
  - balances: address -> int                (native currency, smallest unit)
  - code:     address -> contract module    (installed by Host.deploy)
  - logs:     ordered list of committed events

"Empty means absent": an empty storage value and a zero balance are not
stored. The journal (chainsim.state.journal) stages writes above this object
and only touches it on a final commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Dict, Iterator, List, Optional, Tuple


def _b(x: bytes | bytearray | memoryview, *, name: str) -> bytes:
    if not isinstance(x, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like")
    return bytes(x)


@dataclass
class WorldState:
    storage: Dict[bytes, Dict[bytes, bytes]] = field(default_factory=dict)
    balances: Dict[bytes, int] = field(default_factory=dict)
    code: Dict[bytes, ModuleType] = field(default_factory=dict)
    logs: List[Any] = field(default_factory=list)

    # ---- storage ---- #

    def storage_get(self, address: bytes, key: bytes) -> Optional[bytes]:
        m = self.storage.get(_b(address, name="address"))
        if m is None:
            return None
        return m.get(_b(key, name="key"))

    def storage_set(self, address: bytes, key: bytes, value: Optional[bytes]) -> None:
        addr = _b(address, name="address")
        k = _b(key, name="key")
        if value is None or len(value) == 0:
            m = self.storage.get(addr)
            if m is not None:
                m.pop(k, None)
                if not m:
                    del self.storage[addr]
            return
        self.storage.setdefault(addr, {})[k] = bytes(value)

    def storage_items(self, address: bytes) -> Iterator[Tuple[bytes, bytes]]:
        m = self.storage.get(_b(address, name="address"), {})
        for k in sorted(m):
            yield k, m[k]

    # ---- balances ---- #

    def balance(self, address: bytes) -> int:
        return self.balances.get(_b(address, name="address"), 0)

    def set_balance(self, address: bytes, amount: int) -> None:
        addr = _b(address, name="address")
        if amount < 0:
            raise ValueError("balance cannot be negative")
        if amount == 0:
            self.balances.pop(addr, None)
        else:
            self.balances[addr] = int(amount)

    # ---- code ---- #

    def get_code(self, address: bytes) -> Optional[ModuleType]:
        return self.code.get(_b(address, name="address"))

    def set_code(self, address: bytes, module: ModuleType) -> None:
        self.code[_b(address, name="address")] = module


__all__ = ["WorldState"]

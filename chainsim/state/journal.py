"""
chainsim.state.journal — journaling writes, checkpoints, revert/commit.

This module provides a deterministic, in-memory write journal layered over a
`WorldState`. It supports nested checkpoints via a stack of overlays. Writes
go to the top overlay; reads consult overlays from top → base. `commit()`
merges the top overlay into the next layer (or the base state if it's the
last layer). `revert()` discards the top overlay.

Every call frame opened by the host runs inside its own checkpoint, so a
failing nested call drops exactly its own writes and events while the caller
keeps going.

Key properties
--------------
- Pure Python, no I/O; safe for unit tests and simulations.
- Storage overlay per (address, key) with explicit deletion markers.
- Native balances are staged as absolute values per address.
- Emitted events are staged in order and only reach `WorldState.logs` on the
  final commit.
- Nested checkpoints (begin/commit/revert) with O(changes) merge cost.

Intended usage
--------------
    j = Journal(world)
    j.begin()                       # start a checkpoint
    j.set_balance(addr, j.balance(addr) + 5)
    j.storage_set(addr, key, b"value")
    j.emit(event)
    j.commit()                      # apply to parent/base

Notes
-----
- This journal does not enforce economic rules; callers (runtime APIs)
  validate amounts and authorization before writing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Dict, List, Optional

from .world import WorldState


def _b(x: bytes | bytearray | memoryview, *, name: str) -> bytes:
    if not isinstance(x, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like")
    return bytes(x)


# =============================================================================
# Overlay model
# =============================================================================


@dataclass
class _Overlay:
    """
    A single journal layer.

    - `storage`: staged storage changes. `None` means deletion for that key.
    - `balances`: staged absolute balances.
    - `code`: contracts installed in this layer.
    - `events`: events emitted in this layer, in order.
    """

    storage: Dict[bytes, Dict[bytes, Optional[bytes]]] = field(default_factory=dict)
    balances: Dict[bytes, int] = field(default_factory=dict)
    code: Dict[bytes, ModuleType] = field(default_factory=dict)
    events: List[Any] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.storage or self.balances or self.code or self.events)


# =============================================================================
# Journal
# =============================================================================


class Journal:
    """
    A copy-on-write write journal with nested checkpoints.

    API highlights
    --------------
    - begin() / commit() / revert()
    - commit_to(marker) / revert_to(marker)
    - storage_get(), storage_set(), storage_delete()
    - balance(), set_balance()
    - get_code(), set_code()
    - emit(), pending_events()
    """

    def __init__(self, world: WorldState) -> None:
        self._world = world
        # Start with a single empty overlay for convenience.
        self._layers: List[_Overlay] = [_Overlay()]

    @property
    def world(self) -> WorldState:
        return self._world

    # --------------------------------------------------------------------- #
    # Checkpointing
    # --------------------------------------------------------------------- #

    def depth(self) -> int:
        """Number of overlays (>= 1)."""
        return len(self._layers)

    def begin(self) -> int:
        """Start a new checkpoint. Returns the new depth marker (int)."""
        self._layers.append(_Overlay())
        return len(self._layers)

    def commit(self) -> None:
        """
        Commit the top overlay into its parent, or into the base state when
        only the root layer remains.
        """
        top = self._layers.pop()
        if self._layers:
            self._merge_layers(self._layers[-1], top)
        else:
            self._apply_to_base(top)
            self._layers.append(_Overlay())

    def revert(self) -> None:
        """Discard the top overlay (or clear it if it's the root)."""
        if len(self._layers) > 1:
            self._layers.pop()
        else:
            self._layers[0] = _Overlay()

    def commit_to(self, marker: int) -> None:
        """Commit repeatedly until the current depth equals `marker`."""
        if marker < 1:
            raise ValueError("marker must be >= 1")
        while len(self._layers) > marker:
            self.commit()

    def revert_to(self, marker: int) -> None:
        """Revert repeatedly until the current depth equals `marker`."""
        if marker < 1:
            raise ValueError("marker must be >= 1")
        while len(self._layers) > marker:
            self.revert()

    # --------------------------------------------------------------------- #
    # Storage API
    # --------------------------------------------------------------------- #

    def storage_get(
        self,
        address: bytes | bytearray | memoryview,
        key: bytes | bytearray | memoryview,
    ) -> Optional[bytes]:
        """Read storage with overlay precedence. Returns None if absent."""
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        for layer in reversed(self._layers):
            m = layer.storage.get(addr)
            if m is not None and key_b in m:
                return m[key_b]
        return self._world.storage_get(addr, key_b)

    def storage_set(
        self,
        address: bytes | bytearray | memoryview,
        key: bytes | bytearray | memoryview,
        value: bytes | bytearray | memoryview,
    ) -> None:
        """Stage a storage write in the top overlay. Empty value is a deletion."""
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        val_b = _b(value, name="value")
        self._layers[-1].storage.setdefault(addr, {})[key_b] = val_b or None

    def storage_delete(
        self,
        address: bytes | bytearray | memoryview,
        key: bytes | bytearray | memoryview,
    ) -> None:
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        self._layers[-1].storage.setdefault(addr, {})[key_b] = None

    # --------------------------------------------------------------------- #
    # Native balances
    # --------------------------------------------------------------------- #

    def balance(self, address: bytes | bytearray | memoryview) -> int:
        addr = _b(address, name="address")
        for layer in reversed(self._layers):
            if addr in layer.balances:
                return layer.balances[addr]
        return self._world.balance(addr)

    def set_balance(self, address: bytes | bytearray | memoryview, amount: int) -> None:
        if amount < 0:
            raise ValueError("balance cannot be negative")
        self._layers[-1].balances[_b(address, name="address")] = int(amount)

    # --------------------------------------------------------------------- #
    # Code
    # --------------------------------------------------------------------- #

    def get_code(self, address: bytes | bytearray | memoryview) -> Optional[ModuleType]:
        addr = _b(address, name="address")
        for layer in reversed(self._layers):
            if addr in layer.code:
                return layer.code[addr]
        return self._world.get_code(addr)

    def set_code(self, address: bytes | bytearray | memoryview, module: ModuleType) -> None:
        self._layers[-1].code[_b(address, name="address")] = module

    # --------------------------------------------------------------------- #
    # Events
    # --------------------------------------------------------------------- #

    def emit(self, event: Any) -> None:
        self._layers[-1].events.append(event)

    def pending_events(self) -> List[Any]:
        """All staged events across layers, oldest first."""
        out: List[Any] = []
        for layer in self._layers:
            out.extend(layer.events)
        return out

    # --------------------------------------------------------------------- #
    # Internal merge/apply
    # --------------------------------------------------------------------- #

    @staticmethod
    def _merge_layers(dst: _Overlay, src: _Overlay) -> None:
        for addr, writes in src.storage.items():
            dst.storage.setdefault(addr, {}).update(writes)
        dst.balances.update(src.balances)
        dst.code.update(src.code)
        dst.events.extend(src.events)

    def _apply_to_base(self, layer: _Overlay) -> None:
        w = self._world
        for addr, module in layer.code.items():
            w.set_code(addr, module)
        for addr, writes in layer.storage.items():
            for k, v in writes.items():
                w.storage_set(addr, k, v)
        for addr, amount in layer.balances.items():
            w.set_balance(addr, amount)
        w.logs.extend(layer.events)

    # --------------------------------------------------------------------- #
    # Debug/Introspection
    # --------------------------------------------------------------------- #

    def is_clean(self) -> bool:
        return len(self._layers) == 1 and self._layers[0].is_empty()


__all__ = ["Journal"]

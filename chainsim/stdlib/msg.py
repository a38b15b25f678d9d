"""Read-only view of the active call frame."""

from __future__ import annotations

from ..runtime.context import current_frame


def sender() -> bytes:
    return current_frame().sender


def address() -> bytes:
    """The running contract's own address."""
    return current_frame().address


def value() -> int:
    return current_frame().value


__all__ = ["sender", "address", "value"]

"""
chainsim.runtime.events_api — contract-facing event emission.

Contracts call `emit(name, args)` with a bytes name and a mapping of
identifier-like keys to bytes / int / bool values. Events are staged in the
host journal, so they vanish together with the writes of a reverted frame
and appear in the receipt of a successful transaction in emission order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from ..config import load_config
from ..errors import ExecError
from .context import current_frame, current_host, to_hex

MAX_KEY_LEN = 64
MAX_BYTES_LEN = 4096
MAX_INT_BITS = 256

# Keys must be identifier-like: letters/underscore, then letters/digits/underscore.
_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Event:
    """A recorded event: emitting contract, name, validated args."""

    address: bytes
    name: bytes
    args: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """
        Canonical JSON-safe form:

            {"address": "0x..", "name": "Transfer", "args": {...}}

        bytes args become 0x-hex; ints and bools pass through.
        """
        out: Dict[str, Any] = {}
        for k, v in self.args.items():
            out[k] = to_hex(v) if isinstance(v, (bytes, bytearray)) else v
        return {
            "address": to_hex(self.address),
            "name": self.name.decode("ascii", errors="replace"),
            "args": out,
        }


def _invalid(msg: str, **data: Any) -> ExecError:
    return ExecError(message=msg, code="EVENT_INVALID", data=dict(data) or None)


# --- Validation helpers ------------------------------------------------------


def _check_name(name: Any) -> bytes:
    if not isinstance(name, (bytes, bytearray)):
        raise _invalid("event name must be bytes", where="name_type")
    b = bytes(name)
    if len(b) == 0:
        raise _invalid("event name must be non-empty", where="name_empty")
    if len(b) > load_config().max_event_name_bytes:
        raise _invalid("event name too long", where="name_length", len=len(b))
    return b


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise _invalid("event key must be str", where="key_type")
    if len(key) == 0 or len(key) > MAX_KEY_LEN:
        raise _invalid("event key length out of range", where="key_length", len=len(key))
    if not _KEY_RE.match(key):
        raise _invalid("event key has invalid characters", where="key_grammar", key=key)
    return key


def _check_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        b = bytes(value)
        if len(b) > MAX_BYTES_LEN:
            raise _invalid("event bytes arg too long", where="value_bytes_length", len=len(b))
        return b
    if isinstance(value, bool):
        # bool is a subclass of int, so check it before int.
        return value
    if isinstance(value, int):
        if value < 0 or value.bit_length() > MAX_INT_BITS:
            raise _invalid("event int arg out of range", where="value_int_bits")
        return int(value)
    raise _invalid("unsupported event arg type", where="value_type", py_type=type(value).__name__)


# --- Public API --------------------------------------------------------------


def emit(name: bytes, args: Mapping[Any, Any]) -> None:
    bname = _check_name(name)
    if not isinstance(args, Mapping):
        raise _invalid("event args must be a mapping", where="args_type")
    checked: Dict[str, Any] = {}
    for raw_k, raw_v in args.items():
        checked[_check_key(raw_k)] = _check_value(raw_v)
    current_host().journal.emit(Event(current_frame().address, bname, checked))


__all__ = ["Event", "emit", "MAX_KEY_LEN", "MAX_BYTES_LEN", "MAX_INT_BITS"]

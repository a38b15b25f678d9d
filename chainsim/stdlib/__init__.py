"""
chainsim.stdlib
===============

Contract-facing standard library surface.

Contracts can do:

    from chainsim.stdlib import storage, events, treasury, calls, msg

Exports
-------
- storage  : get/set/delete/exists, get_int/set_int (scoped to the running contract)
- events   : emit(name: bytes, args: dict)
- treasury : balance(addr=None), transfer(to, amount)
- calls    : call(to, data, value=0) -> CallResult
- msg      : sender(), address(), value() for the active call frame
"""

from __future__ import annotations

from ..runtime import call_api as calls
from ..runtime import events_api as events
from ..runtime import storage_api as storage
from ..runtime import treasury_api as treasury
from . import msg

__all__ = ["storage", "events", "treasury", "calls", "msg"]

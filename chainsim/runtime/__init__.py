"""
chainsim runtime package

Contains the execution host and the contract-facing APIs
(storage/events/treasury/calls) that contracts reach through
`chainsim.stdlib`.

Convenience re-exports live here so callers can do:

    from chainsim.runtime import Host, Receipt, CallFrame
    from chainsim.runtime import storage, events, treasury, calls  # module namespaces

Notes
-----
- All state access goes through the host journal of the active frame.
- No wall-clock I/O or system randomness is exposed here.
"""

from __future__ import annotations

from . import call_api as calls
from . import events_api as events
from . import storage_api as storage
from . import treasury_api as treasury
from .call_api import CallResult
from .context import CallFrame, current_frame
from .events_api import Event
from .host import REVERT, SUCCESS, Host, Receipt

__all__ = [
    "Host",
    "Receipt",
    "SUCCESS",
    "REVERT",
    "CallFrame",
    "CallResult",
    "Event",
    "current_frame",
    "storage",
    "events",
    "treasury",
    "calls",
]

"""
chainsim — a deterministic, in-process contract execution host.

Contracts are plain Python modules whose entry points are marked with
`chainsim.abi.external`. The host gives them per-address storage, native
balances, an event log, raw byte-level calls to other contracts and
all-or-nothing semantics per call.

    from chainsim import Host
    host = Host()
    host.deploy(addr, my_contract_module)
    rcpt = host.transact(sender, addr, calldata)
"""

from __future__ import annotations

from .config import HostConfig, load_config
from .errors import AbiDecodeError, ExecError, InvalidAccess, Revert
from .runtime import CallFrame, Host, Receipt
from .version import __version__

__all__ = [
    "__version__",
    "Host",
    "Receipt",
    "CallFrame",
    "HostConfig",
    "load_config",
    "ExecError",
    "Revert",
    "InvalidAccess",
    "AbiDecodeError",
]

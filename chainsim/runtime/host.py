"""
chainsim.runtime.host — deterministic in-process execution host.

The host owns the world state and runs contract modules against it:

    host = Host()
    host.credit(alice, 10**18)
    host.deploy(token_addr, token_module, "Token", "TKN", 18, 10**24)
    rcpt = host.transact(alice, token_addr, encode_call("init(address)", [alice]))
    assert rcpt.ok

Atomicity
---------
Every call (top-level or nested) runs inside its own journal checkpoint:

  1. attached value moves from sender to callee
  2. the callee's entry point runs with a fresh CallFrame
  3. success → checkpoint merges into the parent
     failure → checkpoint is discarded, a `Revert` is raised to the parent

A top-level `transact` therefore either commits every write, balance move and
event of the transaction, or none of them.

Error mapping
-------------
- Contract code raises `AbiError` subclasses. They become
  `Revert(return_data=err.encode(), error=err)`.
- Any other `ExecError` raised inside a frame becomes a `Revert` carrying its
  code; a `Revert` coming up from deeper frames passes through unchanged.
- Non-host exceptions (bugs) roll back the checkpoint and propagate as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Dict, List, Optional, Union

from ..abi import AbiError, DispatchTable, split_call
from ..abi.types import ZERO_ADDRESS
from ..config import HostConfig, load_config
from ..errors import ExecError, InvalidAccess, Revert
from ..state import Journal, WorldState
from .context import CallFrame, enter_frame, normalize_address, to_hex
from .events_api import Event

log = logging.getLogger(__name__)

AddressLike = Union[bytes, bytearray, str]

SUCCESS = "SUCCESS"
REVERT = "REVERT"


@dataclass
class Receipt:
    """
    Outcome of a top-level call.

    status: "SUCCESS" | "REVERT"
    output: ABI-encoded return data on success, revert payload on failure
    error:  the structured contract error that caused the revert, when the
            callee raised one (None for host-level failures)
    logs:   events committed by the call (empty on revert)
    """

    status: str
    output: bytes = b""
    error: Optional[BaseException] = None
    logs: List[Event] = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        err: Optional[Dict[str, Any]] = None
        if isinstance(self.error, AbiError):
            err = self.error.to_dict()
        elif self.error is not None:
            err = {"error": type(self.error).__name__, "message": str(self.error)}
        return {
            "status": self.status,
            "output": to_hex(self.output),
            "error": err,
            "message": self.message,
            "logs": [ev.to_dict() for ev in self.logs],
        }


class Host:
    """Deploys contract modules and executes calls against a journaled WorldState."""

    def __init__(self, config: Optional[HostConfig] = None, world: Optional[WorldState] = None) -> None:
        self.config = config or load_config()
        self.world = world if world is not None else WorldState()
        self.journal = Journal(self.world)
        self._tables: Dict[int, DispatchTable] = {}

    # ------------------------------------------------------------------ #
    # Genesis / inspection
    # ------------------------------------------------------------------ #

    def credit(self, address: AddressLike, amount: int) -> None:
        """Mint native currency to `address` (genesis funding)."""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise ValueError("amount must be a non-negative int")
        addr = normalize_address(address)
        new = self.world.balance(addr) + amount
        if new > self.config.uint_max:
            raise ValueError("balance overflow")
        self.world.set_balance(addr, new)

    def balance_of(self, address: AddressLike) -> int:
        return self.journal.balance(normalize_address(address))

    def code_at(self, address: AddressLike) -> Optional[ModuleType]:
        return self.journal.get_code(normalize_address(address))

    @property
    def logs(self) -> List[Event]:
        return list(self.world.logs)

    def dispatch_table(self, module: ModuleType) -> DispatchTable:
        key = id(module)
        table = self._tables.get(key)
        if table is None:
            table = DispatchTable.from_module(module)
            self._tables[key] = table
        return table

    # ------------------------------------------------------------------ #
    # Deployment
    # ------------------------------------------------------------------ #

    def deploy(
        self,
        address: AddressLike,
        module: ModuleType,
        *ctor_args: Any,
        deployer: AddressLike = ZERO_ADDRESS,
    ) -> ModuleType:
        """
        Install `module` as the code at `address` and run its optional
        `constructor(*ctor_args)`. Raises `Revert` if the constructor fails,
        in which case nothing is installed.
        """
        addr = normalize_address(address)
        sender = normalize_address(deployer)
        if self.journal.get_code(addr) is not None:
            raise InvalidAccess("address already holds code", op="deploy", address=to_hex(addr))
        self.dispatch_table(module)

        self.journal.begin()
        try:
            self.journal.set_code(addr, module)
            ctor = getattr(module, "constructor", None)
            if ctor is not None:
                with enter_frame(self, CallFrame(sender, addr, 0, 0)):
                    self._run(lambda: ctor(*ctor_args))
        except BaseException:
            self.journal.revert_to(1)
            self.journal.revert()
            raise
        self.journal.commit_to(1)
        self.journal.commit()
        log.info("deployed %s at %s", module.__name__, to_hex(addr))
        return module

    # ------------------------------------------------------------------ #
    # Top-level calls
    # ------------------------------------------------------------------ #

    def transact(self, sender: AddressLike, to: AddressLike, data: bytes, value: int = 0) -> Receipt:
        """Run one atomic top-level call and commit or discard all of its effects."""
        return self._top_level(sender, to, data, value, persist=True)

    def static_call(self, to: AddressLike, data: bytes, sender: AddressLike = ZERO_ADDRESS) -> Receipt:
        """Run a call and always discard its effects."""
        return self._top_level(sender, to, data, 0, persist=False)

    def _top_level(self, sender: AddressLike, to: AddressLike, data: bytes, value: int, *, persist: bool) -> Receipt:
        frm = normalize_address(sender)
        dest = normalize_address(to)
        try:
            out = self.call(frm, dest, bytes(data), value, depth=0)
        except ExecError as exc:
            self.journal.revert_to(1)
            self.journal.revert()
            return self._revert_receipt(exc)
        logs = self.journal.pending_events()
        if persist:
            self.journal.commit()
        else:
            self.journal.revert()
        return Receipt(status=SUCCESS, output=out, logs=logs)

    @staticmethod
    def _revert_receipt(exc: ExecError) -> Receipt:
        if isinstance(exc, Revert):
            return Receipt(status=REVERT, output=exc.return_data, error=exc.error, message=exc.message)
        return Receipt(status=REVERT, error=None, message=str(exc))

    # ------------------------------------------------------------------ #
    # Frame execution
    # ------------------------------------------------------------------ #

    def call(self, sender: bytes, to: bytes, data: bytes, value: int = 0, *, depth: int) -> bytes:
        """
        Execute one call frame and return its ABI-encoded output.

        Raises `Revert` when the callee fails; raises `InvalidAccess` before
        opening a checkpoint when the call may not start at all.
        """
        cfg = self.config
        if depth > cfg.max_call_depth:
            raise InvalidAccess("call depth exceeded", op="call", data={"depth": depth})
        if len(data) > cfg.max_calldata_bytes:
            raise InvalidAccess("calldata too large", op="call", data={"len": len(data)})
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidAccess("value must be a non-negative int", op="call")

        log.debug(
            "call %s -> %s sel=%s value=%d depth=%d",
            to_hex(sender), to_hex(to), data[:4].hex() or "-", value, depth,
        )
        marker = self.journal.begin()
        try:
            self._move_value(sender, to, value)
            module = self.journal.get_code(to)
            if module is None:
                out = b""
            else:
                frame = CallFrame(sender, to, value, depth)
                with enter_frame(self, frame):
                    out = self._run(lambda: self._dispatch(module, frame, data))
        except Revert as exc:
            self.journal.revert_to(marker - 1)
            log.debug("revert at depth %d: %s", depth, exc.message)
            raise
        except BaseException:
            self.journal.revert_to(marker - 1)
            raise
        self.journal.commit_to(marker - 1)
        return out

    def _move_value(self, sender: bytes, to: bytes, value: int) -> None:
        if value == 0:
            return
        have = self.journal.balance(sender)
        if have < value:
            raise Revert(
                "insufficient native balance",
                data={"sender": to_hex(sender), "have": have, "want": value},
            )
        after = self.journal.balance(to) + value
        if after > self.config.uint_max:
            raise Revert("native balance overflow", data={"to": to_hex(to)})
        self.journal.set_balance(sender, have - value)
        self.journal.set_balance(to, self.journal.balance(to) + value)

    def _run(self, fn: Any) -> Any:
        """Run contract code, mapping its failures onto `Revert`."""
        try:
            return fn()
        except AbiError as err:
            raise Revert(str(err), return_data=err.encode(), error=err) from err
        except Revert:
            raise
        except ExecError as exc:
            raise Revert(exc.message, data=exc.to_dict()) from exc

    def _dispatch(self, module: ModuleType, frame: CallFrame, data: bytes) -> bytes:
        table = self.dispatch_table(module)
        if not data:
            if table.receive is None:
                if frame.value:
                    raise InvalidAccess("contract has no receive hook", op="receive", address=to_hex(frame.address))
                return b""
            table.receive(frame.sender, frame.value)
            return b""

        sel, body = split_call(data)
        method = table.lookup(sel)
        if method is None:
            raise InvalidAccess("unknown selector", op="dispatch", data={"selector": "0x" + sel.hex()})
        if frame.value and not method.payable:
            raise InvalidAccess("value sent to non-payable entry point", op=method.name)

        args = method.decode_args(body, strict=self.config.strict_mode)
        if method.caller:
            args = (frame.sender,) + tuple(args)
        return method.encode_result(method.fn(*args))


__all__ = ["Host", "Receipt", "SUCCESS", "REVERT"]

"""
contracts.tools.cli
-------------------

`tokensale-sim`: run the Ledger + Sale Controller on a throwaway local host.

Commands
--------
demo        Deploy both contracts, fund the sale, buy, end the sale, and print
            every receipt and the final balances as JSON.
selectors   Print the function and error selectors of both contracts.
version     Print the package version.

Examples
--------
tokensale-sim demo --price 10 --inventory 1000 --buy 100
tokensale-sim demo --buy 100 --pay 1500          # 500 refunded
tokensale-sim selectors --json
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import typer

from chainsim import Host, Receipt, __version__, load_config
from chainsim.abi import DispatchTable

from ..errors import REGISTRY
from ..stdlib.token import TokenConfig
from ..token import contract as token_contract
from ..token_sale import contract as sale_contract
from . import jsonable
from .deploy import deploy_sale, deploy_token, send, view

log = logging.getLogger(__name__)

app = typer.Typer(
    name="tokensale-sim",
    add_completion=False,
    no_args_is_help=True,
    help="Simulate the token ledger and sale controller on a local host.",
)

# -------------------- fixed demo accounts --------------------

TOKEN = bytes.fromhex("00000000000000000000000000000000000a0001")
SALE = bytes.fromhex("00000000000000000000000000000000000a0002")
OWNER = bytes.fromhex("00000000000000000000000000000000000b0001")
BUYER = bytes.fromhex("00000000000000000000000000000000000b0002")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else load_config().numeric_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _step(name: str, rcpt: Receipt) -> Dict[str, Any]:
    d = rcpt.to_dict()
    d["step"] = name
    return d


# -------------------- commands --------------------


@app.command("demo")
def demo(
    price: int = typer.Option(10, min=1, help="Token price in native units."),
    supply: int = typer.Option(1_000_000, min=0, help="Initial token supply minted to the owner."),
    inventory: int = typer.Option(1_000, min=0, help="Tokens the owner moves to the sale contract."),
    buy: int = typer.Option(100, min=0, help="Tokens the buyer asks for."),
    pay: Optional[int] = typer.Option(None, min=0, help="Native amount the buyer attaches (default: exact cost)."),
    funds: int = typer.Option(10**9, min=0, help="Native balance credited to the buyer."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every call."),
) -> None:
    """Deploy, fund, buy and end the sale; print receipts and balances."""
    _setup_logging(verbose)
    host = Host()
    host.credit(BUYER, funds)

    cfg = TokenConfig("Demo Token", "DEMO", 18, supply)
    deploy_token(host, TOKEN, cfg, deployer=OWNER)
    deploy_sale(host, SALE, deployer=OWNER)

    attached = price * buy if pay is None else pay
    steps: List[Dict[str, Any]] = [
        _step("token.init", send(host, OWNER, TOKEN, "init(address)", OWNER)),
        _step("sale.init", send(host, OWNER, SALE, "init(address,uint256)", TOKEN, price)),
        _step("token.fund_sale", send(host, OWNER, TOKEN, "transfer(address,uint256)", SALE, inventory)),
        _step("sale.buyTokens", send(host, BUYER, SALE, "buyTokens(uint256)", buy, value=attached)),
        _step("sale.endSale", send(host, OWNER, SALE, "endSale()")),
    ]

    def tokens(addr: bytes) -> int:
        return view(host, TOKEN, "balanceOf(address)", addr)

    balances = {
        name: {"tokens": tokens(addr), "native": host.balance_of(addr)}
        for name, addr in (("owner", OWNER), ("buyer", BUYER), ("sale", SALE))
    }
    summary = {
        "token": cfg.to_dict(),
        "steps": steps,
        "balances": balances,
        "tokens_sold": view(host, SALE, "tokensSold()"),
        "total_supply": view(host, TOKEN, "totalSupply()"),
    }
    typer.echo(json.dumps(jsonable(summary), indent=2, sort_keys=True))
    if not all(s["status"] == "SUCCESS" for s in steps):
        raise typer.Exit(code=1)


@app.command("selectors")
def selectors(
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Print the ABI selector table of both contracts and the error selectors."""
    rows: List[Dict[str, Any]] = []
    for label, module in (("ledger", token_contract), ("sale", sale_contract)):
        for entry in DispatchTable.from_module(module).describe():
            rows.append({"contract": label, "kind": "function", **entry})
    for cls in sorted(REGISTRY, key=lambda c: c.SIGNATURE):
        rows.append({
            "contract": "*",
            "kind": "error",
            "name": cls.error_name(),
            "signature": cls.SIGNATURE,
            "selector": "0x" + cls.error_selector().hex(),
        })

    if json_out:
        typer.echo(json.dumps(rows, indent=2, sort_keys=True))
        return
    for r in rows:
        typer.echo(f"{r['selector']}  {r['contract']:<7}{r['kind']:<9}{r['signature']}")


@app.command("version")
def version() -> None:
    """Print the package version."""
    typer.echo(__version__)


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

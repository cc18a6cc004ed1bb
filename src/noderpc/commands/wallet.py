"""Wallet commands."""

from __future__ import annotations

from typing import Annotated

import typer

from noderpc.commands._errors import handle_errors
from noderpc.container import get_wallet_service
from noderpc.formatters import format_json

app = typer.Typer(
    name="wallet",
    help="Query the node's wallet",
    no_args_is_help=True,
)


@app.command()
def balance(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output in JSON format")
    ] = False,
) -> None:
    """Print the wallet's trusted balance."""
    with handle_errors():
        amount = get_wallet_service().get_balance()
    if json_output:
        print(format_json({"balance": amount}))
    else:
        print(amount)

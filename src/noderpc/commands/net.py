"""Peer-to-peer network commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from noderpc.commands._errors import handle_errors
from noderpc.container import get_network_service
from noderpc.formatters import format_json, format_table, format_tree, to_plain

app = typer.Typer(
    name="net",
    help="Inspect the node's peers and connectivity",
    no_args_is_help=True,
)

console = Console()

JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output in JSON format")]


@app.command()
def info(json_output: JsonOption = False) -> None:
    """Show network state (getnetworkinfo)."""
    with handle_errors():
        result = get_network_service().get_network_info()
    if json_output:
        print(format_json(result))
    else:
        print(format_tree(to_plain(result), label=result.subversion), end="")


@app.command()
def peers(json_output: JsonOption = False) -> None:
    """List connected peers."""
    with handle_errors():
        result = get_network_service().get_peer_info()
    if json_output:
        print(format_json(result))
    else:
        print(
            format_table(
                to_plain(result),
                columns=["id", "addr", "subver", "inbound", "pingtime", "synced_blocks"],
                title="Peers",
            ),
            end="",
        )


@app.command()
def connections() -> None:
    """Print the number of peer connections."""
    with handle_errors():
        print(get_network_service().get_connection_count())

"""Main CLI entry point for noderpc."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from noderpc import __version__
from noderpc.commands import chain, config, fee, net, wallet
from noderpc.commands.call import call
from noderpc.container import set_config_path

app = typer.Typer(
    name="noderpc",
    help="noderpc - typed JSON-RPC client for a cryptocurrency node",
    no_args_is_help=True,
    add_completion=False,
)

app.command(name="call")(call)
app.add_typer(chain.app, name="chain")
app.add_typer(net.app, name="net")
app.add_typer(fee.app, name="fee")
app.add_typer(wallet.app, name="wallet")
app.add_typer(config.app, name="config")

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"noderpc version: {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Explicit configuration file"),
    ] = None,
) -> None:
    """
    noderpc - command-line access to a node's RPC interface.

    Use 'noderpc COMMAND --help' for help with specific commands.
    """
    if config_file is not None:
        set_config_path(config_file)


def cli_main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    cli_main()

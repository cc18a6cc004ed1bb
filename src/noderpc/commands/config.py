"""Configuration management commands.

- show: Display the effective configuration
- init: Write a configuration template
- validate: Check the configuration and report warnings

Config commands use the configuration layer directly; there is no service
in between.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from noderpc.commands._errors import handle_errors
import noderpc.config as config_module
from noderpc.config import GLOBAL_CONFIG_PATH, PROJECT_CONFIG_NAME, Config
from noderpc.container import get_config
from noderpc.formatters import format_json, format_success, format_warning

app = typer.Typer(
    name="config",
    help="Manage noderpc configuration",
    no_args_is_help=True,
)

console = Console()


@app.command()
def show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output in JSON format")
    ] = False,
) -> None:
    """Display the effective configuration (password masked)."""
    with handle_errors():
        config = get_config()
    data = config.to_dict()

    if json_output:
        print(format_json(data))
        return

    for section, values in data.items():
        table = Table(title=f"{section} settings", show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")
        for key, value in values.items():
            table.add_row(key, escape("Not set" if value is None else str(value)))
        console.print(table)

    console.print("\n[dim]Override with NODERPC_<SECTION>__<KEY>, e.g. NODERPC_RPC__URL[/dim]")


@app.command()
def init(
    global_config: Annotated[
        bool,
        typer.Option("--global", "-g", help=f"Write {GLOBAL_CONFIG_PATH} instead of ./{PROJECT_CONFIG_NAME}"),
    ] = False,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite an existing file")
    ] = False,
) -> None:
    """Write a configuration template."""
    path = config_module.GLOBAL_CONFIG_PATH if global_config else Path.cwd() / PROJECT_CONFIG_NAME
    if path.exists() and not force:
        console.print(
            f"[red]Configuration file already exists:[/red] {path}. Use --force to overwrite."
        )
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(Config.get_template(), encoding="utf-8")
    console.print(format_success(f"Configuration written to {path}"))


@app.command()
def validate() -> None:
    """Load the configuration and report problems."""
    with handle_errors():
        config = get_config()
        config.auth.credentials()

    warnings = config.validate_config()
    for warning in warnings:
        console.print(format_warning(escape(warning)))
    if not warnings:
        console.print(format_success("Configuration is valid"))

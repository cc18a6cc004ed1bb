"""Fee estimation commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from noderpc.commands._errors import handle_errors
from noderpc.container import get_mining_service
from noderpc.formatters import format_json, format_warning
from noderpc.models.mining import EstimateMode

app = typer.Typer(
    name="fee",
    help="Estimate transaction fees",
    no_args_is_help=True,
)

console = Console()


@app.command()
def estimate(
    target: Annotated[int, typer.Argument(help="Confirmation target in blocks (1-1008)")],
    mode: Annotated[
        EstimateMode | None,
        typer.Option("--mode", "-m", help="Estimation mode", case_sensitive=False),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output in JSON format")
    ] = False,
) -> None:
    """Estimate the fee rate for confirmation within TARGET blocks.

    Examples:
        noderpc fee estimate 6
        noderpc fee estimate 2 --mode conservative
    """
    with handle_errors():
        result = get_mining_service().estimate_smart_fee(target, mode)
    if json_output:
        print(format_json(result))
    elif result.feerate is None:
        reasons = "; ".join(result.errors or []) or "no estimate available"
        console.print(format_warning(f"No fee estimate: {reasons}"))
    else:
        console.print(f"[bold]Fee rate:[/bold] {result.feerate}/kvB")
        console.print(f"[bold]Blocks:[/bold] {result.blocks}")

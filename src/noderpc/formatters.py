"""Output formatters for the noderpc CLI.

Provides two output formats:
- JSON: Machine-readable format for scripting
- Table/tree: Human-readable rich rendering (default)

Amounts always render with eight fractional digits and decimals in plain
fixed-point notation, in both formats.
"""

from __future__ import annotations

import json
import os
import sys
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from noderpc.codec.amount import Amount


def _should_use_color() -> bool:
    """Color is off for piped output, NO_COLOR, or TERM=dumb."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return sys.stdout.isatty()


def _get_console(force_color: bool | None = None) -> Console:
    if force_color is None:
        force_color = _should_use_color()
    return Console(
        force_terminal=force_color,
        no_color=not force_color,
        legacy_windows=False,
    )


def to_plain(data: Any) -> Any:
    """Turn models and enums into plain dicts, lists and scalars.

    Amounts and decimals are kept as objects so the renderers can format
    them exactly.
    """
    if isinstance(data, BaseModel):
        return to_plain(data.model_dump())
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, dict):
        return {str(k): to_plain(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data


def _json_default(value: Any) -> Any:
    if isinstance(value, Amount):
        return str(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_json(data: Any, pretty: bool = True) -> str:
    """Format data as JSON.

    Amounts and decimals become strings (``"0.00010000"``) so no value is
    rounded through a binary float by whoever reads the output.
    """
    return json.dumps(
        to_plain(data),
        indent=2 if pretty else None,
        ensure_ascii=False,
        default=_json_default,
    )


def format_table(
    data: list[dict[str, Any]],
    columns: list[str] | None = None,
    title: str | None = None,
    force_color: bool | None = None,
) -> str:
    """Format rows as a rich table.

    Args:
        data: List of dictionaries to display as rows
        columns: Optional list of column keys to display (default: all keys)
        title: Optional table title
        force_color: Force color output (None for auto-detect)

    Returns:
        Formatted table string
    """
    if not data:
        return "No data to display\n"

    if columns is None:
        columns = list(data[0].keys())
    else:
        first_row_keys = set(data[0].keys())
        columns = [c for c in columns if c in first_row_keys]

    table = Table(title=title, show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title(), overflow="fold")
    for row in data:
        table.add_row(*(_format_value(row.get(col)) for col in columns))

    console = _get_console(force_color)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def format_tree(
    data: dict[str, Any],
    label: str = "Root",
    force_color: bool | None = None,
) -> str:
    """Format nested data as a rich tree."""
    tree = Tree(label)
    _build_tree(tree, data)

    console = _get_console(force_color)
    with console.capture() as capture:
        console.print(tree)
    return capture.get()


def _build_tree(tree: Tree, data: Any, max_depth: int = 5, current_depth: int = 0) -> None:
    if current_depth >= max_depth:
        tree.add("[dim]...[/dim]")
        return

    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, (dict, list)) and value:
                branch = tree.add(f"[bold]{escape(str(key))}[/bold]")
                _build_tree(branch, value, max_depth, current_depth + 1)
            else:
                tree.add(f"[bold]{escape(str(key))}:[/bold] {_format_value(value)}")
    elif isinstance(data, list):
        for i, item in enumerate(data):
            if isinstance(item, (dict, list)) and item:
                branch = tree.add(f"[bold]\\[{i}][/bold]")
                _build_tree(branch, item, max_depth, current_depth + 1)
            else:
                tree.add(f"\\[{i}] {_format_value(item)}")
    else:
        tree.add(_format_value(data))


def _format_value(value: Any) -> str:
    """Format one scalar for display, with rich markup escaped."""
    if value is None:
        return "[dim]N/A[/dim]"
    if isinstance(value, bool):
        return "[green]Yes[/green]" if value else "[red]No[/red]"
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (list, tuple)):
        if not value:
            return "[dim]None[/dim]"
        return escape(", ".join(str(x) for x in value))
    if isinstance(value, dict):
        return escape(format_json(value, pretty=False))
    return escape(str(value))


def format_success(message: str) -> str:
    return f"[green]✓[/green] {message}"


def format_warning(message: str) -> str:
    return f"[yellow]⚠[/yellow] {message}"

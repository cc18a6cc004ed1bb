"""Raw method invocation.

``noderpc call METHOD [PARAM...]`` sends any method with positional
parameters. Each parameter is read as JSON when it parses (``true``,
``12``, ``0.5``, ``["a"]``) and as a plain string otherwise, so
``noderpc call getblockhash 0`` and ``noderpc call getblock 00000000a1...``
both work without quoting. A string that is also valid JSON, such as a
txid made only of digits, must be passed JSON-quoted:
``noderpc call getrawtransaction '"4512...0937"'``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

import typer
from rich.console import Console

from noderpc.codec.decoders import identity
from noderpc.commands._errors import handle_errors
from noderpc.container import get_dispatcher
from noderpc.formatters import format_json, format_table, format_tree
from noderpc.protocol.exceptions import ParseError
from noderpc.protocol.json_value import JsonValue, parse_json

console = Console()


def parse_param(text: str) -> JsonValue:
    """Read one command-line parameter as JSON, falling back to a string."""
    try:
        return parse_json(text)
    except ParseError:
        return text


def render(result: Any, json_output: bool, label: str) -> None:
    """Print a raw result: JSON, a table for lists of objects, else a tree."""
    if json_output:
        print(format_json(result))
    elif isinstance(result, dict):
        print(format_tree(result, label=label), end="")
    elif isinstance(result, list) and result and all(isinstance(r, dict) for r in result):
        print(format_table(result, title=label), end="")
    elif isinstance(result, list):
        print(format_json(result))
    elif isinstance(result, str):
        print(result)
    elif isinstance(result, Decimal):
        print(format(result, "f"))
    else:
        print(format_json(result, pretty=False))


def call(
    method: Annotated[str, typer.Argument(help="RPC method name (e.g., getblockcount)")],
    params: Annotated[
        list[str] | None,
        typer.Argument(help="Positional parameters, JSON or bare strings (quote digit-only strings as JSON)"),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output in JSON format")
    ] = False,
) -> None:
    """Invoke any RPC method and print its result.

    Examples:
        # Chain height
        noderpc call getblockcount

        # Genesis block hash
        noderpc call getblockhash 0

        # Verbose mempool as JSON
        noderpc call getrawmempool true --json
    """
    parsed = [parse_param(p) for p in params or []]
    with handle_errors():
        result = get_dispatcher().call(method, parsed, identity, allow_null=True)
    render(result, json_output, label=method)

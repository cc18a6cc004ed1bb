"""Exit-code mapping shared by all commands.

0 success, 1 node/client/transport/config failure, 2 bad arguments.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from noderpc.exceptions import NodeRpcError
from noderpc.protocol.exceptions import RpcError
from noderpc.services.exceptions import ValidationError
from noderpc.transport.exceptions import AuthenticationError, TransportError

console = Console(stderr=True)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report library failures and exit with the matching code."""
    try:
        yield
    except ValidationError as e:
        console.print(f"[red]Validation error:[/red] {escape(e.message)}")
        raise typer.Exit(2) from e
    except RpcError as e:
        console.print(
            f"[red]Node error {e.code} ({e.kind.value}):[/red] {escape(e.message)}"
        )
        raise typer.Exit(1) from e
    except AuthenticationError as e:
        console.print(f"[red]Authentication failed:[/red] {escape(str(e))}")
        console.print("[dim]Check auth.user/auth.password or auth.cookie_file[/dim]")
        raise typer.Exit(1) from e
    except TransportError as e:
        console.print(f"[red]Connection error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except NodeRpcError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

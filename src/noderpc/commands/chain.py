"""Blockchain query commands.

This module provides CLI commands over the blockchain service:
- info: Chain state summary
- count: Block height
- best-hash: Tip hash
- block-hash: Hash at a height
- block: Block by hash
- tips: Known chain tips
- difficulty: Proof-of-work difficulty
- mempool: Mempool statistics
- tx-out: Unspent output lookup
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from noderpc.commands._errors import handle_errors
from noderpc.container import get_blockchain_service
from noderpc.formatters import format_json, format_table, format_tree, format_warning, to_plain

app = typer.Typer(
    name="chain",
    help="Query blocks, chain state and the mempool",
    no_args_is_help=True,
)

console = Console()

JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output in JSON format")]


@app.command()
def info(json_output: JsonOption = False) -> None:
    """Show chain state (getblockchaininfo)."""
    with handle_errors():
        result = get_blockchain_service().get_blockchain_info()
    if json_output:
        print(format_json(result))
    else:
        print(format_tree(to_plain(result), label=f"Chain: {result.chain}"), end="")


@app.command()
def count() -> None:
    """Print the current block height."""
    with handle_errors():
        print(get_blockchain_service().get_block_count())


@app.command("best-hash")
def best_hash() -> None:
    """Print the hash of the chain tip."""
    with handle_errors():
        print(get_blockchain_service().get_best_block_hash())


@app.command("block-hash")
def block_hash(
    height: Annotated[int, typer.Argument(help="Block height")],
) -> None:
    """Print the hash of the block at HEIGHT."""
    with handle_errors():
        print(get_blockchain_service().get_block_hash(height))


@app.command()
def block(
    block_hash: Annotated[str, typer.Argument(metavar="HASH", help="Block hash")],
    raw: Annotated[
        bool, typer.Option("--raw", help="Print the serialized block as hex")
    ] = False,
    json_output: JsonOption = False,
) -> None:
    """Show a block.

    Examples:
        noderpc chain block 000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f
        noderpc chain block <hash> --raw
    """
    with handle_errors():
        result = get_blockchain_service().get_block(block_hash, verbose=not raw)
    if isinstance(result, str):
        print(result)
    elif json_output:
        print(format_json(result))
    else:
        data = to_plain(result)
        data["tx"] = f"{len(result.tx)} transactions"
        print(format_tree(data, label=f"Block {result.height}"), end="")


@app.command()
def tips(json_output: JsonOption = False) -> None:
    """List known chain tips."""
    with handle_errors():
        result = get_blockchain_service().get_chain_tips()
    if json_output:
        print(format_json(result))
    else:
        print(
            format_table(
                to_plain(result),
                columns=["height", "status", "branchlen", "hash"],
                title="Chain tips",
            ),
            end="",
        )


@app.command()
def difficulty() -> None:
    """Print the proof-of-work difficulty."""
    with handle_errors():
        print(format(get_blockchain_service().get_difficulty(), "f"))


@app.command()
def mempool(json_output: JsonOption = False) -> None:
    """Show mempool statistics."""
    with handle_errors():
        result = get_blockchain_service().get_mempool_info()
    if json_output:
        print(format_json(result))
    else:
        print(format_tree(to_plain(result), label="Mempool"), end="")


@app.command("tx-out")
def tx_out(
    txid: Annotated[str, typer.Argument(help="Transaction id")],
    vout: Annotated[int, typer.Argument(help="Output index")],
    no_mempool: Annotated[
        bool, typer.Option("--no-mempool", help="Ignore mempool spends")
    ] = False,
    json_output: JsonOption = False,
) -> None:
    """Look up an unspent transaction output."""
    with handle_errors():
        result = get_blockchain_service().get_tx_out(
            txid, vout, include_mempool=not no_mempool
        )
    if json_output:
        print(format_json(result))
    elif result is None:
        console.print(format_warning(f"Output {txid}:{vout} is spent or unknown"))
    else:
        print(format_tree(to_plain(result), label=f"{txid}:{vout}"), end="")

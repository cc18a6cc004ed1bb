"""Blockchain service: blocks, chain state, mempool and UTXO set.

This service maps typed Python calls onto the node's blockchain RPC
methods. It validates arguments, chooses the result decoder and leaves
every node-side error to propagate unchanged.
"""

from __future__ import annotations

from decimal import Decimal

from noderpc.codec.decoders import (
    decode_decimal,
    decode_int,
    decode_str,
    dict_of,
    list_of,
    model,
    optional,
)
from noderpc.models.blockchain import (
    Block,
    BlockchainInfo,
    BlockRef,
    ChainTip,
    MempoolEntry,
    MempoolInfo,
    TxOut,
    TxOutSetInfo,
)
from noderpc.protocol.dispatcher import Dispatcher
from noderpc.services._validate import require_hash, require_non_negative


class BlockchainService:
    """Service for chain queries.

    Args:
        dispatcher: Typed call dispatcher

    Example:
        >>> service = BlockchainService(Dispatcher(transport))
        >>> service.get_block_count()
        842103
        >>> service.get_block_hash(0)
        '000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f'
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def get_best_block_hash(self) -> str:
        """Return the hash of the chain tip."""
        return self.dispatcher.call("getbestblockhash", decoder=decode_str)

    def get_block(self, block_hash: str, verbose: bool = True) -> Block | str:
        """Fetch a block by hash.

        Args:
            block_hash: Block hash (64 hex characters)
            verbose: Return a decoded :class:`Block` (True) or the
                serialized block as hex (False)

        Returns:
            :class:`Block`, or the raw block hex when ``verbose`` is False

        Raises:
            ValidationError: If the hash is malformed
            RpcError: If the node does not know the block
        """
        block_hash = require_hash(block_hash, "block_hash")
        if verbose:
            return self.dispatcher.call("getblock", [block_hash, True], model(Block))
        return self.dispatcher.call("getblock", [block_hash, False], decode_str)

    def get_blockchain_info(self) -> BlockchainInfo:
        return self.dispatcher.call("getblockchaininfo", decoder=model(BlockchainInfo))

    def get_block_count(self) -> int:
        """Return the height of the most-work fully-validated chain."""
        return self.dispatcher.call("getblockcount", decoder=decode_int)

    def get_block_hash(self, height: int) -> str:
        """Return the hash of the main-chain block at *height*.

        Raises:
            ValidationError: If height is negative
            RpcError: If height is above the tip (INVALID_PARAMETERS)
        """
        height = require_non_negative(height, "height")
        return self.dispatcher.call("getblockhash", [height], decode_str)

    def get_chain_tips(self) -> list[ChainTip]:
        return self.dispatcher.call("getchaintips", decoder=list_of(model(ChainTip)))

    def get_difficulty(self) -> Decimal:
        """Return the proof-of-work difficulty as an exact decimal."""
        return self.dispatcher.call("getdifficulty", decoder=decode_decimal)

    def get_mempool_info(self) -> MempoolInfo:
        return self.dispatcher.call("getmempoolinfo", decoder=model(MempoolInfo))

    def get_raw_mempool(
        self, verbose: bool = False
    ) -> list[str] | dict[str, MempoolEntry]:
        """List mempool transactions.

        Args:
            verbose: Return txid -> :class:`MempoolEntry` instead of txids

        Returns:
            Txids, or entries keyed by txid when ``verbose`` is True
        """
        if verbose:
            return self.dispatcher.call(
                "getrawmempool", [True], dict_of(model(MempoolEntry))
            )
        return self.dispatcher.call("getrawmempool", [False], list_of(decode_str))

    def get_tx_out(
        self, txid: str, vout: int, include_mempool: bool = True
    ) -> TxOut | None:
        """Look up an unspent transaction output.

        Args:
            txid: Transaction id
            vout: Output index
            include_mempool: Also consider outputs spent or created in the mempool

        Returns:
            :class:`TxOut`, or None when the output is spent or unknown
        """
        txid = require_hash(txid, "txid")
        vout = require_non_negative(vout, "vout")
        return self.dispatcher.call(
            "gettxout",
            [txid, vout, include_mempool],
            optional(model(TxOut)),
            allow_null=True,
        )

    def get_tx_out_set_info(self) -> TxOutSetInfo:
        """Return UTXO set statistics. Slow on mainnet: the node scans the set."""
        return self.dispatcher.call("gettxoutsetinfo", decoder=model(TxOutSetInfo))

    def wait_for_new_block(self, timeout: int = 0) -> BlockRef:
        """Block until the tip changes or *timeout* milliseconds pass (0 = forever).

        The transport timeout must exceed *timeout*.
        """
        timeout = require_non_negative(timeout, "timeout")
        return self.dispatcher.call("waitfornewblock", [timeout], model(BlockRef))

    def wait_for_block(self, block_hash: str, timeout: int = 0) -> BlockRef:
        """Block until *block_hash* is the tip or *timeout* milliseconds pass."""
        block_hash = require_hash(block_hash, "block_hash")
        timeout = require_non_negative(timeout, "timeout")
        return self.dispatcher.call(
            "waitforblock", [block_hash, timeout], model(BlockRef)
        )

"""Unit tests for BlockchainService.

Tests cover:
- Argument validation before anything is sent
- Method names and positional parameters on the wire
- Result decoding into models
- Node errors passing through unchanged
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest

from noderpc.models.blockchain import Block, BlockRef, ChainTip, MempoolEntry, TxOut
from noderpc.protocol.dispatcher import Dispatcher
from noderpc.protocol.errors import RpcErrorKind
from noderpc.protocol.exceptions import DecodeError, RpcError
from noderpc.services.blockchain import BlockchainService
from noderpc.services.exceptions import ValidationError

GENESIS = "000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f"
TXID = "4a5e1e4baab89f3a32518a88c31bc87f618f76673e2cc77ab2127b7afdeda33b"


@pytest.fixture
def service(scripted_transport) -> BlockchainService:
    return BlockchainService(Dispatcher(scripted_transport))


class TestChainQueries:
    """Tests for the simple chain queries."""

    def test_get_block_count(self, service, scripted_transport) -> None:
        scripted_transport.reply_result("842103")

        assert service.get_block_count() == 842103
        assert scripted_transport.requests[0]["method"] == "getblockcount"
        assert scripted_transport.requests[0]["params"] == []

    def test_get_best_block_hash(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(f'"{GENESIS}"')

        assert service.get_best_block_hash() == GENESIS

    def test_get_block_hash(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(f'"{GENESIS}"')

        assert service.get_block_hash(0) == GENESIS
        assert scripted_transport.requests[0]["params"] == [0]

    def test_get_block_hash_negative_height(self) -> None:
        dispatcher = Mock()
        service = BlockchainService(dispatcher)

        with pytest.raises(ValidationError, match="cannot be negative"):
            service.get_block_hash(-1)

        dispatcher.call.assert_not_called()

    def test_get_block_hash_above_tip(self, service, scripted_transport) -> None:
        scripted_transport.reply_error(-8, "Block height out of range")

        with pytest.raises(RpcError) as exc_info:
            service.get_block_hash(10_000_000)

        assert exc_info.value.code == -8
        assert exc_info.value.kind is RpcErrorKind.OTHER

    def test_get_difficulty_is_exact(self, service, scripted_transport) -> None:
        scripted_transport.reply_result("86388558925171.10351")

        assert service.get_difficulty() == Decimal("86388558925171.10351")

    def test_get_chain_tips(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(
            f'[{{"height":842103,"hash":"{GENESIS}","branchlen":0,"status":"active"}},'
            f'{{"height":841000,"hash":"{TXID}","branchlen":1,"status":"valid-fork"}}]'
        )

        tips = service.get_chain_tips()

        assert [tip.status for tip in tips] == ["active", "valid-fork"]
        assert all(isinstance(tip, ChainTip) for tip in tips)

    def test_wrong_shape_raises_decode_error(self, service, scripted_transport) -> None:
        scripted_transport.reply_result('{"height": 1}')

        with pytest.raises(DecodeError):
            service.get_block_count()


class TestGetBlock:
    """Tests for BlockchainService.get_block()."""

    BLOCK = (
        f'{{"hash":"{GENESIS}","confirmations":1,"size":285,"height":0,"version":1,'
        f'"merkleroot":"{TXID}","tx":["{TXID}"],"time":1231006505,"nonce":2083236893,'
        f'"bits":"1d00ffff","chainwork":"0100010001","difficulty":1}}'
    )

    def test_verbose(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(self.BLOCK)

        block = service.get_block(GENESIS)

        assert isinstance(block, Block)
        assert block.tx == [TXID]
        assert scripted_transport.requests[0]["params"] == [GENESIS, True]

    def test_raw_hex(self, service, scripted_transport) -> None:
        scripted_transport.reply_result('"0100000000"')

        assert service.get_block(GENESIS, verbose=False) == "0100000000"
        assert scripted_transport.requests[0]["params"] == [GENESIS, False]

    def test_hash_normalized_to_lowercase(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(self.BLOCK)

        service.get_block(GENESIS.upper())

        assert scripted_transport.requests[0]["params"][0] == GENESIS

    @pytest.mark.parametrize("bad_hash", ["", "abc", GENESIS + "0", "g" * 64])
    def test_malformed_hash(self, bad_hash: str) -> None:
        dispatcher = Mock()

        with pytest.raises(ValidationError, match="64 hex characters"):
            BlockchainService(dispatcher).get_block(bad_hash)

        dispatcher.call.assert_not_called()

    def test_unknown_block(self, service, scripted_transport) -> None:
        scripted_transport.reply_error(-5, "Block not found")

        with pytest.raises(RpcError, match="Block not found"):
            service.get_block(GENESIS)


class TestMempool:
    """Tests for mempool queries."""

    def test_mempool_info(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(
            '{"loaded":true,"size":2,"bytes":450,"usage":2000,"maxmempool":300000000,'
            '"mempoolminfee":0.00001000,"minrelaytxfee":0.00001000}'
        )

        info = service.get_mempool_info()

        assert info.size == 2
        assert str(info.mempoolminfee) == "0.00001000"

    def test_raw_mempool_txids(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(f'["{TXID}"]')

        assert service.get_raw_mempool() == [TXID]
        assert scripted_transport.requests[0]["params"] == [False]

    def test_raw_mempool_verbose(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(
            f'{{"{TXID}":{{"size":225,"fee":0.00000500,"time":1,"height":2,"depends":[]}}}}'
        )

        entries = service.get_raw_mempool(verbose=True)

        assert isinstance(entries[TXID], MempoolEntry)
        assert entries[TXID].fee is not None
        assert entries[TXID].fee.units == 500
        assert scripted_transport.requests[0]["params"] == [True]


class TestUtxoQueries:
    """Tests for UTXO set queries."""

    TXOUT = (
        '{"bestblock":"00ff","confirmations":6,"value":1.25000000,'
        '"scriptPubKey":{"asm":"","hex":"0014","type":"witness_v0_keyhash"},"coinbase":false}'
    )

    def test_get_tx_out_unspent(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(self.TXOUT)

        txout = service.get_tx_out(TXID, 1)

        assert isinstance(txout, TxOut)
        assert txout.value.units == 125_000_000
        assert scripted_transport.requests[0]["params"] == [TXID, 1, True]

    def test_get_tx_out_spent_is_none(self, service, scripted_transport) -> None:
        scripted_transport.reply_result("null")

        assert service.get_tx_out(TXID, 0, include_mempool=False) is None
        assert scripted_transport.requests[0]["params"] == [TXID, 0, False]

    def test_get_tx_out_negative_vout(self) -> None:
        with pytest.raises(ValidationError):
            BlockchainService(Mock()).get_tx_out(TXID, -1)

    def test_get_tx_out_set_info(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(
            '{"height":10,"bestblock":"00ff","txouts":12,"total_amount":500.00000000}'
        )

        info = service.get_tx_out_set_info()

        assert info.total_amount.units == 50_000_000_000


class TestWaitForBlock:
    """Tests for the long-poll block waits."""

    def test_wait_for_new_block(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(f'{{"hash":"{GENESIS}","height":0}}')

        ref = service.wait_for_new_block(timeout=1000)

        assert ref == BlockRef(hash=GENESIS, height=0)
        assert scripted_transport.requests[0]["method"] == "waitfornewblock"
        assert scripted_transport.requests[0]["params"] == [1000]

    def test_wait_for_block(self, service, scripted_transport) -> None:
        scripted_transport.reply_result(f'{{"hash":"{GENESIS}","height":0}}')

        service.wait_for_block(GENESIS)

        assert scripted_transport.requests[0]["params"] == [GENESIS, 0]

    def test_negative_timeout(self) -> None:
        with pytest.raises(ValidationError):
            BlockchainService(Mock()).wait_for_new_block(timeout=-5)

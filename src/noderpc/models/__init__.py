"""Typed results of the node's RPC methods."""

from noderpc.models.blockchain import (
    Block,
    BlockchainInfo,
    BlockRef,
    ChainTip,
    MempoolEntry,
    MempoolInfo,
    ScriptPubKey,
    Softfork,
    SoftforkProgress,
    TxOut,
    TxOutSetInfo,
)
from noderpc.models.mining import EstimateMode, EstimateSmartFee
from noderpc.models.network import (
    AddNodeCommand,
    LocalAddress,
    Network,
    NetworkInfo,
    NetworkName,
    PeerInfo,
)

__all__ = [
    "Block",
    "BlockchainInfo",
    "BlockRef",
    "ChainTip",
    "MempoolEntry",
    "MempoolInfo",
    "ScriptPubKey",
    "Softfork",
    "SoftforkProgress",
    "TxOut",
    "TxOutSetInfo",
    "EstimateMode",
    "EstimateSmartFee",
    "AddNodeCommand",
    "LocalAddress",
    "Network",
    "NetworkInfo",
    "NetworkName",
    "PeerInfo",
]

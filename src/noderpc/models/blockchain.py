"""Result models for the blockchain RPC methods.

Monetary fields are :class:`~noderpc.codec.amount.Amount`; other
fractional numbers (difficulty, verification progress) are ``Decimal``.
Fields the node adds in newer releases are ignored; fields older releases
omit default to None.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from noderpc.codec.amount import Amount

_RESULT_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class BlockRef(BaseModel):
    """Result of ``waitfornewblock`` and ``waitforblock``."""

    hash: str
    height: int

    model_config = _RESULT_CONFIG


class Block(BaseModel):
    """Verbose result of ``getblock``.

    Attributes:
        hash: Block hash (hex)
        confirmations: Confirmations, -1 if the block is not on the main chain
        height: Block height
        tx: Transaction ids, or transaction objects at higher verbosity
        previousblockhash: Absent for the genesis block
        nextblockhash: Absent for the chain tip
    """

    hash: str
    confirmations: int
    size: int
    height: int
    version: int
    merkleroot: str
    tx: list[Any] = Field(default_factory=list)
    time: int
    nonce: int
    bits: str
    chainwork: str
    difficulty: Decimal | None = None
    mediantime: int | None = None
    strippedsize: int | None = None
    weight: int | None = None
    previousblockhash: str | None = None
    nextblockhash: str | None = None

    model_config = _RESULT_CONFIG


class SoftforkProgress(BaseModel):
    """Majority-vote window of a version-bits softfork."""

    status: bool
    found: int
    required: int
    window: int

    model_config = _RESULT_CONFIG


class Softfork(BaseModel):
    id: str
    version: int
    enforce: SoftforkProgress | None = None
    reject: SoftforkProgress | None = None

    model_config = _RESULT_CONFIG


class BlockchainInfo(BaseModel):
    """Result of ``getblockchaininfo``.

    ``softforks`` is a list on older nodes and an object keyed by
    deployment name on newer ones; both shapes are accepted.
    """

    chain: str
    blocks: int
    headers: int
    bestblockhash: str
    difficulty: Decimal
    mediantime: int
    verificationprogress: Decimal
    chainwork: str
    pruned: bool
    softforks: list[Softfork] | dict[str, Any] = Field(default_factory=list)
    warnings: str | list[str] | None = None

    model_config = _RESULT_CONFIG


class ChainTip(BaseModel):
    """One entry of ``getchaintips``."""

    height: int
    hash: str
    branchlen: int
    status: str

    model_config = _RESULT_CONFIG


class MempoolInfo(BaseModel):
    size: int
    bytes: int
    usage: int
    maxmempool: int
    mempoolminfee: Amount

    model_config = _RESULT_CONFIG


class MempoolEntry(BaseModel):
    """One transaction of the verbose ``getrawmempool`` result.

    Newer nodes move the fee into a ``fees`` object, so ``fee`` may be None.
    """

    size: int | None = None
    vsize: int | None = None
    fee: Amount | None = None
    time: int
    height: int
    depends: list[str] = Field(default_factory=list)

    model_config = _RESULT_CONFIG


class ScriptPubKey(BaseModel):
    asm: str
    hex: str
    req_sigs: int | None = Field(default=None, alias="reqSigs")
    script_type: str = Field(..., alias="type")
    addresses: list[str] = Field(default_factory=list)
    address: str | None = None

    model_config = _RESULT_CONFIG


class TxOut(BaseModel):
    """Result of ``gettxout`` for an unspent output."""

    bestblock: str
    confirmations: int
    value: Amount
    script_pub_key: ScriptPubKey = Field(..., alias="scriptPubKey")
    version: int | None = None
    coinbase: bool

    model_config = _RESULT_CONFIG


class TxOutSetInfo(BaseModel):
    """Result of ``gettxoutsetinfo``."""

    height: int
    bestblock: str
    transactions: int | None = None
    txouts: int
    bytes_serialized: int | None = None
    hash_serialized: str | None = None
    total_amount: Amount

    model_config = _RESULT_CONFIG

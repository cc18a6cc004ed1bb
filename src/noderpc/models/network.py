"""Result models for the network RPC methods."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from noderpc.codec.amount import Amount

_RESULT_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class NetworkName(str, Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    ONION = "onion"


class AddNodeCommand(str, Enum):
    """Command argument of ``addnode``."""

    ADD = "add"
    REMOVE = "remove"
    ONETRY = "onetry"


class Network(BaseModel):
    """Reachability of one network type.

    Newer nodes report networks beyond ipv4/ipv6/onion (i2p, cjdns); those
    keep their name as a plain string.
    """

    name: NetworkName | str = Field(..., union_mode="left_to_right")
    limited: bool
    reachable: bool
    proxy: str
    proxy_randomize_credentials: bool

    model_config = _RESULT_CONFIG


class LocalAddress(BaseModel):
    address: str
    port: int
    score: int

    model_config = _RESULT_CONFIG


class NetworkInfo(BaseModel):
    """Result of ``getnetworkinfo``."""

    version: int
    subversion: str
    protocolversion: int
    localservices: str | None = None
    localrelay: bool
    timeoffset: int
    networkactive: bool | None = None
    connections: int | None = None
    networks: list[Network] = Field(default_factory=list)
    relayfee: Amount
    incrementalfee: Amount | None = None
    localaddresses: list[LocalAddress] = Field(default_factory=list)
    warnings: str | list[str] = ""

    model_config = _RESULT_CONFIG


class PeerInfo(BaseModel):
    """One entry of ``getpeerinfo``.

    Ping times are seconds with sub-millisecond precision and stay exact.
    """

    id: int
    addr: str
    addrbind: str | None = None
    addrlocal: str | None = None
    services: str
    relaytxes: bool | None = None
    lastsend: int
    lastrecv: int
    bytessent: int
    bytesrecv: int
    conntime: int
    timeoffset: int
    pingtime: Decimal | None = None
    minping: Decimal | None = None
    pingwait: Decimal | None = None
    version: int
    subver: str
    inbound: bool
    addnode: bool | None = None
    startingheight: int | None = None
    banscore: int | None = None
    synced_headers: int | None = None
    synced_blocks: int | None = None
    inflight: list[int] = Field(default_factory=list)
    whitelisted: bool | None = None
    bytessent_per_msg: dict[str, int] = Field(default_factory=dict)
    bytesrecv_per_msg: dict[str, int] = Field(default_factory=dict)

    model_config = _RESULT_CONFIG

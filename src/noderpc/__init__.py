"""Typed JSON-RPC 2.0 client for a cryptocurrency node."""

from noderpc.client import NodeClient
from noderpc.codec.amount import Amount
from noderpc.exceptions import NodeRpcError
from noderpc.protocol.dispatcher import AsyncDispatcher, Dispatcher
from noderpc.protocol.errors import ErrorTaxonomy, RpcErrorKind
from noderpc.protocol.exceptions import (
    ClientError,
    CorrelationError,
    DecodeError,
    ParseError,
    ProtocolError,
    RpcError,
)
from noderpc.transport.async_http import AsyncHttpTransport
from noderpc.transport.exceptions import TransportError
from noderpc.transport.http import HttpTransport

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "NodeClient",
    "Amount",
    "Dispatcher",
    "AsyncDispatcher",
    "HttpTransport",
    "AsyncHttpTransport",
    "ErrorTaxonomy",
    "RpcErrorKind",
    "NodeRpcError",
    "ClientError",
    "ParseError",
    "ProtocolError",
    "CorrelationError",
    "DecodeError",
    "RpcError",
    "TransportError",
]

"""Protocol layer for noderpc.

This module handles the JSON-RPC 2.0 envelope with no knowledge of HTTP or
of individual node methods. It is responsible for:
- The JSON value model (exact decimals, depth-limited parsing)
- Request building and response decoding
- Id allocation and response correlation
- Error classification

The dispatcher lives in :mod:`noderpc.protocol.dispatcher`.
"""

from noderpc.protocol.decoder import decode_response, match_response
from noderpc.protocol.errors import ErrorTaxonomy, JsonRpcErrorCode, RpcErrorKind
from noderpc.protocol.exceptions import (
    ClientError,
    CorrelationError,
    DecodeError,
    ParseError,
    ProtocolError,
    RpcError,
)
from noderpc.protocol.ids import CounterIdAllocator, IdAllocator, RandomIdAllocator
from noderpc.protocol.json_value import JsonValue, parse_json, serialize_json
from noderpc.protocol.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
    build_request,
)

__all__ = [
    # Models
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcError",
    "RequestId",
    "JsonValue",
    # Operations
    "build_request",
    "decode_response",
    "match_response",
    "parse_json",
    "serialize_json",
    # Ids
    "IdAllocator",
    "CounterIdAllocator",
    "RandomIdAllocator",
    # Errors
    "ErrorTaxonomy",
    "JsonRpcErrorCode",
    "RpcErrorKind",
    "ClientError",
    "ParseError",
    "ProtocolError",
    "CorrelationError",
    "DecodeError",
    "RpcError",
]

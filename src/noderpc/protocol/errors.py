"""Error taxonomy for node-reported JSON-RPC errors.

JSON-RPC 2.0 reserves the codes -32768 to -32000 for protocol-level
failures; everything else is application specific. The taxonomy folds a
node's ``{code, message}`` into a small closed set of kinds so callers can
branch on meaning instead of on magic numbers:

    -32601                 -> METHOD_NOT_FOUND
    -32602, -32600         -> INVALID_PARAMETERS
    -32001 (configurable)  -> UNAUTHORIZED
    other reserved codes   -> INTERNAL_NODE_ERROR
    application codes      -> OTHER

References:
    JSON-RPC 2.0 error object: https://www.jsonrpc.org/specification#error_object
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum, IntEnum


class JsonRpcErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Reserved range bounds
    RESERVED_MIN = -32768
    RESERVED_MAX = -32000


class RpcErrorKind(str, Enum):
    """Closed set of node error kinds exposed to callers."""

    INVALID_PARAMETERS = "invalid_parameters"
    METHOD_NOT_FOUND = "method_not_found"
    INTERNAL_NODE_ERROR = "internal_node_error"
    UNAUTHORIZED = "unauthorized"
    OTHER = "other"


DEFAULT_UNAUTHORIZED_CODES: frozenset[int] = frozenset({-32001})

_STANDARD_KINDS: dict[int, RpcErrorKind] = {
    JsonRpcErrorCode.METHOD_NOT_FOUND: RpcErrorKind.METHOD_NOT_FOUND,
    JsonRpcErrorCode.INVALID_PARAMS: RpcErrorKind.INVALID_PARAMETERS,
    JsonRpcErrorCode.INVALID_REQUEST: RpcErrorKind.INVALID_PARAMETERS,
    JsonRpcErrorCode.INTERNAL_ERROR: RpcErrorKind.INTERNAL_NODE_ERROR,
    JsonRpcErrorCode.PARSE_ERROR: RpcErrorKind.INTERNAL_NODE_ERROR,
}


def is_reserved_code(code: int) -> bool:
    """Return True if *code* lies in the JSON-RPC reserved range."""
    return JsonRpcErrorCode.RESERVED_MIN <= code <= JsonRpcErrorCode.RESERVED_MAX


class ErrorTaxonomy:
    """Maps node error codes to :class:`RpcErrorKind`.

    Args:
        unauthorized_codes: Reserved-range codes the target node uses to
            signal an authorization failure
        overrides: Explicit code -> kind entries, consulted first

    Example:
        >>> taxonomy = ErrorTaxonomy()
        >>> taxonomy.classify(-32601)
        <RpcErrorKind.METHOD_NOT_FOUND: 'method_not_found'>
        >>> taxonomy.classify(-5)
        <RpcErrorKind.OTHER: 'other'>
    """

    def __init__(
        self,
        unauthorized_codes: Iterable[int] = DEFAULT_UNAUTHORIZED_CODES,
        overrides: Mapping[int, RpcErrorKind] | None = None,
    ) -> None:
        self.unauthorized_codes = frozenset(unauthorized_codes)
        self.overrides = dict(overrides or {})

    def classify(self, code: int) -> RpcErrorKind:
        """Return the kind for a node-reported error *code*."""
        if code in self.overrides:
            return self.overrides[code]
        if code in _STANDARD_KINDS:
            return _STANDARD_KINDS[code]
        if code in self.unauthorized_codes:
            return RpcErrorKind.UNAUTHORIZED
        if is_reserved_code(code):
            return RpcErrorKind.INTERNAL_NODE_ERROR
        return RpcErrorKind.OTHER

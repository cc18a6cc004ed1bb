"""JSON-RPC 2.0 protocol models.

This module defines Pydantic models for the request and response envelopes
exchanged with the node. Parameters are always positional (a JSON array);
the node's RPC surface does not require named parameters.

Values held in ``params``, ``result`` and ``error.data`` are
:data:`~noderpc.protocol.json_value.JsonValue` trees and are passed
through untouched; they are typed as ``Any`` so pydantic never coerces a
``Decimal`` or an ``int`` on the way through.

References:
    JSON-RPC 2.0: https://www.jsonrpc.org/specification
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from noderpc.protocol.json_value import JsonValue, serialize_json

RequestId: TypeAlias = int | str


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object.

    Attributes:
        code: Error code (integer)
        message: Human-readable error message
        data: Additional error information (optional)

    Example:
        >>> error = JsonRpcError(code=-32601, message="Method not found")
        >>> error.code
        -32601
    """

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Any = Field(default=None, description="Additional error data")

    model_config = ConfigDict(frozen=True)


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request object.

    Attributes:
        jsonrpc: Protocol version (always "2.0")
        method: Method name to invoke
        params: Positional parameters, already encoded as JSON values
        id: Correlation id, unique among in-flight calls

    Example:
        >>> request = JsonRpcRequest(method="getblockhash", params=[0], id=1)
        >>> request.to_bytes()
        b'{"jsonrpc":"2.0","method":"getblockhash","params":[0],"id":1}'
    """

    jsonrpc: Literal["2.0"] = Field(default="2.0", description="JSON-RPC version")
    method: str = Field(..., description="Method name to invoke")
    params: list[Any] = Field(default_factory=list, description="Positional parameters")
    id: RequestId = Field(..., description="Request ID")

    model_config = ConfigDict(frozen=True)

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Reject empty method names."""
        if not v:
            raise ValueError("Method name must be a non-empty string")
        return v

    def to_json_value(self) -> JsonValue:
        """Return the request as a JSON object in wire order."""
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": list(self.params),
            "id": self.id,
        }

    def to_bytes(self) -> bytes:
        """Serialize the request to its wire payload."""
        return serialize_json(self.to_json_value())


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object.

    Exactly one of ``result`` and ``error`` is meaningful; the response
    decoder refuses envelopes where that does not hold.

    Attributes:
        id: Request identifier echoed by the node
        result: Method result (on success)
        error: Error object (on failure)
    """

    id: RequestId | None = Field(..., description="Request ID")
    result: Any = Field(default=None, description="Method result")
    error: JsonRpcError | None = Field(default=None, description="Error object")

    model_config = ConfigDict(frozen=True)

    @property
    def is_error(self) -> bool:
        """True if the node reported an error."""
        return self.error is not None


def build_request(
    method: str,
    params: Sequence[JsonValue] = (),
    request_id: RequestId = 1,
) -> JsonRpcRequest:
    """Assemble a JSON-RPC request from already-encoded parameters.

    No arity or type checks happen here; method wrappers validate their
    own arguments before calling into the dispatcher.

    Args:
        method: Method name (non-empty)
        params: Positional parameters as JSON values
        request_id: Correlation id allocated by the dispatcher

    Returns:
        Request model

    Raises:
        ValueError: If *method* is empty
    """
    if not isinstance(method, str) or not method:
        raise ValueError("Method name must be a non-empty string")
    return JsonRpcRequest(method=method, params=list(params), id=request_id)

"""JSON-RPC response decoding and id correlation.

``decode_response`` validates the envelope; ``match_response`` guards
against a transport handing back a reply that belongs to another call.
Neither looks inside ``result``: typing the result is the dispatcher's
job.
"""

from __future__ import annotations

from typing import Any

from noderpc.protocol.exceptions import CorrelationError, ProtocolError
from noderpc.protocol.json_value import parse_json
from noderpc.protocol.models import JsonRpcError, JsonRpcResponse, RequestId


def _decode_error_object(error: Any) -> JsonRpcError:
    if not isinstance(error, dict):
        raise ProtocolError(f"Error member must be an object, got {type(error).__name__}")

    code = error.get("code")
    message = error.get("message")
    if isinstance(code, bool) or not isinstance(code, int):
        raise ProtocolError(f"Error code must be an integer, got {code!r}")
    if not isinstance(message, str):
        raise ProtocolError(f"Error message must be a string, got {message!r}")
    return JsonRpcError(code=code, message=message, data=error.get("data"))


def decode_response(payload: bytes | str, *, allow_null_result: bool = False) -> JsonRpcResponse:
    """Parse raw reply bytes into a validated response envelope.

    Args:
        payload: Raw reply from the transport
        allow_null_result: Accept ``{"result": null, "error": null}`` as a
            successful reply, for methods whose declared result is nullable

    Returns:
        Response model

    Raises:
        ParseError: Payload is not valid JSON
        ProtocolError: Payload is not a valid JSON-RPC response envelope

    Example:
        >>> decode_response(b'{"result": 12345, "error": null, "id": "1"}').result
        12345
    """
    data = parse_json(payload)

    if not isinstance(data, dict):
        raise ProtocolError(f"Expected JSON object response, got {type(data).__name__}")

    if "id" not in data:
        raise ProtocolError("Response is missing the 'id' member")
    response_id = data["id"]
    if isinstance(response_id, bool) or not isinstance(response_id, (int, str, type(None))):
        raise ProtocolError(f"Response id must be a string, integer or null, got {response_id!r}")

    result = data.get("result")
    raw_error = data.get("error")
    has_result = result is not None or (allow_null_result and "result" in data)
    has_error = raw_error is not None

    if has_result and has_error:
        raise ProtocolError("Response carries both 'result' and 'error'")
    if not has_result and not has_error:
        raise ProtocolError("Response carries neither 'result' nor 'error'")

    error = _decode_error_object(raw_error) if has_error else None
    return JsonRpcResponse(id=response_id, result=result, error=error)


def match_response(request_id: RequestId, response: JsonRpcResponse) -> JsonRpcResponse:
    """Return *response* if it answers the request with *request_id*.

    Comparison is type-sensitive: a reply carrying ``"1"`` does not answer
    a request sent with ``1``.

    Raises:
        CorrelationError: Ids differ
    """
    actual = response.id
    if type(actual) is not type(request_id) or actual != request_id:
        raise CorrelationError(request_id, actual)
    return response

"""Protocol layer exceptions.

Two disjoint families live here:

* :class:`ClientError` and its subclasses are raised by the client itself
  when it cannot turn the node's reply into a typed value (malformed JSON,
  a broken envelope, a mismatched id, a result of the wrong shape).
* :class:`RpcError` is raised when the node explicitly reported a
  method-level failure in a well-formed reply.

Transport failures are a third family, see ``noderpc.transport.exceptions``.
"""

from __future__ import annotations

from typing import Any

from noderpc.exceptions import NodeRpcError
from noderpc.protocol.errors import RpcErrorKind


class ClientError(NodeRpcError):
    """Base exception for local protocol failures.

    Args:
        message: Human-readable error description

    Attributes:
        message: Error message
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(ClientError):
    """Input bytes are not valid JSON.

    Args:
        position: Character offset where parsing failed
        reason: Short description of the failure

    Example:
        >>> raise ParseError(12, "Unterminated string starting at")
    """

    def __init__(self, position: int, reason: str) -> None:
        super().__init__(f"{reason} (at position {position})")
        self.position = position
        self.reason = reason


class ProtocolError(ClientError):
    """Well-formed JSON that is not a valid JSON-RPC response envelope.

    Examples:
        - Top-level value is not an object
        - Missing ``id``
        - Both or neither of ``result`` and ``error`` populated
    """

    pass


class CorrelationError(ClientError):
    """Response id does not match the id of the request it answers.

    Attributes:
        expected_id: Id of the outstanding request
        actual_id: Id carried by the reply
    """

    def __init__(self, expected_id: int | str, actual_id: int | str | None) -> None:
        super().__init__(
            f"Response id {actual_id!r} does not match request id {expected_id!r}"
        )
        self.expected_id = expected_id
        self.actual_id = actual_id


class DecodeError(ClientError):
    """Result is present but not shaped as the caller expected.

    Also raised when a monetary amount cannot be represented exactly.
    """

    pass


class RpcError(NodeRpcError):
    """Node reported a method-level failure.

    Args:
        code: JSON-RPC error code
        message: Error message from the node
        data: Optional additional error data
        kind: Taxonomy kind for *code*

    Attributes:
        code: JSON-RPC error code
        message: Node-supplied message
        data: Additional error data (or None)
        kind: :class:`RpcErrorKind` the code was classified as
    """

    def __init__(
        self,
        code: int,
        message: str,
        data: Any = None,
        kind: RpcErrorKind = RpcErrorKind.OTHER,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data
        self.kind = kind

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"RpcError(code={self.code}, message={self.message!r}, kind={self.kind.value})"

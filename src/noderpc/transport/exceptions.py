"""Transport layer exceptions.

These exceptions are raised by the transport layer when the byte exchange
with the node fails. They have no knowledge of JSON-RPC. The whole family
is safe for a caller to retry; nothing in the library retries on its own.
"""

from __future__ import annotations

from noderpc.exceptions import NodeRpcError


class TransportError(NodeRpcError):
    """Base exception for transport layer errors.

    Args:
        message: Human-readable error description
        status_code: HTTP status code if applicable
        cause: Original exception that caused this error

    Attributes:
        message: Error message
        status_code: HTTP status code (or None)
        cause: Original exception (or None)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (status: {self.status_code})"
        return self.message


class NetworkError(TransportError):
    """Connection refused, DNS failure, unreachable host."""


class TimeoutError(TransportError):
    """The node accepted the connection but did not answer in time."""


class HttpError(TransportError):
    """The node answered with an HTTP error status and no body to decode."""


class AuthenticationError(HttpError):
    """The node rejected the RPC credentials (HTTP 401 or 403)."""

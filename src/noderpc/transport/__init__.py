"""Transport layer for noderpc.

This module handles the byte exchange with the node and has no knowledge
of JSON-RPC. It is responsible for:
- HTTP POST with basic authentication
- Connection pooling
- Retrying connection establishment only
- Network error translation
"""

from noderpc.transport.async_http import AsyncHttpTransport
from noderpc.transport.base import AsyncTransport, Transport
from noderpc.transport.exceptions import (
    AuthenticationError,
    HttpError,
    NetworkError,
    TimeoutError,
    TransportError,
)
from noderpc.transport.http import HttpTransport

__all__ = [
    "Transport",
    "AsyncTransport",
    "HttpTransport",
    "AsyncHttpTransport",
    "TransportError",
    "NetworkError",
    "TimeoutError",
    "HttpError",
    "AuthenticationError",
]

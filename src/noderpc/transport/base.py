"""Transport contracts.

A transport is a byte exchange: hand it a serialized request, get back the
raw reply. It knows nothing about JSON-RPC; authentication and connection
handling are its own business.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Blocking request/response byte exchange."""

    def send(self, payload: bytes) -> bytes:
        """Send *payload* and return the reply body.

        Raises:
            TransportError: The exchange failed
        """
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Awaitable request/response byte exchange."""

    async def send(self, payload: bytes) -> bytes:
        """Send *payload* and return the reply body.

        Raises:
            TransportError: The exchange failed
        """
        ...

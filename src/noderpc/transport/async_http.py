"""Awaitable HTTP transport built on httpx."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from noderpc.transport.exceptions import NetworkError, TimeoutError, TransportError
from noderpc.transport.http import check_status

logger = structlog.get_logger(__name__)


class AsyncHttpTransport:
    """Asynchronous counterpart of :class:`~noderpc.transport.http.HttpTransport`.

    One instance may serve many concurrent calls; httpx pools the
    connections. Connection establishment is retried by the underlying
    ``AsyncHTTPTransport``; nothing else is.

    Args:
        url: Node RPC URL
        auth: ``(user, password)`` for HTTP basic auth, or None
        timeout: Request timeout in seconds (default: 30)
        retries: Connection attempts to retry (default: 3)
        verify_ssl: Whether to verify TLS certificates (default: True)
        transport: Explicit httpx transport (tests inject ``httpx.MockTransport``)
    """

    def __init__(
        self,
        url: str,
        auth: tuple[str, str] | None = None,
        timeout: float = 30,
        retries: int = 3,
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("url cannot be empty")

        self.url = url.rstrip("/")
        self.timeout = timeout
        if transport is None:
            transport = httpx.AsyncHTTPTransport(retries=retries, verify=verify_ssl)
        self.client = httpx.AsyncClient(
            auth=auth,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def send(self, payload: bytes) -> bytes:
        """POST *payload* and return the reply body. See ``HttpTransport.send``."""
        try:
            response = await self.client.post(self.url, content=payload)
        except httpx.TimeoutException as e:
            logger.warning("rpc_transport_timeout", url=self.url, timeout=self.timeout)
            raise TimeoutError(
                message=f"Request timed out after {self.timeout}s",
                cause=e,
            ) from e
        except httpx.TransportError as e:
            logger.warning("rpc_transport_unreachable", url=self.url, error=str(e))
            raise NetworkError(message=f"Connection failed: {e}", cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(message=f"Transport error: {e}", cause=e) from e

        return check_status(response.status_code, response.content)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> AsyncHttpTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

"""HTTP transport layer implementation.

Blocking byte exchange with the node over HTTP(S), with connection
pooling, basic authentication and error translation. It has NO knowledge
of JSON-RPC.
"""

from __future__ import annotations

from typing import Any

import requests
import structlog
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from noderpc.transport.exceptions import (
    AuthenticationError,
    HttpError,
    NetworkError,
    TimeoutError,
    TransportError,
)

logger = structlog.get_logger(__name__)

_AUTH_STATUSES = frozenset({401, 403})


def check_status(status_code: int, body: bytes) -> bytes:
    """Translate an HTTP reply into the body to decode, or raise.

    Nodes report JSON-RPC errors with HTTP 404/500 and a JSON body, so an
    error status with a body is handed back for the decoder to read.

    Raises:
        AuthenticationError: 401 or 403
        HttpError: Any other error status with an empty body
    """
    if status_code in _AUTH_STATUSES:
        raise AuthenticationError(
            message="Node rejected the RPC credentials",
            status_code=status_code,
        )
    if status_code >= 400 and not body.strip():
        raise HttpError(message=f"HTTP {status_code}", status_code=status_code)
    return body


class HttpTransport:
    """HTTP transport for the node's RPC port.

    Only connection establishment is retried: a request that never reached
    the node cannot have had side effects. Reads and HTTP statuses are
    never retried, since ``sendtoaddress`` must not run twice.

    Args:
        url: Node RPC URL (e.g., "http://127.0.0.1:8332")
        auth: ``(user, password)`` for HTTP basic auth, or None
        timeout: Request timeout in seconds (default: 30)
        retries: Connection attempts to retry (default: 3)
        verify_ssl: Whether to verify TLS certificates (default: True)

    Example:
        >>> with HttpTransport("http://127.0.0.1:8332", auth=("user", "pass")) as transport:
        ...     transport.send(b'{"jsonrpc":"2.0","method":"getblockcount","params":[],"id":1}')
        b'{"result":842103,"error":null,"id":1}'
    """

    def __init__(
        self,
        url: str,
        auth: tuple[str, str] | None = None,
        timeout: float = 30,
        retries: int = 3,
        verify_ssl: bool = True,
    ) -> None:
        if not url:
            raise ValueError("url cannot be empty")

        self.url = url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = self._create_session(retries)
        if auth is not None:
            self.session.auth = auth

    def _create_session(self, retries: int) -> requests.Session:
        """Create a pooled session that retries connection failures only."""
        session = requests.Session()

        retry_strategy = Retry(
            total=retries,
            connect=retries,
            read=False,
            status=0,
            other=0,
            backoff_factor=0.5,
            allowed_methods=["POST"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(
            max_retries=retry_strategy,
            pool_connections=10,
            pool_maxsize=10,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def send(self, payload: bytes) -> bytes:
        """POST *payload* and return the reply body.

        Raises:
            NetworkError: Connection failed
            TimeoutError: The node did not answer in time
            AuthenticationError: Credentials rejected
            HttpError: Error status with no body
            TransportError: Any other transport failure
        """
        try:
            response = self.session.post(
                self.url,
                data=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            logger.warning("rpc_transport_timeout", url=self.url, timeout=self.timeout)
            raise TimeoutError(
                message=f"Request timed out after {self.timeout}s",
                cause=e,
            ) from e
        except requests.exceptions.ConnectionError as e:
            logger.warning("rpc_transport_unreachable", url=self.url, error=str(e))
            raise NetworkError(
                message=f"Connection failed: {e}",
                cause=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(
                message=f"Transport error: {e}",
                cause=e,
            ) from e

        return check_status(response.status_code, response.content)

    def close(self) -> None:
        """Close the session and release pooled connections."""
        self.session.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

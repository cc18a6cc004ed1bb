"""High-level client for a node's RPC interface."""

from __future__ import annotations

from typing import Any

from noderpc.codec.decoders import identity
from noderpc.config import Config
from noderpc.protocol.dispatcher import Dispatcher
from noderpc.protocol.errors import ErrorTaxonomy
from noderpc.protocol.ids import IdAllocator
from noderpc.services.blockchain import BlockchainService
from noderpc.services.mining import MiningService
from noderpc.services.network import NetworkService
from noderpc.services.wallet import WalletService
from noderpc.transport.base import Transport
from noderpc.transport.http import HttpTransport


class NodeClient:
    """Typed client for one node.

    Groups the services over a single dispatcher and owns the transport's
    lifetime when used as a context manager.

    Args:
        transport: Byte exchange with the node
        ids: Correlation id allocator
        taxonomy: Error code classifier

    Example:
        >>> with NodeClient(HttpTransport("http://127.0.0.1:8332", auth=("user", "pass"))) as node:
        ...     node.blockchain.get_block_count()
        842103
    """

    def __init__(
        self,
        transport: Transport,
        ids: IdAllocator | None = None,
        taxonomy: ErrorTaxonomy | None = None,
    ) -> None:
        self.transport = transport
        self.dispatcher = Dispatcher(transport, ids=ids, taxonomy=taxonomy)
        self.blockchain = BlockchainService(self.dispatcher)
        self.network = NetworkService(self.dispatcher)
        self.mining = MiningService(self.dispatcher)
        self.wallet = WalletService(self.dispatcher)

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> NodeClient:
        """Build a client over an :class:`HttpTransport` described by *config*.

        Raises:
            ValueError: If the configured cookie file cannot be read
        """
        transport = HttpTransport(
            url=config.rpc.url,
            auth=config.auth.credentials(),
            timeout=config.rpc.timeout,
            retries=config.rpc.retries,
            verify_ssl=config.rpc.verify_ssl,
        )
        return cls(transport, **kwargs)

    def call(self, method: str, *params: Any) -> Any:
        """Invoke any method and return its raw JSON result.

        Null results are allowed since the expected result type is unknown.
        """
        return self.dispatcher.call(method, params, identity, allow_null=True)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> NodeClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

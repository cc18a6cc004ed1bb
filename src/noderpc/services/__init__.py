"""Service layer for noderpc.

Services expose the node's RPC methods as typed Python calls. They handle:
- Argument validation
- Choosing the result decoder for each method
- Marking methods whose result may be null

Services have NO knowledge of the wire format or of the transport.
"""

from __future__ import annotations

from noderpc.services.blockchain import BlockchainService
from noderpc.services.mining import MiningService
from noderpc.services.network import NetworkService
from noderpc.services.wallet import WalletService

__all__ = [
    "BlockchainService",
    "MiningService",
    "NetworkService",
    "WalletService",
]

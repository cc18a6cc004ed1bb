"""Network service: peers and connectivity."""

from __future__ import annotations

from noderpc.codec.decoders import decode_int, decode_null, list_of, model
from noderpc.models.network import AddNodeCommand, NetworkInfo, PeerInfo
from noderpc.protocol.dispatcher import Dispatcher
from noderpc.services._validate import require_choice
from noderpc.services.exceptions import ValidationError


class NetworkService:
    """Service for the node's peer-to-peer state.

    Args:
        dispatcher: Typed call dispatcher
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def get_network_info(self) -> NetworkInfo:
        return self.dispatcher.call("getnetworkinfo", decoder=model(NetworkInfo))

    def get_peer_info(self) -> list[PeerInfo]:
        return self.dispatcher.call("getpeerinfo", decoder=list_of(model(PeerInfo)))

    def get_connection_count(self) -> int:
        return self.dispatcher.call("getconnectioncount", decoder=decode_int)

    def add_node(self, address: str, command: AddNodeCommand | str) -> None:
        """Add, remove or try once a peer.

        Args:
            address: Peer as ``host:port``
            command: ``add``, ``remove`` or ``onetry``

        Raises:
            ValidationError: If the address is empty or the command unknown
            RpcError: If the node refuses (e.g. peer already added)
        """
        if not address or not address.strip():
            raise ValidationError("Node address cannot be empty")
        command = require_choice(command, AddNodeCommand, "command")
        self.dispatcher.call(
            "addnode", [address.strip(), command], decode_null, allow_null=True
        )

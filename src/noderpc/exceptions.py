"""Root exception for the noderpc client.

Every error raised by noderpc derives from :class:`NodeRpcError`. The
three branches below it let callers tell apart "the node rejected this"
(``protocol.exceptions.RpcError``), "the client could not make sense of
the exchange" (``protocol.exceptions.ClientError``) and "the bytes never
made it" (``transport.exceptions.TransportError``).
"""

from __future__ import annotations


class NodeRpcError(Exception):
    """Base exception for noderpc errors."""

    pass

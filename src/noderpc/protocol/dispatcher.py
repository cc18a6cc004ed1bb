"""Typed call dispatch.

Every method call goes through :meth:`Dispatcher.call` (or the awaitable
:meth:`AsyncDispatcher.call`), which walks one call through

    BUILDING -> SENT -> AWAITING_REPLY -> DECODED | FAILED

1. BUILDING: typed arguments are encoded with :func:`encode_param`, a fresh
   correlation id is allocated and the request is built.
2. SENT: the request bytes go to the transport.
3. AWAITING_REPLY: the reply is decoded and correlated against the id.
4. DECODED: ``result`` runs through the method's decoder, or the node's
   error object is raised as :class:`RpcError`.
5. FAILED: any error short-circuits the call and propagates unchanged.

The dispatcher never retries; retry policy belongs to the caller.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from enum import Enum
from typing import Any, TypeVar

import structlog

from noderpc.codec.decoders import Decoder, identity
from noderpc.codec.params import encode_param
from noderpc.protocol.decoder import decode_response, match_response
from noderpc.protocol.errors import ErrorTaxonomy
from noderpc.protocol.exceptions import RpcError
from noderpc.protocol.ids import CounterIdAllocator, IdAllocator
from noderpc.protocol.models import JsonRpcRequest, build_request
from noderpc.transport.base import AsyncTransport, Transport

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CallState(str, Enum):
    """States one call passes through."""

    BUILDING = "building"
    SENT = "sent"
    AWAITING_REPLY = "awaiting_reply"
    DECODED = "decoded"
    FAILED = "failed"


class _DispatcherBase:
    """State shared by the blocking and the awaitable dispatcher."""

    def __init__(
        self,
        ids: IdAllocator | None = None,
        taxonomy: ErrorTaxonomy | None = None,
    ) -> None:
        self.ids: IdAllocator = ids if ids is not None else CounterIdAllocator()
        self.taxonomy = taxonomy if taxonomy is not None else ErrorTaxonomy()

    def _build(self, method: str, params: Sequence[Any]) -> JsonRpcRequest:
        encoded = [encode_param(param) for param in params]
        request_id = self.ids.allocate()
        try:
            return build_request(method, encoded, request_id)
        except Exception:
            self.ids.release(request_id)
            raise

    def _complete(
        self,
        request: JsonRpcRequest,
        raw: bytes,
        decoder: Decoder[T],
        allow_null: bool,
    ) -> T:
        response = match_response(
            request.id, decode_response(raw, allow_null_result=allow_null)
        )
        if response.error is not None:
            error = response.error
            raise RpcError(
                code=error.code,
                message=error.message,
                data=error.data,
                kind=self.taxonomy.classify(error.code),
            )
        return decoder(response.result)

    @staticmethod
    def _log_failure(log: Any, exc: Exception, started: float) -> None:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        if isinstance(exc, RpcError):
            log.warning(
                "rpc_node_error",
                state=CallState.FAILED.value,
                code=exc.code,
                kind=exc.kind.value,
                error=exc.message,
                elapsed_ms=elapsed_ms,
            )
        else:
            log.warning(
                "rpc_call_failed",
                state=CallState.FAILED.value,
                error_type=type(exc).__name__,
                error=str(exc),
                elapsed_ms=elapsed_ms,
            )


class Dispatcher(_DispatcherBase):
    """Blocking dispatcher over a :class:`Transport`.

    Args:
        transport: Byte exchange with the node
        ids: Correlation id allocator (default: shared monotonic counter)
        taxonomy: Error code classifier (default: JSON-RPC reserved ranges)

    Example:
        >>> dispatcher = Dispatcher(HttpTransport("http://127.0.0.1:8332", auth=("user", "pass")))
        >>> dispatcher.call("getblockcount", decoder=decode_int)
        842103
    """

    def __init__(
        self,
        transport: Transport,
        ids: IdAllocator | None = None,
        taxonomy: ErrorTaxonomy | None = None,
    ) -> None:
        super().__init__(ids, taxonomy)
        self.transport = transport

    def call(
        self,
        method: str,
        params: Sequence[Any] = (),
        decoder: Decoder[T] = identity,
        *,
        allow_null: bool = False,
    ) -> T:
        """Invoke *method* and decode its result.

        Args:
            method: RPC method name
            params: Positional arguments (typed; encoded here)
            decoder: Decoder for the method's declared result type
            allow_null: The method may legitimately return null

        Returns:
            Decoded result

        Raises:
            TypeError: An argument has no JSON encoding
            TransportError: The exchange failed
            ParseError, ProtocolError, CorrelationError: Unusable reply
            RpcError: The node reported an error
            DecodeError: Result has the wrong shape
        """
        log = logger.bind(method=method)
        log.debug("rpc_call_state", state=CallState.BUILDING.value)
        request = self._build(method, params)
        log = log.bind(request_id=request.id)

        started = time.perf_counter()
        try:
            log.debug("rpc_call_state", state=CallState.SENT.value)
            raw = self.transport.send(request.to_bytes())
            log.debug("rpc_call_state", state=CallState.AWAITING_REPLY.value)
            result = self._complete(request, raw, decoder, allow_null)
        except Exception as e:
            self._log_failure(log, e, started)
            raise
        finally:
            self.ids.release(request.id)

        log.debug(
            "rpc_call_state",
            state=CallState.DECODED.value,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result


class AsyncDispatcher(_DispatcherBase):
    """Awaitable dispatcher over an :class:`AsyncTransport`.

    Concurrent calls on one instance get distinct ids and each resolves
    only with its own reply. A cancelled call releases its id and leaves
    no other state behind.
    """

    def __init__(
        self,
        transport: AsyncTransport,
        ids: IdAllocator | None = None,
        taxonomy: ErrorTaxonomy | None = None,
    ) -> None:
        super().__init__(ids, taxonomy)
        self.transport = transport

    async def call(
        self,
        method: str,
        params: Sequence[Any] = (),
        decoder: Decoder[T] = identity,
        *,
        allow_null: bool = False,
    ) -> T:
        """Invoke *method* and decode its result. See :meth:`Dispatcher.call`."""
        log = logger.bind(method=method)
        log.debug("rpc_call_state", state=CallState.BUILDING.value)
        request = self._build(method, params)
        log = log.bind(request_id=request.id)

        started = time.perf_counter()
        try:
            log.debug("rpc_call_state", state=CallState.SENT.value)
            raw = await self.transport.send(request.to_bytes())
            log.debug("rpc_call_state", state=CallState.AWAITING_REPLY.value)
            result = self._complete(request, raw, decoder, allow_null)
        except Exception as e:
            self._log_failure(log, e, started)
            raise
        finally:
            self.ids.release(request.id)

        log.debug(
            "rpc_call_state",
            state=CallState.DECODED.value,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result

"""Tests for the node error taxonomy and exception types."""

from __future__ import annotations

import pytest

from noderpc.exceptions import NodeRpcError
from noderpc.protocol.errors import ErrorTaxonomy, RpcErrorKind, is_reserved_code
from noderpc.protocol.exceptions import (
    ClientError,
    CorrelationError,
    DecodeError,
    ParseError,
    ProtocolError,
    RpcError,
)
from noderpc.transport.exceptions import TransportError


class TestErrorTaxonomy:
    """Tests for ErrorTaxonomy.classify()."""

    @pytest.mark.parametrize(
        ("code", "kind"),
        [
            (-32601, RpcErrorKind.METHOD_NOT_FOUND),
            (-32602, RpcErrorKind.INVALID_PARAMETERS),
            (-32600, RpcErrorKind.INVALID_PARAMETERS),
            (-32603, RpcErrorKind.INTERNAL_NODE_ERROR),
            (-32700, RpcErrorKind.INTERNAL_NODE_ERROR),
            (-32001, RpcErrorKind.UNAUTHORIZED),
            (-32000, RpcErrorKind.INTERNAL_NODE_ERROR),
            (-32768, RpcErrorKind.INTERNAL_NODE_ERROR),
            (-32769, RpcErrorKind.OTHER),
            (-31999, RpcErrorKind.OTHER),
            (-5, RpcErrorKind.OTHER),
            (-8, RpcErrorKind.OTHER),
            (0, RpcErrorKind.OTHER),
            (42, RpcErrorKind.OTHER),
        ],
    )
    def test_default_classification(self, code: int, kind: RpcErrorKind) -> None:
        assert ErrorTaxonomy().classify(code) is kind

    def test_custom_unauthorized_codes(self) -> None:
        taxonomy = ErrorTaxonomy(unauthorized_codes={-32099})
        assert taxonomy.classify(-32099) is RpcErrorKind.UNAUTHORIZED
        assert taxonomy.classify(-32001) is RpcErrorKind.INTERNAL_NODE_ERROR

    def test_overrides_win(self) -> None:
        taxonomy = ErrorTaxonomy(overrides={-5: RpcErrorKind.INVALID_PARAMETERS, -32601: RpcErrorKind.OTHER})
        assert taxonomy.classify(-5) is RpcErrorKind.INVALID_PARAMETERS
        assert taxonomy.classify(-32601) is RpcErrorKind.OTHER

    def test_reserved_range(self) -> None:
        assert is_reserved_code(-32768)
        assert is_reserved_code(-32000)
        assert not is_reserved_code(-31999)
        assert not is_reserved_code(-32769)


class TestExceptions:
    """Tests for exception attributes and hierarchy."""

    def test_hierarchy(self) -> None:
        for cls in (ParseError, ProtocolError, CorrelationError, DecodeError):
            assert issubclass(cls, ClientError)
        for cls in (ClientError, RpcError, TransportError):
            assert issubclass(cls, NodeRpcError)
        assert not issubclass(RpcError, ClientError)
        assert not issubclass(TransportError, ClientError)

    def test_parse_error_attributes(self) -> None:
        error = ParseError(12, "Expecting value")
        assert error.position == 12
        assert error.reason == "Expecting value"
        assert str(error) == "Expecting value (at position 12)"

    def test_correlation_error_attributes(self) -> None:
        error = CorrelationError(1, "1")
        assert error.expected_id == 1
        assert error.actual_id == "1"
        assert "'1'" in str(error)

    def test_rpc_error_str(self) -> None:
        error = RpcError(-8, "Block height out of range", kind=RpcErrorKind.OTHER)
        assert str(error) == "[-8] Block height out of range"
        assert error.data is None
        assert "kind=other" in repr(error)

"""Tests for the raw ``call`` command."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest
from typer.testing import CliRunner

from noderpc.commands.call import parse_param
from noderpc.container import set_override
from noderpc.main import app
from noderpc.transport.exceptions import AuthenticationError, NetworkError

runner = CliRunner()


@pytest.fixture
def node(scripted_transport):
    set_override("transport", scripted_transport)
    return scripted_transport


class TestParseParam:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0", 0),
            ("true", True),
            ("null", None),
            ("0.5", Decimal("0.5")),
            ('["a", 1]', ["a", 1]),
            ('"quoted"', "quoted"),
        ],
    )
    def test_json_values(self, text: str, expected: object) -> None:
        assert parse_param(text) == expected

    @pytest.mark.parametrize(
        "text", ["000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f", "add", "1.2.3.4:8333", ""]
    )
    def test_bare_strings(self, text: str) -> None:
        assert parse_param(text) == text

    def test_nan_stays_a_string(self) -> None:
        assert parse_param("NaN") == "NaN"

    def test_digit_only_string_needs_json_quotes(self) -> None:
        digits = "4512" * 16

        assert parse_param(digits) == int(digits)
        assert parse_param(f'"{digits}"') == digits

    def test_undecodable_argv_bytes_stay_a_string(self) -> None:
        # Invalid UTF-8 in argv arrives as surrogate escapes.
        text = b"caf\xe9".decode("utf-8", "surrogateescape")

        assert parse_param(text) == text


class TestCallCommand:
    """Tests for noderpc call."""

    def test_scalar_result(self, node) -> None:
        node.reply_result("842103")

        result = runner.invoke(app, ["call", "getblockcount"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "842103"
        assert node.requests[0]["method"] == "getblockcount"
        assert node.requests[0]["params"] == []

    def test_params_parsed(self, node) -> None:
        node.reply_result('"00ab"')

        result = runner.invoke(app, ["call", "getblockhash", "0"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "00ab"
        assert node.sent[0] == b'{"jsonrpc":"2.0","method":"getblockhash","params":[0],"id":1}'

    def test_decimal_params_stay_exact(self, node) -> None:
        node.reply_result('"txid"')

        runner.invoke(app, ["call", "sendtoaddress", "bc1qaddr", "0.10000000"])

        assert b'"params":["bc1qaddr",0.10000000]' in node.sent[0]

    def test_undecodable_argv_bytes_are_sent_escaped(self, node) -> None:
        node.reply_result("null")
        text = b"caf\xe9".decode("utf-8", "surrogateescape")

        result = runner.invoke(app, ["call", "echo", text])

        assert result.exit_code == 0
        assert b'"params":["caf\\udce9"]' in node.sent[0]

    def test_decimal_result_in_plain_notation(self, node) -> None:
        node.reply_result("0.00001000")

        result = runner.invoke(app, ["call", "getbalance"])

        assert result.stdout.strip() == "0.00001000"

    def test_null_result(self, node) -> None:
        node.reply_result("null")

        result = runner.invoke(app, ["call", "addnode", "1.2.3.4:8333", "add"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "null"
        assert node.requests[0]["params"] == ["1.2.3.4:8333", "add"]

    def test_object_result_as_json(self, node) -> None:
        node.reply_result('{"feerate":0.00012345,"blocks":2}')

        result = runner.invoke(app, ["call", "estimatesmartfee", "2", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"feerate": "0.00012345", "blocks": 2}

    def test_object_result_as_tree(self, node) -> None:
        node.reply_result('{"chain":"regtest","blocks":101}')

        result = runner.invoke(app, ["call", "getblockchaininfo"])

        assert result.exit_code == 0
        assert "getblockchaininfo" in result.stdout
        assert "regtest" in result.stdout

    def test_list_result(self, node) -> None:
        node.reply_result('["aa","bb"]')

        result = runner.invoke(app, ["call", "getrawmempool"])

        assert json.loads(result.stdout) == ["aa", "bb"]

    def test_node_error(self, node) -> None:
        node.reply_error(-32601, "Method not found")

        result = runner.invoke(app, ["call", "nosuchmethod"])

        assert result.exit_code == 1
        assert "-32601" in result.output
        assert "method_not_found" in result.output

    def test_connection_error(self, node) -> None:
        node.reply_exception(NetworkError("Connection failed: refused"))

        result = runner.invoke(app, ["call", "getblockcount"])

        assert result.exit_code == 1
        assert "Connection error" in result.output

    def test_authentication_error(self, node) -> None:
        node.reply_exception(AuthenticationError("Node rejected the RPC credentials", status_code=401))

        result = runner.invoke(app, ["call", "getblockcount"])

        assert result.exit_code == 1
        assert "Authentication failed" in result.output

    def test_garbage_reply(self, node) -> None:
        node.reply_raw(b"<html>")

        result = runner.invoke(app, ["call", "getblockcount"])

        assert result.exit_code == 1
        assert "Error" in result.output

"""Root-level pytest configuration for all tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from noderpc.container import reset_container


class ScriptedTransport:
    """In-memory transport answering each request with the next scripted reply.

    Replies are queued with :meth:`reply_result`, :meth:`reply_error`,
    :meth:`reply_raw` or :meth:`reply_exception`. Result and error replies
    echo the id of the request they answer.
    """

    def __init__(self) -> None:
        self.replies: list[Callable[[dict[str, Any]], bytes]] = []
        self.sent: list[bytes] = []
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    def reply_result(self, result_json: str) -> ScriptedTransport:
        """Queue a success reply; *result_json* is raw JSON text."""

        def build(request: dict[str, Any]) -> bytes:
            request_id = json.dumps(request["id"])
            return f'{{"result":{result_json},"error":null,"id":{request_id}}}'.encode()

        self.replies.append(build)
        return self

    def reply_error(self, code: int, message: str, data: Any = None) -> ScriptedTransport:
        def build(request: dict[str, Any]) -> bytes:
            error = {"code": code, "message": message, "data": data}
            return json.dumps({"result": None, "error": error, "id": request["id"]}).encode()

        self.replies.append(build)
        return self

    def reply_raw(self, payload: bytes) -> ScriptedTransport:
        self.replies.append(lambda request: payload)
        return self

    def reply_exception(self, exc: Exception) -> ScriptedTransport:
        def build(request: dict[str, Any]) -> bytes:
            raise exc

        self.replies.append(build)
        return self

    def send(self, payload: bytes) -> bytes:
        self.sent.append(payload)
        request = json.loads(payload)
        self.requests.append(request)
        return self.replies.pop(0)(request)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted_transport() -> ScriptedTransport:
    """Fresh scripted transport for one test."""
    return ScriptedTransport()


@pytest.fixture(autouse=True)
def clean_container() -> Iterator[None]:
    """Reset container caches and overrides around every test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep user config files and NODERPC_* variables out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("NODERPC_"):
            monkeypatch.delenv(name)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr("noderpc.config.GLOBAL_CONFIG_PATH", home / ".noderpc" / "config.yaml")

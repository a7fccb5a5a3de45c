"""Shared test fixtures for jsonwebdb."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from jsonwebdb.cli.main import app
from jsonwebdb.core import messages


class FakeSession:
    """Records every request and answers with queued responses."""

    def __init__(self, *responses: dict[str, Any], session_id: str | None = "s-1"):
        self.session_id = session_id
        self.requests: list[dict[str, Any]] = []
        self._responses = list(responses)

    def queue(self, *responses: dict[str, Any]) -> None:
        self._responses.extend(responses)

    async def invoke(self, request: dict[str, Any]) -> dict[str, Any]:
        self.requests.append(request)
        if not self._responses:
            msg = f"unexpected request: {request}"
            raise AssertionError(msg)
        return self._responses.pop(0)


class Backend:
    """httpx.MockTransport handler answering queued JSON bodies."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def reply(
        self, body: Any = None, status_code: int = 200, content: bytes | None = None
    ) -> None:
        if content is not None:
            self._responses.append(httpx.Response(status_code, content=content))
        else:
            self._responses.append(httpx.Response(status_code, json=body))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)

    def sent(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_session():
    """Build a FakeSession answering the given responses in order."""

    def make(*responses: dict[str, Any], session_id: str | None = "s-1") -> FakeSession:
        return FakeSession(*responses, session_id=session_id)

    return make


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture(autouse=True)
def _english_messages():
    messages.set_language("en")
    yield
    messages.set_language("en")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for var in (
        "JSONWEBDB_URL",
        "JSONWEBDB_USER",
        "JSONWEBDB_PASSWORD",
        "JSONWEBDB_SESSION",
        "JSONWEBDB_TIMEOUT",
        "JSONWEBDB_PROFILE",
        "SENTRY_DSN",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "jsonwebdb.core.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.toml"
    )


@pytest.fixture
def runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_runner(runner, backend):
    """Invoke the CLI app against the mock backend."""

    def invoke(*args: str, **kwargs):
        return runner.invoke(app, list(args), obj={"transport": backend.transport}, **kwargs)

    return invoke


@pytest.fixture
def temp_dir():
    """Temporary directory for test files."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)

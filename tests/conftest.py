"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any

import pytest

from formstate import config
from formstate.exceptions import TransportError
from formstate.transport import TransportResponse


class FakeTransport:
    """Transport that records requests and answers from a script."""

    def __init__(
        self,
        response: TransportResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response or TransportResponse(status=200, data={"ok": True})
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **options: Any) -> TransportResponse:
        self.calls.append({"method": method, "url": url, **options})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


def failing_transport(body: Any, status: int = 422) -> FakeTransport:
    """Build a transport that fails with a response carrying `body`."""
    response = TransportResponse(status=status, data=body)
    return FakeTransport(error=TransportError(f"HTTP {status}", response=response))


@pytest.fixture(autouse=True)
def clean_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Reset process-wide settings and point the settings file at tmp_path."""
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(tmp_path / "config.yaml"))
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def transport() -> FakeTransport:
    """Return a succeeding fake transport installed as the default."""
    fake = FakeTransport()
    config.set_transport(fake)
    return fake


@pytest.fixture
def make_failing_transport():
    """Return a factory for fake transports failing with a response body."""
    return failing_transport


@pytest.fixture
def transport_class() -> type[FakeTransport]:
    """Return the fake transport class for custom scripts."""
    return FakeTransport

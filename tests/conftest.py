"""Shared pytest fixtures and test helpers for restcore tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from click.testing import CliRunner

from restcore.config.settings import RestSettings
from restcore.dispatch.server import Server
from restcore.infrastructure.resources import ResourceHolder


class RecordingErrorHandler:
    """ErrorHandler stand-in that remembers what it was asked to log."""

    def __init__(self) -> None:
        self.logged: list[BaseException] = []

    def init(self, settings: RestSettings) -> None:
        pass

    def log(self, exc: BaseException) -> None:
        self.logged.append(exc)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of settings."""
    monkeypatch.delenv("RESTCORE_MODE", raising=False)
    monkeypatch.delenv("RESTCORE_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def resources() -> Iterator[ResourceHolder]:
    """Resource holder private to one test, closed afterwards."""
    holder = ResourceHolder(register_atexit=False)
    try:
        yield holder
    finally:
        holder.close()


@pytest.fixture
def error_handler() -> RecordingErrorHandler:
    return RecordingErrorHandler()


@pytest.fixture
def make_server(resources: ResourceHolder, error_handler: RecordingErrorHandler):
    """Factory building a Server from settings overrides.

    Usage::

        server = make_server(mode="development", application={"output": "xml"})
    """

    def _make(**overrides: Any) -> Server:
        settings = RestSettings(**overrides)
        return Server(
            settings,
            resources=resources,
            error_handler=error_handler,  # type: ignore[arg-type]
            init_error_handler=False,
        )

    return _make


@pytest.fixture
def server(make_server) -> Server:
    """Server with default settings (production mode, JSON output)."""
    return make_server()

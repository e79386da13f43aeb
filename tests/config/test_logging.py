"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from restcore.config.logging import HANDLER_NAME, configure_logging, is_configured
from restcore.config.settings import RestSettings
from restcore.dispatch.error_handler import ErrorHandler


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("restcore")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("restcore").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("restcore").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("restcore.test")
        log.warning("hello world", key="val")
        # Smoke test: verify no exception; format depends on terminal

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("restcore.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "restcore.test"
        assert "timestamp" in parsed

    def test_stdlib_app_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("restcore.hooks.manager").debug("Registered plugin: system")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Registered plugin: system"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "restcore.hooks.manager"
        assert "timestamp" in parsed

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("sqlalchemy.engine").debug("pool noise")
        logging.getLogger("urllib3").debug("connection noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        ours = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
        assert len(ours) == 1

    def test_host_handlers_survive(self) -> None:
        root = logging.getLogger()
        host = logging.NullHandler()
        root.handlers = [host]
        configure_logging(verbose=False, log_json=False)
        configure_logging(verbose=False, log_json=True)
        assert root.handlers[0] is host
        assert len(root.handlers) == 2


class TestErrorHandler:
    def test_log_includes_traceback(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        try:
            raise RuntimeError("kaboom")
        except RuntimeError as exc:
            ErrorHandler().log(exc)

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["level"] == "error"
        assert parsed["logger"] == "restcore.errors"
        assert parsed["event"] == "Unhandled failure: RuntimeError"
        assert "RuntimeError: kaboom" in parsed["exception"]

    def test_init_configures_unconfigured_process(self) -> None:
        logging.getLogger().handlers = []
        ErrorHandler().init(RestSettings(verbose=True))
        assert logging.getLogger("restcore").level == logging.DEBUG
        assert is_configured()

    def test_init_leaves_host_logging_alone(self) -> None:
        root = logging.getLogger()
        host = logging.NullHandler()
        root.handlers = [host]
        logging.getLogger("restcore").setLevel(logging.INFO)

        ErrorHandler().init(RestSettings(verbose=True))
        ErrorHandler().init(RestSettings(verbose=False))

        assert root.handlers == [host]
        assert logging.getLogger("restcore").level == logging.INFO

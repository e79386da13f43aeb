"""Error-handling collaborator: sets up logging and records unhandled failures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from restcore.config.logging import configure_logging, is_configured

if TYPE_CHECKING:
    from restcore.config.settings import RestSettings


class ErrorHandler:
    """Records server-side failures.

    ``init()`` configures structured logging from settings when nothing in
    the process has configured logging yet, so an application embedding
    the server keeps its own setup. ``log()`` writes one ERROR record with
    the exception's traceback attached.
    """

    def __init__(self, logger_name: str = "restcore.errors") -> None:
        self._logger = logging.getLogger(logger_name)

    def init(self, settings: RestSettings) -> None:
        if is_configured():
            return
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def log(self, exc: BaseException) -> None:
        self._logger.error("Unhandled failure: %s", type(exc).__name__, exc_info=exc)

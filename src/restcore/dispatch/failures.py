"""Failure taxonomy and classification into HTTP responses.

| Kind                   | Status | Body                                   |
|------------------------|--------|----------------------------------------|
| duplication_conflict   | 409    | ``{"error": <prefix> + message}``      |
| invalid_argument       | 400    | ``{"error": message}``                 |
| unhandled              | 500    | ``{"message": message[, "trace": ...]}`` |

Client-side kinds (4xx) are expected conditions and are never logged.
Unhandled failures are always logged; their trace reaches the client only
in development mode.
"""

from __future__ import annotations

import logging
import traceback
from enum import StrEnum
from typing import TYPE_CHECKING, assert_never

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from restcore.dispatch.result import OperationResponse
from restcore.errors import DuplicationError, InvalidArgumentError

if TYPE_CHECKING:
    from restcore.dispatch.error_handler import ErrorHandler

logger = logging.getLogger(__name__)

DUPLICATION_PREFIX = "An action causing data duplication was found: "


class FailureKind(StrEnum):
    """How a failure is reported to the client."""

    DUPLICATION_CONFLICT = "duplication_conflict"
    INVALID_ARGUMENT = "invalid_argument"
    UNHANDLED = "unhandled"


class Failure(BaseModel):
    """A classified failure. ``trace`` is only set for unhandled failures."""

    model_config = {"frozen": True}

    kind: FailureKind
    message: str
    trace: str | None = None


def _message(exc: BaseException) -> str:
    source: BaseException = exc
    if isinstance(exc, IntegrityError) and exc.orig is not None:
        source = exc.orig
    try:
        return str(source)
    except Exception:
        return type(source).__name__


def _trace(exc: BaseException) -> str:
    try:
        return "".join(traceback.format_exception(exc))
    except Exception:
        return type(exc).__name__


def classify_exception(exc: BaseException, *, include_trace: bool = False) -> Failure:
    """Map *exc* to a :class:`Failure`.

    A database integrity violation counts as a duplication conflict, the
    same as an explicit :class:`DuplicationError`.
    """
    if isinstance(exc, (DuplicationError, IntegrityError)):
        return Failure(kind=FailureKind.DUPLICATION_CONFLICT, message=_message(exc))
    if isinstance(exc, InvalidArgumentError):
        return Failure(kind=FailureKind.INVALID_ARGUMENT, message=_message(exc))

    trace = _trace(exc) if include_trace else None
    return Failure(kind=FailureKind.UNHANDLED, message=_message(exc), trace=trace)


def failure_response(failure: Failure) -> OperationResponse:
    """Build the client-facing response for *failure*."""
    kind = failure.kind
    if kind is FailureKind.DUPLICATION_CONFLICT:
        return OperationResponse(status=409, body={"error": DUPLICATION_PREFIX + failure.message})
    if kind is FailureKind.INVALID_ARGUMENT:
        return OperationResponse(status=400, body={"error": failure.message})
    if kind is FailureKind.UNHANDLED:
        body = {"message": failure.message}
        if failure.trace is not None:
            body["trace"] = failure.trace
        return OperationResponse(status=500, body=body)
    assert_never(kind)


class ErrorClassifier:
    """Terminal handler for anything raised during a dispatch.

    Parameters:
        error_handler: Receives every unhandled failure before the
            response is built.
        development: Attach stack traces to 500 responses.
    """

    def __init__(self, error_handler: ErrorHandler, *, development: bool = False) -> None:
        self._error_handler = error_handler
        self._development = development

    def classify(self, exc: BaseException) -> OperationResponse:
        """Classify *exc* and build its response. Never raises."""
        failure = classify_exception(exc, include_trace=self._development)
        if failure.kind is FailureKind.UNHANDLED:
            try:
                self._error_handler.log(exc)
            except Exception:
                logger.warning(
                    "Error handler failed while logging %s", type(exc).__name__, exc_info=True
                )
        return failure_response(failure)

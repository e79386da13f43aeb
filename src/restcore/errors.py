"""Exception types raised by restcore and by the business logic it runs.

Handlers raise :class:`DuplicationError` and :class:`InvalidArgumentError`
to signal client-side problems. Anything else reaching the dispatcher is
treated as a server-side bug.
"""

from __future__ import annotations


class RestcoreError(Exception):
    """Base class for restcore exceptions."""


class DuplicationError(RestcoreError):
    """An action would duplicate data that must be unique (HTTP 409)."""


class InvalidArgumentError(RestcoreError, ValueError):
    """The client supplied malformed or invalid input (HTTP 400)."""


class HookReferenceError(RestcoreError):
    """A configured hook reference could not be resolved to a callable."""


class ResponseAlreadySentError(RestcoreError, RuntimeError):
    """A second response was produced for a request that already has one."""

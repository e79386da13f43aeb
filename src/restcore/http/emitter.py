"""Response emitters: write one finalized response to a transport.

An emitter is created per request and accepts exactly one response:
the status line first, then every header line, then the body.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from http import HTTPStatus
from typing import IO, Any

from restcore.errors import ResponseAlreadySentError
from restcore.http.response import HttpResponse


def reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def status_line(http_version: str, status: int) -> str:
    """Return e.g. ``"HTTP/1.1 404 Not Found"``."""
    reason = reason_phrase(status)
    return f"HTTP/{http_version} {status} {reason}".rstrip()


class ResponseEmitter(ABC):
    """Base class enforcing the one-response-per-request rule."""

    def __init__(self) -> None:
        self._sent = False

    @property
    def sent(self) -> bool:
        return self._sent

    def emit(self, response: HttpResponse) -> None:
        """Write *response* to the transport.

        Raises:
            ResponseAlreadySentError: If this emitter already sent a response.
        """
        if self._sent:
            raise ResponseAlreadySentError("A response was already emitted for this request")
        self._sent = True
        response.ensure_content_length()
        self._write(response)

    @abstractmethod
    def _write(self, response: HttpResponse) -> None: ...


class StreamEmitter(ResponseEmitter):
    """Writes a raw HTTP/1.x response to a binary stream (socket file, stdout)."""

    def __init__(self, stream: IO[bytes], http_version: str = "1.1") -> None:
        super().__init__()
        self._stream = stream
        self._http_version = http_version

    def _write(self, response: HttpResponse) -> None:
        head = [status_line(self._http_version, response.status)]
        head.extend(f"{name}: {value}" for name, value in response.header_lines())
        self._stream.write(("\r\n".join(head) + "\r\n\r\n").encode("iso-8859-1"))
        self._stream.write(response.body)
        self._stream.flush()


class WsgiEmitter(ResponseEmitter):
    """Hands the response to a WSGI ``start_response`` callable.

    After :meth:`emit`, :attr:`body` holds the iterable to return to the
    WSGI server.
    """

    def __init__(self, start_response: Callable[..., Any]) -> None:
        super().__init__()
        self._start_response = start_response
        self.body: list[bytes] = []

    def _write(self, response: HttpResponse) -> None:
        status = f"{response.status} {reason_phrase(response.status)}".rstrip()
        self._start_response(status, list(response.header_lines()))
        self.body = [response.body]

"""WSGI adapter for a restcore server."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from restcore.http.emitter import WsgiEmitter

if TYPE_CHECKING:
    from restcore.dispatch.server import Server


def make_wsgi_app(server: Server) -> Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]:
    """Wrap *server* as a WSGI application.

    ``REMOTE_USER``, when the WSGI server or a middleware set it, is passed
    on as the authenticated principal.
    """

    def app(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        emitter = WsgiEmitter(start_response)
        server.run(
            environ.get("PATH_INFO") or "/",
            emitter,
            principal=environ.get("REMOTE_USER"),
        )
        if environ.get("REQUEST_METHOD") == "HEAD":
            return []
        return emitter.body

    return app

"""Transport-facing primitives: finalized responses and their emitters."""

from restcore.http.emitter import ResponseEmitter, StreamEmitter, WsgiEmitter, status_line
from restcore.http.response import HttpResponse

__all__ = [
    "HttpResponse",
    "ResponseEmitter",
    "StreamEmitter",
    "WsgiEmitter",
    "status_line",
]

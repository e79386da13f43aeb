"""Request handlers: the collaborator that runs business logic for a path.

The dispatcher only relies on the :class:`RequestHandler` protocol. The
default :class:`RequestController` looks the first path segment up in the
server's operation table and runs it between the standard hooks:

1. event ``request.start``
2. the operation itself
3. filter ``operation.response`` (receives and returns the OperationResponse)
4. event ``request.end``
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from restcore.dispatch.result import OperationResponse
from restcore.errors import InvalidArgumentError, ResponseAlreadySentError
from restcore.http.response import HttpResponse
from restcore.output.formatters import SUPPORTED_FORMATS, is_supported_format, render_body

if TYPE_CHECKING:
    from restcore.dispatch.context import RequestContext
    from restcore.dispatch.server import Server

Operation = Callable[["RequestContext"], OperationResponse]

EVENT_REQUEST_START = "request.start"
EVENT_REQUEST_END = "request.end"
FILTER_OPERATION_RESPONSE = "operation.response"


class RequestHandler(Protocol):
    """What the dispatcher needs from a handler.

    ``handle`` either ends by calling ``handle_response`` or raises.
    ``response`` holds the finalized response afterwards.
    """

    response: HttpResponse | None

    def set_resources(self, db: Any, cache: Any) -> None: ...

    def handle(self, path: Sequence[str], context: RequestContext) -> None: ...

    def handle_response(self, response: OperationResponse) -> None: ...


class RequestController:
    """Default request handler.

    Constructed without resources it only formats responses; the dispatcher
    uses such an instance to render failures.
    """

    def __init__(
        self,
        server: Server,
        db: Any = None,
        cache: Any = None,
        *,
        output_format: str | None = None,
    ) -> None:
        self._server = server
        self._db = db
        self._cache = cache
        self.output_format = output_format or server.settings.application.output
        self.response: HttpResponse | None = None

    def set_resources(self, db: Any, cache: Any) -> None:
        self._db = db
        self._cache = cache

    def handle(self, path: Sequence[str], context: RequestContext) -> None:
        self.output_format = context.output_format
        if not is_supported_format(self.output_format):
            msg = (
                f"Unsupported output format '{self.output_format}' "
                f"(expected one of {', '.join(SUPPORTED_FORMATS)})"
            )
            raise InvalidArgumentError(msg)

        hooks = self._server.hooks
        hooks.trigger_event(EVENT_REQUEST_START, self._db, self._cache)

        name = path[0] if path else ""
        operation = self._server.operations.get(name)
        if operation is None:
            result = OperationResponse(status=404, body={"error": f"No operation named '{name}'"})
        else:
            result = operation(context)
            if not isinstance(result, OperationResponse):
                msg = f"Operation '{name}' returned {type(result).__name__}, not OperationResponse"
                raise TypeError(msg)

        result = hooks.apply_filter(FILTER_OPERATION_RESPONSE, result, self._db, self._cache)
        hooks.trigger_event(EVENT_REQUEST_END, self._db, self._cache)
        self.handle_response(result)

    def handle_response(self, response: OperationResponse) -> None:
        """Render *response* in the output format and keep it as the final response.

        Raises:
            ResponseAlreadySentError: On a second call for the same request.
        """
        if self.response is not None:
            raise ResponseAlreadySentError("A response was already produced for this request")

        content_type, body = render_body(response.body, self.output_format)
        http_response = HttpResponse(status=response.status, body=body)
        http_response.headers["Content-Type"] = content_type
        http_response.ensure_content_length()
        self.response = http_response

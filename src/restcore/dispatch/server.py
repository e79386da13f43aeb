"""Server: owns the hook registry and dispatches requests.

One dispatch runs through these states::

    Start -> ResourcesAcquired -> Negotiated -> HandlerInvoked -> Responded

Anything raised before ``Responded`` (resource acquisition included) is
caught once, at the dispatch boundary, classified, and rendered by a
fallback controller that holds no resources. Every dispatch therefore
produces exactly one response.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from restcore.dispatch.context import RequestContext
from restcore.dispatch.controller import Operation, RequestController
from restcore.dispatch.error_handler import ErrorHandler
from restcore.dispatch.failures import ErrorClassifier
from restcore.dispatch.negotiation import negotiate
from restcore.dispatch.result import OperationResponse
from restcore.hooks.manager import PluginManager
from restcore.hooks.registry import Channel, HookRegistry
from restcore.infrastructure.resources import ResourceHolder, get_resource_holder

if TYPE_CHECKING:
    from restcore.config.settings import RestSettings
    from restcore.dispatch.controller import RequestHandler
    from restcore.http.emitter import ResponseEmitter
    from restcore.http.response import HttpResponse

logger = logging.getLogger(__name__)


def path_segments(raw_path: str, base_path: str = "/") -> list[str] | None:
    """Split *raw_path* into segments below *base_path*.

    Returns None when the path is outside the base path or names no
    segment at all.
    """
    base = "/" + base_path.strip().strip("/")
    prefix = "/" if base == "/" else base + "/"
    if not raw_path.startswith(prefix):
        return None
    remainder = raw_path[len(prefix) :]
    if not remainder:
        return None
    return remainder.split("/")


class Server:
    """A restcore application.

    Parameters:
        settings: Frozen configuration.
        hooks: Registry to use; a new one is created when omitted. Hook
            bindings from ``application.events``/``application.filters``
            are added to it.
        resources: Holder of the shared database and cache handles;
            defaults to the process-wide holder.
        error_handler: Receives unhandled failures.
        init_error_handler: Let *error_handler* configure logging.
    """

    def __init__(
        self,
        settings: RestSettings,
        *,
        hooks: HookRegistry | None = None,
        resources: ResourceHolder | None = None,
        error_handler: ErrorHandler | None = None,
        init_error_handler: bool = True,
    ) -> None:
        self.settings = settings
        self.error_handler = error_handler or ErrorHandler()
        if init_error_handler:
            self.error_handler.init(settings)

        self.hooks = hooks if hooks is not None else HookRegistry()
        self.hooks.owner = self
        self.resources = resources or get_resource_holder()
        self.operations: dict[str, Operation] = {}
        self.plugins = PluginManager()
        self._classifier = ErrorClassifier(self.error_handler, development=settings.is_development)

        app = settings.application
        self.hooks.bind_from_config(app.events, app.filters)

    # ------------------------------------------------------------------
    # Startup surface
    # ------------------------------------------------------------------

    def bind(
        self,
        name: str,
        callback: Callable[..., Any] | str,
        channel: Channel | str = Channel.EVENT,
    ) -> None:
        self.hooks.bind(name, callback, channel)

    def trigger_event(self, name: str, db: Any, cache: Any) -> None:
        self.hooks.trigger_event(name, db, cache)

    def apply_filter(self, name: str, content: Any, db: Any, cache: Any) -> Any:
        return self.hooks.apply_filter(name, content, db, cache)

    def add_operation(self, name: str, operation: Operation) -> None:
        if name in self.operations:
            logger.warning("Operation %r replaced", name)
        self.operations[name] = operation

    def operation(self, name: str) -> Callable[[Operation], Operation]:
        """Decorator registering an operation for the default controller.

        Usage::

            @server.operation("ping")
            def ping(context: RequestContext) -> OperationResponse:
                return OperationResponse(status=200, body={"pong": True})
        """

        def decorator(func: Operation) -> Operation:
            self.add_operation(name, func)
            return func

        return decorator

    def load_plugins(self, *, local_dir: Path | None = None) -> list[str]:
        """Load built-in, entry-point and local plugins and install them.

        *local_dir* defaults to ``application.plugins_dir``. Returns the
        names of all registered plugins.
        """
        from restcore.hooks.builtins.system import SystemPlugin

        if not self.plugins.has_plugin("system"):
            self.plugins.register_plugin(SystemPlugin(), name="system")
        if local_dir is None and self.settings.application.plugins_dir:
            local_dir = Path(self.settings.application.plugins_dir)
        names = self.plugins.discover_and_load(local_dir=local_dir)
        self.plugins.install(self)
        return names

    def close_db_on_shutdown(self, toggle: bool) -> None:
        """Choose whether the shared database is closed when the process exits."""
        self.resources.close_on_shutdown = bool(toggle)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(
        self,
        path: Sequence[str],
        handler: RequestHandler | None = None,
        *,
        principal: Any = None,
    ) -> HttpResponse:
        """Handle one request for *path* and return its finalized response.

        *handler* replaces the default controller; it receives the shared
        resources through ``set_resources`` and has any response left over
        from an earlier dispatch cleared before it runs. *principal* is
        the already-authenticated caller, if the transport knows one.
        """
        app = self.settings.application
        context = RequestContext(path=list(path), principal=principal, output_format=app.output)
        try:
            context.db = self.resources.database(app.db)
            context.cache = self.resources.cache(app.cache)

            negotiated = negotiate(
                context.path,
                allow_extensions=bool(self.settings.get("application.allow_output_extensions")),
            )
            context.path = list(negotiated.path)
            if negotiated.output_format:
                context.output_format = negotiated.output_format

            if handler is None:
                handler = RequestController(self, context.db, context.cache)
            else:
                handler.set_resources(context.db, context.cache)
                handler.response = None

            handler.handle(context.path, context)
            if handler.response is None:
                raise RuntimeError("Request handler finished without producing a response")
            return handler.response
        except Exception as exc:
            return self._respond_with_failure(exc, context)

    def _respond_with_failure(self, exc: Exception, context: RequestContext) -> HttpResponse:
        response = self._classifier.classify(exc)
        fallback = RequestController(self, output_format=context.output_format)
        fallback.handle_response(response)
        assert fallback.response is not None
        return fallback.response

    def run(
        self, raw_path: str, emitter: ResponseEmitter, *, principal: Any = None
    ) -> HttpResponse:
        """Dispatch a raw request path, emit the response through *emitter* and return it.

        Paths outside ``application.path`` get a 404 without dispatching.
        """
        segments = path_segments(raw_path, self.settings.application.path)
        if segments is None:
            controller = RequestController(self)
            controller.handle_response(
                OperationResponse(status=404, body={"error": f"Not found: {raw_path}"})
            )
            response = controller.response
        else:
            response = self.dispatch(segments, principal=principal)
        assert response is not None
        emitter.emit(response)
        return response

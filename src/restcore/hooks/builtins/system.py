"""Built-in ``system`` operation.

``GET /system`` reports the server name and version, and the
authenticated principal when the transport supplied one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from restcore import __version__
from restcore.dispatch.result import OperationResponse
from restcore.hooks.hookspecs import hookimpl

if TYPE_CHECKING:
    from restcore.dispatch.context import RequestContext


def system_info(context: RequestContext) -> OperationResponse:
    body: dict[str, Any] = {"name": "restcore", "version": __version__}
    if context.principal is not None:
        body["principal"] = str(context.principal)
    return OperationResponse(status=200, body=body)


class SystemPlugin:
    """Registers the ``system`` operation."""

    @hookimpl
    def restcore_register_operations(self) -> dict[str, Any]:
        return {"system": system_info}

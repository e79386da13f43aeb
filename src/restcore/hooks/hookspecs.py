"""Pluggy hook specifications for restcore plugins.

Plugins contribute to a server at startup: they bind event/filter
listeners on the server's registry and register named operations for
the default request controller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from restcore.dispatch.controller import Operation
    from restcore.hooks.registry import HookRegistry

PROJECT_NAME = "restcore"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class RestcoreHookSpec:
    """Hook specifications for the restcore plugin system."""

    @hookspec
    def restcore_bind_hooks(self, registry: HookRegistry) -> None:
        """Bind event and filter listeners on *registry*."""

    @hookspec
    def restcore_register_operations(self) -> dict[str, Operation] | None:
        """Return operation name -> callable mappings."""

"""HookRegistry: named event and filter listeners.

Two independent channels, keyed by hook name, kept in registration order:

- ``event``: notifications. Each callback is called as
  ``callback(server, db, cache)`` and its return value is discarded.
- ``filter``: transforms. Callbacks are folded left to right, each one
  receiving the previous result: ``content = callback(server, content, db, cache)``.

The registry is append-only. Bindings are made at startup, before the
server handles concurrent traffic; binding during live dispatch is not
synchronized.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from restcore.hooks.references import resolve_reference

logger = logging.getLogger(__name__)

EventCallback = Callable[[Any, Any, Any], None]
"""``(server, db, cache) -> None``"""

FilterCallback = Callable[[Any, Any, Any, Any], Any]
"""``(server, content, db, cache) -> content``"""


class Channel(StrEnum):
    """Hook channels."""

    EVENT = "event"
    FILTER = "filter"


@dataclass(frozen=True, slots=True)
class HookBinding:
    """One callback bound to a hook name on a channel."""

    channel: Channel
    name: str
    callback: Callable[..., Any]
    order: int


class HookRegistry:
    """Ordered, append-only store of hook bindings.

    Parameters:
        owner: Object passed as the first argument to every callback
            (normally the :class:`~restcore.dispatch.server.Server`).
    """

    def __init__(self, owner: Any = None) -> None:
        self.owner = owner
        self._bindings: dict[Channel, dict[str, list[HookBinding]]] = {
            Channel.EVENT: {},
            Channel.FILTER: {},
        }
        self._order = itertools.count()

    def bind(
        self,
        name: str,
        callback: Callable[..., Any] | str,
        channel: Channel | str = Channel.EVENT,
    ) -> HookBinding:
        """Append *callback* to the listeners of *name* on *channel*.

        *callback* may be a ``"module:attribute"`` reference. Binding the
        same callback twice makes it fire twice.
        """
        channel = Channel(channel)
        if isinstance(callback, str):
            callback = resolve_reference(callback)
        if not callable(callback):
            msg = f"Hook callback for {name!r} must be callable, got {type(callback).__name__}"
            raise TypeError(msg)

        binding = HookBinding(channel=channel, name=name, callback=callback, order=next(self._order))
        self._bindings[channel].setdefault(name, []).append(binding)
        logger.debug("Bound %s hook %s -> %r", channel, name, callback)
        return binding

    def bind_from_config(
        self,
        events: Iterable[Mapping[str, Any]] = (),
        filters: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        """Register ``{hook_name: reference}`` entries from configuration."""
        for entry in events:
            for name, callback in entry.items():
                self.bind(name, callback, Channel.EVENT)
        for entry in filters:
            for name, callback in entry.items():
                self.bind(name, callback, Channel.FILTER)

    def trigger_event(self, name: str, db: Any, cache: Any) -> None:
        """Call every event listener of *name* in registration order."""
        for binding in tuple(self._bindings[Channel.EVENT].get(name, ())):
            binding.callback(self.owner, db, cache)

    def apply_filter(self, name: str, content: Any, db: Any, cache: Any) -> Any:
        """Thread *content* through every filter of *name*, left to right.

        Returns *content* unchanged when nothing is bound.
        """
        for binding in tuple(self._bindings[Channel.FILTER].get(name, ())):
            content = binding.callback(self.owner, content, db, cache)
        return content

    def has_listeners(self, name: str, channel: Channel | str = Channel.EVENT) -> bool:
        return bool(self._bindings[Channel(channel)].get(name))

    def bindings(self, channel: Channel | str | None = None) -> list[HookBinding]:
        """Snapshot of bindings in registration order, optionally for one channel."""
        channels = list(Channel) if channel is None else [Channel(channel)]
        found = [
            binding
            for ch in channels
            for listeners in self._bindings[ch].values()
            for binding in listeners
        ]
        return sorted(found, key=lambda b: b.order)

"""Cache handles.

The dispatch core treats the cache as opaque and only passes it along to
handlers and hooks. Two drivers ship with restcore: ``memory`` (per-process
dict with optional expiry) and ``none`` (never stores anything).
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from restcore.config.models import CacheConfig


class Cache(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, ttl: int | None = None) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


class MemoryCache:
    """Thread-safe in-process cache.

    Parameters:
        default_ttl: Seconds before an entry expires; ``0`` keeps entries
            until deleted.
    """

    def __init__(self, default_ttl: int = 0) -> None:
        self._default_ttl = default_ttl
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            value, expires = entry
            if expires is not None and expires <= time.monotonic():
                del self._entries[key]
                return default
            return value

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        seconds = self._default_ttl if ttl is None else ttl
        expires = time.monotonic() + seconds if seconds > 0 else None
        with self._lock:
            self._entries[key] = (value, expires)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class NullCache:
    """Cache that stores nothing."""

    def get(self, key: str, default: Any = None) -> Any:
        return default

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        pass

    def delete(self, key: str) -> None:
        pass

    def clear(self) -> None:
        pass


CACHE_DRIVERS = ("memory", "none")


def create_cache(config: CacheConfig) -> Cache:
    """Build the cache selected by ``config.driver``.

    Raises:
        ValueError: If the driver is not one of :data:`CACHE_DRIVERS`.
    """
    if config.driver == "memory":
        return MemoryCache(default_ttl=config.ttl)
    if config.driver == "none":
        return NullCache()
    msg = f"Unknown cache driver {config.driver!r} (expected one of {', '.join(CACHE_DRIVERS)})"
    raise ValueError(msg)

"""Process-scoped owner of the shared database and cache handles.

Both handles are created lazily on first request and then reused by every
dispatch. The holder closes the database when the process exits (via
``atexit``) unless the owner opts out with ``close_on_shutdown = False``.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import TYPE_CHECKING

from restcore.infrastructure.cache import create_cache
from restcore.infrastructure.database import Database

if TYPE_CHECKING:
    from restcore.config.models import CacheConfig, DatabaseConfig
    from restcore.infrastructure.cache import Cache

logger = logging.getLogger(__name__)


class ResourceHolder:
    """Lazily created, process-wide database and cache handles.

    Parameters:
        close_on_shutdown: Close the database when the process exits.
        register_atexit: Install the shutdown hook (tests pass ``False``).
    """

    def __init__(self, *, close_on_shutdown: bool = True, register_atexit: bool = True) -> None:
        self.close_on_shutdown = close_on_shutdown
        self._db: Database | None = None
        self._cache: Cache | None = None
        self._lock = threading.Lock()
        if register_atexit:
            atexit.register(self.shutdown)

    @property
    def database_initiated(self) -> bool:
        return self._db is not None

    @property
    def cache_initiated(self) -> bool:
        return self._cache is not None

    def database(self, config: DatabaseConfig) -> Database:
        """Return the shared database handle, creating it on first use."""
        if self._db is None:
            with self._lock:
                if self._db is None:
                    self._db = Database.from_config(config)
                    logger.debug("Database handle created for %s", self._db.engine.url)
        return self._db

    def cache(self, config: CacheConfig) -> Cache:
        """Return the shared cache handle, creating it on first use."""
        if self._cache is None:
            with self._lock:
                if self._cache is None:
                    self._cache = create_cache(config)
                    logger.debug("Cache handle created (driver=%s)", config.driver)
        return self._cache

    def close(self) -> None:
        """Close the database handle and forget both handles."""
        with self._lock:
            if self._db is not None:
                self._db.close()
                logger.debug("Database handle closed")
            self._db = None
            self._cache = None

    def shutdown(self) -> None:
        """Process-exit hook: close unless the owner opted out."""
        if self.close_on_shutdown:
            self.close()


_holder: ResourceHolder | None = None
_holder_lock = threading.Lock()


def get_resource_holder() -> ResourceHolder:
    """Return the process-wide holder, creating it on first call."""
    global _holder
    if _holder is None:
        with _holder_lock:
            if _holder is None:
                _holder = ResourceHolder()
    return _holder

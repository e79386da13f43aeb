"""Infrastructure layer: shared database and cache handles.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It must never import from dispatch, hooks, commands, or output.
"""

from restcore.infrastructure.cache import Cache, MemoryCache, NullCache, create_cache
from restcore.infrastructure.database import Database, create_db_engine
from restcore.infrastructure.resources import ResourceHolder, get_resource_holder

__all__ = [
    "Cache",
    "Database",
    "MemoryCache",
    "NullCache",
    "ResourceHolder",
    "create_cache",
    "create_db_engine",
    "get_resource_holder",
]

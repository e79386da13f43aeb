"""Database handle shared by every dispatched request.

SQLAlchemy Core (not ORM): handlers get a :class:`Database` wrapping an
engine and open their own connections or transactions from it. The
dispatcher only borrows the handle; closing it is the resource holder's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from restcore.config.models import DatabaseConfig


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *url*.

    SQLite connections get foreign keys enabled. An in-memory SQLite URL
    uses a single shared connection so every request sees the same data.
    """
    parsed = make_url(url)
    kwargs: dict[str, Any] = {"echo": echo}
    is_sqlite = parsed.get_backend_name() == "sqlite"
    if is_sqlite and parsed.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(url, **kwargs)

    if is_sqlite:

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class Database:
    """Process-wide database handle.

    Usage::

        with db.begin() as conn:
            conn.execute(insert(users).values(name="ada"))
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._closed = False

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> Database:
        return cls(create_db_engine(config.url, echo=config.echo))

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self) -> Connection:
        """Open a connection (use as a context manager)."""
        return self.engine.connect()

    def begin(self) -> Any:
        """Open a connection inside a transaction that commits on exit."""
        return self.engine.begin()

    def close(self) -> None:
        """Dispose of the engine's connection pool. Idempotent."""
        if self._closed:
            return
        self.engine.dispose()
        self._closed = True

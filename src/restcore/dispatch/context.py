"""Per-request state owned by a single dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from restcore.infrastructure.cache import Cache
    from restcore.infrastructure.database import Database


@dataclass
class RequestContext:
    """Mutable context created at the start of a dispatch and dropped at its end.

    ``db`` and ``cache`` are borrowed from the process-wide resource holder
    and must not be closed by anything holding the context.
    """

    path: list[str] = field(default_factory=list)
    db: Database | None = None
    cache: Cache | None = None
    principal: Any = None
    output_format: str = "json"

    @property
    def operation(self) -> str:
        """First path segment; names the operation to run."""
        return self.path[0] if self.path else ""

    @property
    def args(self) -> list[str]:
        """Path segments after the operation name."""
        return self.path[1:]

"""Finalized HTTP response handed to the transport."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class HttpResponse:
    """Status, headers and encoded body of one response.

    A header with several values stores them joined by newlines; emitters
    write one header line per value.
    """

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def add_header(self, name: str, value: str) -> None:
        """Add *value* to header *name*, keeping any existing values."""
        existing = self.headers.get(name)
        self.headers[name] = value if existing is None else f"{existing}\n{value}"

    def ensure_content_length(self) -> None:
        """Guarantee the ``Content-Length`` header is present."""
        if "Content-Length" not in self.headers:
            self.headers["Content-Length"] = str(len(self.body))

    def header_lines(self) -> Iterator[tuple[str, str]]:
        """Yield ``(name, value)`` once per value, splitting multi-value headers."""
        for name, value in self.headers.items():
            for part in value.split("\n"):
                yield name, part

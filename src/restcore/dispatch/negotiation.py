"""Content negotiation from a path-embedded file extension.

``/reports/summary.csv`` asks for CSV output: the extension is stripped
from the final segment and becomes the output format for that request.
Only the last segment is inspected.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NegotiatedPath:
    """Result of negotiation. ``output_format`` is None when nothing changed."""

    path: tuple[str, ...]
    output_format: str | None = None


def split_extension(segment: str) -> tuple[str, str]:
    """Split *segment* at its final dot into ``(base, extension)``.

    ``"report.csv"`` -> ``("report", "csv")``; ``".json"`` -> ``("", "json")``;
    a segment without a dot, or ending in one, has no extension.
    """
    base, dot, ext = segment.rpartition(".")
    if not dot or not ext:
        return segment, ""
    return base, ext


def negotiate(path: Sequence[str], *, allow_extensions: bool) -> NegotiatedPath:
    """Strip an output-format extension from the last segment of *path*.

    With *allow_extensions* false, or no extension on the last segment, the
    path comes back unchanged and no format is negotiated. A final segment
    that is only an extension (``".json"``) leaves an empty segment behind.
    """
    segments = list(path)
    if not allow_extensions or not segments:
        return NegotiatedPath(tuple(segments))

    base, ext = split_extension(segments[-1])
    if not ext:
        return NegotiatedPath(tuple(segments))

    segments[-1] = base
    return NegotiatedPath(tuple(segments), ext)

"""Body renderers for the supported output formats.

An OperationResponse body is structured data; the negotiated output format
decides how it is encoded for the client. ``json`` is the fallback for any
format that is not supported.
"""

from __future__ import annotations

import csv
import io
import json as _json
from collections.abc import Callable
from typing import Any
from xml.etree import ElementTree

DEFAULT_FORMAT = "json"


def _render_json(body: Any) -> str:
    return _json.dumps(body, default=str)


def _xml_tag(name: Any) -> str:
    tag = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in str(name))
    if not tag or not (tag[0].isalpha() or tag[0] == "_"):
        tag = f"_{tag}"
    return tag


def _append_xml(parent: ElementTree.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _append_xml(ElementTree.SubElement(parent, _xml_tag(key)), item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _append_xml(ElementTree.SubElement(parent, "item"), item)
    elif value is not None:
        parent.text = str(value).lower() if isinstance(value, bool) else str(value)


def _render_xml(body: Any) -> str:
    root = ElementTree.Element("response")
    _append_xml(root, body)
    return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True).decode("utf-8")


def _cell(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return value


def _render_csv(body: Any) -> str:
    """Lists of mappings become one row per item; a mapping becomes key,value rows."""
    buf = io.StringIO()
    if isinstance(body, list) and all(isinstance(row, dict) for row in body):
        fields: list[str] = []
        for row in body:
            fields.extend(key for key in row if key not in fields)
        writer = csv.DictWriter(buf, fieldnames=fields, lineterminator="\n")
        writer.writeheader()
        for row in body:
            writer.writerow({key: _cell(val) for key, val in row.items()})
    elif isinstance(body, dict):
        writer_ = csv.writer(buf, lineterminator="\n")
        for key, value in body.items():
            writer_.writerow([key, _cell(value)])
    else:
        csv.writer(buf, lineterminator="\n").writerow([_cell(body)])
    return buf.getvalue()


def _render_txt(body: Any) -> str:
    if isinstance(body, dict):
        return "\n".join(f"{key}: {_cell(value)}" for key, value in body.items())
    if isinstance(body, list):
        return "\n".join(str(_cell(item)) for item in body)
    return str(body)


_RENDERERS: dict[str, tuple[str, Callable[[Any], str]]] = {
    "json": ("application/json", _render_json),
    "xml": ("application/xml", _render_xml),
    "csv": ("text/csv", _render_csv),
    "txt": ("text/plain", _render_txt),
}

SUPPORTED_FORMATS = tuple(_RENDERERS)


def is_supported_format(output_format: str) -> bool:
    return output_format.lower() in _RENDERERS


def render_body(body: Any, output_format: str) -> tuple[str, bytes]:
    """Encode *body* in *output_format*.

    Returns ``(content_type, encoded_body)``. Unsupported formats render
    as JSON.
    """
    key = output_format.lower()
    if key not in _RENDERERS:
        key = DEFAULT_FORMAT
    content_type, renderer = _RENDERERS[key]
    return f"{content_type}; charset=utf-8", renderer(body).encode("utf-8")

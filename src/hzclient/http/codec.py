# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Content-type detection, body serialization and response deserialization.

Encoding policy, kept deliberately narrow:

- JSON content types encode record, map and sequence bodies.
- XML content types encode record bodies only.
- Every other combination (strings, raw bytes, scalars, XML maps...) yields
  an empty body. Callers that need to send such payloads must supply their
  own body binder.
"""

from __future__ import annotations

import json
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .binding import fill_receptor, is_record, to_plain
from .sniff import sniff_content_type

PLAIN_TEXT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"

_JSON_CHECK = re.compile(r"(application|text)/(json|.*\+json|json-.*)(; |$)", re.IGNORECASE)
_XML_CHECK = re.compile(r"(application|text)/(xml|.*\+xml)(; |$)", re.IGNORECASE)


class Shape(str, Enum):
    RECORD = "record"
    MAP = "map"
    SEQUENCE = "sequence"
    STRING = "string"
    BYTES = "bytes"
    OTHER = "other"


def shape_of(value: Any) -> Shape:
    """Classify a body value by its runtime shape."""
    if isinstance(value, str):
        return Shape.STRING
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Shape.BYTES
    if is_record(value):
        return Shape.RECORD
    if isinstance(value, Mapping):
        return Shape.MAP
    if isinstance(value, (list, tuple, set, frozenset)):
        return Shape.SEQUENCE
    return Shape.OTHER


def is_json_type(content_type: str) -> bool:
    return bool(content_type) and _JSON_CHECK.search(content_type) is not None


def is_xml_type(content_type: str) -> bool:
    return bool(content_type) and _XML_CHECK.search(content_type) is not None


def detect_content_type(body: Any) -> str:
    """Figure out the request content type from the body value's shape."""
    shape = shape_of(body)
    if shape in (Shape.RECORD, Shape.MAP, Shape.SEQUENCE):
        return JSON_CONTENT_TYPE
    if shape is Shape.BYTES:
        return sniff_content_type(bytes(body))
    return PLAIN_TEXT_TYPE


def _xml_name(value: Any) -> str:
    return getattr(value, "__xml_name__", None) or type(value).__name__


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append_xml(parent: ET.Element, tag: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, list):
        for item in value:
            _append_xml(parent, tag, item)
        return
    child = ET.SubElement(parent, tag)
    if isinstance(value, Mapping):
        for key, item in value.items():
            _append_xml(child, str(key), item)
    else:
        child.text = _xml_text(value)


def marshal_json(value: Any) -> bytes:
    return json.dumps(to_plain(value, "json"), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def marshal_xml(value: Any) -> bytes:
    """Encode a record as ``<TypeName><field>...</field></TypeName>``."""
    root = ET.Element(_xml_name(value))
    plain = to_plain(value, "xml")
    if not isinstance(plain, Mapping):
        raise TypeError(f"cannot encode {type(value).__name__} as an XML element")
    for key, item in plain.items():
        _append_xml(root, str(key), item)
    return ET.tostring(root, encoding="unicode").encode("utf-8")


def encode_body(content_type: str, body: Any) -> bytes:
    """Serialize ``body`` for ``content_type``; unsupported combinations yield ``b""``."""
    shape = shape_of(body)
    if is_json_type(content_type) and shape in (Shape.RECORD, Shape.MAP, Shape.SEQUENCE):
        return marshal_json(body)
    if is_xml_type(content_type) and shape is Shape.RECORD:
        return marshal_xml(body)
    return b""


def _element_to_plain(element: ET.Element) -> Any:
    children = list(element)
    if not children:
        return element.text or ""
    out: dict[str, Any] = {}
    for child in children:
        value = _element_to_plain(child)
        if child.tag in out:
            existing = out[child.tag]
            if isinstance(existing, list):
                existing.append(value)
            else:
                out[child.tag] = [existing, value]
        else:
            out[child.tag] = value
    return out


def unmarshal_xml(data: bytes) -> Any:
    """Decode an XML document into plain data; the root element's children become keys.

    An empty root such as ``<Resp></Resp>`` decodes to an empty mapping.
    """
    root = ET.fromstring(data)
    if not len(root) and not (root.text or "").strip():
        return {}
    return _element_to_plain(root)


def unmarshal_content(content_type: str, data: bytes, receptor: Any) -> Any:
    """Decode ``data`` per ``content_type`` into ``receptor``; returns the filled value.

    Raises ``ValueError`` (``json.JSONDecodeError`` included),
    ``xml.etree.ElementTree.ParseError`` or ``TypeError`` on malformed input.
    """
    if is_json_type(content_type):
        return fill_receptor(receptor, json.loads(data), "json")
    if is_xml_type(content_type):
        return fill_receptor(receptor, unmarshal_xml(data), "xml")
    return receptor


__all__ = [
    "JSON_CONTENT_TYPE",
    "PLAIN_TEXT_TYPE",
    "Shape",
    "detect_content_type",
    "encode_body",
    "is_json_type",
    "is_xml_type",
    "marshal_json",
    "marshal_xml",
    "shape_of",
    "unmarshal_content",
    "unmarshal_xml",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header multimap.

HTTP header field names are case-insensitive (RFC 9110). Keys are stored in
canonical MIME form (``content-type`` -> ``Content-Type``) on every write so
lookups never depend on caller casing. Repeated values for one key are kept
in insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

_TOKEN_CHARS = frozenset("!#$%&'*+-.^_`|~0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


def canonical_header_key(key: str) -> str:
    """
    Return the canonical form of a header key.

    The first letter and any letter following a hyphen are upper-cased, the
    rest lower-cased. Keys containing a space or a non-token character are
    returned unchanged.
    """
    if not key or any(ch not in _TOKEN_CHARS for ch in key):
        return key
    out = []
    upper = True
    for ch in key:
        out.append(ch.upper() if upper else ch.lower())
        upper = ch == "-"
    return "".join(out)


def _coerce_pairs(headers: Any) -> Iterable[tuple[object, object]]:
    """
    Best-effort iteration over "dict-like" header containers.

    Accepts plain mappings (values may be lists), objects exposing
    ``multi_items()`` (httpx.Headers) or ``items()``, and iterables of pairs.
    """
    if headers is None:
        return []
    multi_items = getattr(headers, "multi_items", None)
    if callable(multi_items):
        return list(multi_items())
    if isinstance(headers, Mapping):
        pairs: list[tuple[object, object]] = []
        for key, value in headers.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((key, item) for item in value)
            else:
                pairs.append((key, value))
        return pairs
    items = getattr(headers, "items", None)
    if callable(items):
        return list(items())
    return list(headers)


class Headers:
    """Case-insensitive, multi-valued header map with canonical keys."""

    def __init__(self, headers: Any = None):
        self._values: dict[str, list[str]] = {}
        for key, value in _coerce_pairs(headers):
            if key is None:
                continue
            self.add(str(key), "" if value is None else str(value))

    def add(self, key: str, value: str) -> None:
        self._values.setdefault(canonical_header_key(key), []).append(value)

    def set(self, key: str, value: str) -> None:
        self._values[canonical_header_key(key)] = [value]

    def set_all(self, key: str, values: Iterable[str]) -> None:
        self._values[canonical_header_key(key)] = list(values)

    def get(self, key: str, default: str = "") -> str:
        values = self._values.get(canonical_header_key(key))
        return values[0] if values else default

    def get_all(self, key: str) -> list[str]:
        return list(self._values.get(canonical_header_key(key), []))

    def delete(self, key: str) -> None:
        self._values.pop(canonical_header_key(key), None)

    def keys(self) -> list[str]:
        return list(self._values)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield one ``(key, value)`` pair per stored value."""
        for key, values in self._values.items():
            for value in values:
                yield key, value

    def copy(self) -> Headers:
        clone = Headers()
        clone._values = {key: list(values) for key, values in self._values.items()}
        return clone

    def to_dict(self) -> dict[str, list[str]]:
        return {key: list(values) for key, values in self._values.items()}

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_header_key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"


__all__ = ["Headers", "canonical_header_key"]

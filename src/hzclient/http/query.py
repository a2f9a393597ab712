# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Query string multimap."""

from __future__ import annotations

from collections.abc import Iterator
from urllib.parse import urlencode


class QueryParams:
    """Multi-valued query parameters; values keep insertion order within a key."""

    def __init__(self) -> None:
        self._values: dict[str, list[str]] = {}

    def add(self, key: str, value: str) -> None:
        self._values.setdefault(key, []).append(value)

    def set(self, key: str, value: str) -> None:
        self._values[key] = [value]

    def get(self, key: str, default: str = "") -> str:
        values = self._values.get(key)
        return values[0] if values else default

    def get_all(self, key: str) -> list[str]:
        return list(self._values.get(key, []))

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def items(self) -> Iterator[tuple[str, str]]:
        for key, values in self._values.items():
            for value in values:
                yield key, value

    def encode(self) -> str:
        """Return the ``application/x-www-form-urlencoded`` form (spaces as ``+``)."""
        return urlencode(list(self.items()))

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __repr__(self) -> str:
        return f"QueryParams({self._values!r})"


__all__ = ["QueryParams"]

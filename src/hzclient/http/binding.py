# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Conversion between typed values and plain JSON/XML data.

Records are dataclass instances (or objects exposing ``to_dict()``). A
dataclass field may rename itself on the wire through field metadata, in the
``"name,omitempty"`` form: ``field(metadata={"json": "QueryString,omitempty"})``.
An ``"xml"`` key takes precedence over ``"json"`` for XML payloads. A name of
``"-"`` drops the field.

Receptors accepted by :func:`fill_receptor`:

- a class: a new instance is built from the payload and returned
- a dataclass instance: fields present in the payload are assigned in place
- a ``dict`` or ``list``: contents are replaced in place
"""

from __future__ import annotations

import base64
import dataclasses
import datetime
import enum
import types
import typing
from collections import abc
from collections.abc import Mapping
from typing import Any

PLAIN_SCALARS = (str, int, float, bool, type(None))


def _field_tag(f: dataclasses.Field, dialect: str) -> tuple[str, bool]:
    raw = f.metadata.get(dialect) if dialect == "xml" else None
    if raw is None:
        raw = f.metadata.get("json")
    if raw is None:
        return f.name, False
    name, _, flags = str(raw).partition(",")
    return name or f.name, "omitempty" in flags.split(",")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def is_record(value: Any) -> bool:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return callable(getattr(value, "to_dict", None)) and not isinstance(value, (type, Mapping))


def to_plain(value: Any, dialect: str = "json") -> Any:
    """Convert ``value`` into JSON-compatible builtins."""
    if isinstance(value, enum.Enum):
        return to_plain(value.value, dialect)
    if isinstance(value, PLAIN_SCALARS):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in dataclasses.fields(value):
            name, omitempty = _field_tag(f, dialect)
            if name == "-":
                continue
            item = getattr(value, f.name)
            if omitempty and _is_empty(item):
                continue
            out[name] = to_plain(item, dialect)
        return out
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, Mapping):
        return to_plain(to_dict(), dialect)
    if isinstance(value, Mapping):
        return {str(to_plain(key, dialect)): to_plain(item, dialect) for key, item in value.items()}
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_plain(item, dialect) for item in value]
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not serializable")


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        return {f.name: f.type for f in dataclasses.fields(cls) if not isinstance(f.type, str)}


def _coerce(value: Any, hint: Any, dialect: str) -> Any:
    if hint is Any or hint is None or isinstance(hint, str):
        return value

    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if value is None:
            return None
        errors: list[Exception] = []
        for arg in args:
            try:
                return _coerce(value, arg, dialect)
            except (TypeError, ValueError) as exc:
                errors.append(exc)
        raise errors[0] if errors else TypeError(f"cannot coerce {value!r}")

    if origin in (list, tuple, set, frozenset, abc.Sequence):
        args = typing.get_args(hint)
        item_hint = args[0] if args else Any
        items = value if isinstance(value, list) else [value]
        coerced = [_coerce(item, item_hint, dialect) for item in items]
        return coerced if origin not in (tuple, set, frozenset) else origin(coerced)

    if origin in (dict, abc.Mapping):
        args = typing.get_args(hint)
        item_hint = args[1] if len(args) == 2 else Any
        if not isinstance(value, Mapping):
            raise TypeError(f"expected an object, got {type(value).__name__}")
        return {key: _coerce(item, item_hint, dialect) for key, item in value.items()}

    if not isinstance(hint, type):
        return value
    if dataclasses.is_dataclass(hint):
        if not isinstance(value, Mapping):
            raise TypeError(f"expected an object for {hint.__name__}, got {type(value).__name__}")
        return build_record(hint, value, dialect)
    if issubclass(hint, enum.Enum):
        return hint(value)
    if hint is bool:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"true", "1"}:
                return True
            if lowered in {"false", "0", ""}:
                return False
            raise ValueError(f"invalid boolean {value!r}")
        return bool(value)
    if hint is bytes:
        return base64.b64decode(value) if isinstance(value, str) else bytes(value)
    if hint in (int, float, str):
        if isinstance(value, hint) and not (hint is int and isinstance(value, bool)):
            return value
        if isinstance(value, (Mapping, list)):
            raise TypeError(f"expected {hint.__name__}, got {type(value).__name__}")
        return hint(value)
    from_dict = getattr(hint, "from_dict", None)
    if callable(from_dict):
        return from_dict(value)
    return value


def _assign_fields(cls: type, data: Mapping[str, Any], dialect: str) -> dict[str, Any]:
    hints = _type_hints(cls)
    values: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        name, _ = _field_tag(f, dialect)
        if name == "-" or not f.init:
            continue
        if name in data:
            raw = data[name]
        elif f.name in data:
            raw = data[f.name]
        else:
            continue
        values[f.name] = _coerce(raw, hints.get(f.name, Any), dialect)
    return values


def build_record(cls: type, data: Mapping[str, Any], dialect: str = "json") -> Any:
    """Build a dataclass instance from decoded data; unknown keys are ignored."""
    return cls(**_assign_fields(cls, data, dialect))


def fill_receptor(receptor: Any, data: Any, dialect: str = "json") -> Any:
    """Deserialize ``data`` into ``receptor`` and return the filled value.

    A ``None`` payload (JSON ``null``) leaves an instance receptor untouched and
    yields ``None`` for a class receptor.
    """
    if data is None:
        return None if isinstance(receptor, type) else receptor
    if isinstance(receptor, type):
        if dataclasses.is_dataclass(receptor):
            if not isinstance(data, Mapping):
                raise TypeError(f"expected an object for {receptor.__name__}, got {type(data).__name__}")
            return build_record(receptor, data, dialect)
        return _coerce(data, receptor, dialect)

    if dataclasses.is_dataclass(receptor):
        if not isinstance(data, Mapping):
            raise TypeError(f"expected an object for {type(receptor).__name__}, got {type(data).__name__}")
        for key, value in _assign_fields(type(receptor), data, dialect).items():
            setattr(receptor, key, value)
        return receptor

    if isinstance(receptor, dict):
        if not isinstance(data, Mapping):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        receptor.clear()
        receptor.update(data)
        return receptor

    if isinstance(receptor, list):
        receptor[:] = data if isinstance(data, list) else [data]
        return receptor

    raise TypeError(f"unsupported receptor type {type(receptor).__name__}")


__all__ = ["build_record", "fill_receptor", "is_record", "to_plain"]

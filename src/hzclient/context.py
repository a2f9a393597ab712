# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-request cancellation and timeout context.

A RequestContext is the sole cancellation channel of a request: the client
hands it to the transport unchanged, and the transport is responsible for
aborting in-flight I/O when it is cancelled. A ContextVar-backed ambient
context supplies the default for requests that never call ``set_context``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from .errors import ContextCancelledError


@dataclass(frozen=True)
class RequestContext:
    timeout: float | None = None
    cancel_event: threading.Event | None = None
    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def background(cls) -> RequestContext:
        """Return an empty context that is never cancelled."""
        return cls()

    @classmethod
    def with_cancel(cls, *, timeout: float | None = None) -> RequestContext:
        """Return a cancellable context; call ``cancel()`` to abort the request."""
        return cls(timeout=timeout, cancel_event=threading.Event())

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def cancel(self) -> None:
        if self.cancel_event is None:
            raise ValueError("context is not cancellable; build it with RequestContext.with_cancel()")
        self.cancel_event.set()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise ContextCancelledError("context cancelled")

    def with_timeout(self, timeout: float | None) -> RequestContext:
        return replace(self, timeout=timeout)

    def with_value(self, key: str, value: Any) -> RequestContext:
        values = dict(self.values)
        values[key] = value
        return replace(self, values=MappingProxyType(values))

    def value(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


_current_request_context: ContextVar[RequestContext | None] = ContextVar("hzclient_request_context", default=None)


def get_request_context() -> RequestContext:
    """Return the current ambient request context."""
    return _current_request_context.get() or RequestContext.background()


@contextmanager
def request_context(**overrides: Any) -> Iterator[RequestContext]:
    """
    Context manager that layers overrides onto the ambient RequestContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_request_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_request_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_request_context.reset(token)


__all__ = [
    "RequestContext",
    "get_request_context",
    "request_context",
]

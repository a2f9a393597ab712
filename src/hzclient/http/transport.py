# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport protocols.

The client depends on a single capability, the ``Doer``. A transport may
additionally be a ``MiddlewareHost``; the client checks this at runtime when
middleware is requested.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ..context import RequestContext
from .models import RawRequest, RawResponse

Endpoint = Callable[[RequestContext, RawRequest, RawResponse], None]
Middleware = Callable[[Endpoint], Endpoint]


@runtime_checkable
class Doer(Protocol):
    """Performs one HTTP round trip, filling ``raw_response`` or raising on I/O failure."""

    def do(self, context: RequestContext, raw_request: RawRequest, raw_response: RawResponse) -> None: ...


@runtime_checkable
class MiddlewareHost(Protocol):
    """Transport that can wrap its round trip in middleware."""

    def use(self, *middlewares: Middleware) -> None: ...


def chain_middlewares(endpoint: Endpoint, middlewares: list[Middleware]) -> Endpoint:
    """Wrap ``endpoint`` so the first middleware runs outermost."""
    for middleware in reversed(middlewares):
        endpoint = middleware(endpoint)
    return endpoint


__all__ = ["Doer", "Endpoint", "Middleware", "MiddlewareHost", "chain_middlewares"]

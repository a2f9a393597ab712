# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Composable client options."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..config import ClientSettings
from ..http.headers import Headers
from ..http.models import RawResponse
from ..http.transport import Doer, Middleware

if TYPE_CHECKING:
    from .client import Client
    from .request import Request

ResponseResultDecider = Callable[[int, RawResponse], bool]
BindRequestBody = Callable[["Client", "Request"], tuple[str, bytes]]


@dataclass
class ClientOptions:
    """Client configuration; assembled once by :func:`get_options`."""

    host_url: str = ""
    doer: Doer | None = None
    header: Headers | None = None
    request_body_bind: BindRequestBody | None = None
    response_result_decider: ResponseResultDecider | None = None
    middlewares: list[Middleware] = field(default_factory=list)
    transport_options: dict[str, Any] = field(default_factory=dict)
    settings: ClientSettings | None = None


@dataclass(frozen=True)
class Option:
    f: Callable[[ClientOptions], None]


def get_options(*ops: Option) -> ClientOptions:
    opts = ClientOptions()
    for op in ops:
        op.f(opts)
    return opts


def with_host_url(host_url: str) -> Option:
    def apply(opts: ClientOptions) -> None:
        opts.host_url = host_url

    return Option(apply)


def with_transport(doer: Doer) -> Option:
    """Use ``doer`` instead of building the default httpx transport."""

    def apply(opts: ClientOptions) -> None:
        opts.doer = doer

    return Option(apply)


def with_header(header: Any) -> Option:
    """Headers sent with every request, underneath the per-request headers."""

    def apply(opts: ClientOptions) -> None:
        opts.header = header if isinstance(header, Headers) else Headers(header)

    return Option(apply)


def with_transport_options(**options: Any) -> Option:
    """Keyword arguments forwarded to ``httpx.Client`` when the default transport is built."""

    def apply(opts: ClientOptions) -> None:
        opts.transport_options.update(options)

    return Option(apply)


def with_middleware(*middlewares: Middleware) -> Option:
    """Middleware installed on the transport; the transport must be a MiddlewareHost."""

    def apply(opts: ClientOptions) -> None:
        opts.middlewares.extend(middlewares)

    return Option(apply)


def with_response_result_decider(decider: ResponseResultDecider) -> Option:
    def apply(opts: ClientOptions) -> None:
        opts.response_result_decider = decider

    return Option(apply)


def with_request_body_bind(binder: BindRequestBody) -> Option:
    def apply(opts: ClientOptions) -> None:
        opts.request_body_bind = binder

    return Option(apply)


def with_settings(settings: ClientSettings) -> Option:
    """Settings for the default transport; loaded from the environment when omitted."""

    def apply(opts: ClientOptions) -> None:
        opts.settings = settings

    return Option(apply)


__all__ = [
    "BindRequestBody",
    "ClientOptions",
    "Option",
    "ResponseResultDecider",
    "get_options",
    "with_header",
    "with_host_url",
    "with_middleware",
    "with_request_body_bind",
    "with_response_result_decider",
    "with_settings",
    "with_transport",
    "with_transport_options",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
hzclient package entrypoint.

This package provides the runtime beneath generated, typed HTTP clients: a
fluent request builder, a pre-request / post-response hook pipeline, JSON and
XML content negotiation, and a pluggable transport (httpx by default).
"""

from .client import (
    Client,
    ClientOptions,
    Option,
    Request,
    Response,
    dereference_value,
    get_options,
    new_client,
    with_header,
    with_host_url,
    with_middleware,
    with_request_body_bind,
    with_response_result_decider,
    with_settings,
    with_transport,
    with_transport_options,
)
from .config import ClientSettings, load_client_settings
from .context import RequestContext, get_request_context, request_context
from .errors import (
    ConfigError,
    ContextCancelledError,
    DecodingError,
    EncodingError,
    GunzipError,
    HttpStatusError,
    HzClientError,
    TransportError,
    URLError,
)
from .http import Doer, Headers, HttpxTransport, MiddlewareHost, RawRequest, RawResponse, StubTransport
from .log import setup_logging
from .version import __version__

__all__ = [
    "Client",
    "ClientOptions",
    "ClientSettings",
    "ConfigError",
    "ContextCancelledError",
    "DecodingError",
    "Doer",
    "EncodingError",
    "GunzipError",
    "Headers",
    "HttpStatusError",
    "HttpxTransport",
    "HzClientError",
    "MiddlewareHost",
    "Option",
    "RawRequest",
    "RawResponse",
    "Request",
    "RequestContext",
    "Response",
    "StubTransport",
    "TransportError",
    "URLError",
    "dereference_value",
    "get_options",
    "get_request_context",
    "load_client_settings",
    "new_client",
    "request_context",
    "setup_logging",
    "with_header",
    "with_host_url",
    "with_middleware",
    "with_request_body_bind",
    "with_response_result_decider",
    "with_settings",
    "with_transport",
    "with_transport_options",
    "__version__",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client runtime: configuration, hook pipeline and transport invocation."""

from __future__ import annotations

import gzip
import logging
import zlib
from collections.abc import Callable
from urllib.parse import urlsplit

from ..config import load_client_settings
from ..errors import ConfigError, ErrorCategory, GunzipError, HzClientError, TransportError, categorize_exception
from ..http.headers import Headers
from ..http.models import RawResponse
from ..http.transport import Doer, Middleware, MiddlewareHost
from .hooks import (
    HDR_CONTENT_ENCODING_KEY,
    create_http_request,
    default_request_body_bind,
    default_response_result_decider,
    parse_request_header,
    parse_request_url,
    parse_response_body,
)
from .options import ClientOptions, Option, get_options, with_host_url
from .request import Request
from .response import Response

logger = logging.getLogger(__name__)

BeforeRequestFunc = Callable[["Client", Request], None]
AfterResponseFunc = Callable[["Client", Response], None]


class Client:
    """
    Generic HTTP client beneath the typed per-method facades.

    Fields are read-only after construction, so one client may build and
    execute requests from many threads; the transport does its own locking.
    """

    def __init__(self, options: ClientOptions | None = None):
        opts = options or ClientOptions()
        if opts.host_url:
            parts = urlsplit(opts.host_url)
            if not parts.scheme or not parts.netloc:
                raise ConfigError(f"base URL must be absolute, got {opts.host_url!r}")

        doer = opts.doer
        self._owns_doer = doer is None
        if doer is None:
            from ..http.httpx_transport import HttpxTransport

            doer = HttpxTransport(opts.settings or load_client_settings(), **opts.transport_options)

        self.host_url = opts.host_url
        self.doer: Doer = doer
        self.header = opts.header.copy() if opts.header is not None else Headers()
        self.bind_request_body = opts.request_body_bind or default_request_body_bind
        self.response_result_decider = opts.response_result_decider or default_response_result_decider

        self.before_request: list[BeforeRequestFunc] = [
            parse_request_url,
            parse_request_header,
            create_http_request,
        ]
        self.after_response: list[AfterResponseFunc] = [
            parse_response_body,
        ]

        if opts.middlewares:
            self.use(*opts.middlewares)

    def use(self, *middlewares: Middleware) -> None:
        """Install middleware on the transport."""
        if not isinstance(self.doer, MiddlewareHost):
            raise ConfigError("transport does not support middleware, choose the right transport.")
        self.doer.use(*middlewares)

    def r(self) -> Request:
        return Request(self)

    new_request = r

    def execute(self, request: Request) -> Response:
        for hook in self.before_request:
            hook(self, request)

        raw_response = RawResponse()
        response = Response(request, raw_response)
        logger.debug("%s %s", request.method, request.url)

        try:
            self.doer.do(request.context(), request.raw_request, raw_response)
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.debug("transport failed for %s %s: %s (%s)", request.method, request.url, exc, category.value)
            raise TransportError(str(exc) or type(exc).__name__, response=response, category=category) from exc

        # The transport stopped reading at its byte cap.
        if raw_response.meta.get("body_truncated"):
            limit = raw_response.meta.get("body_bytes_limit")
            raise TransportError(
                f"response body from {request.url} exceeded the {limit} byte limit",
                response=response,
                category=ErrorCategory.BODY_TOO_LARGE,
            )

        body = raw_response.content
        encoding = raw_response.headers.get(HDR_CONTENT_ENCODING_KEY).strip().lower()
        if encoding == "gzip" and raw_response.content_length() != 0:
            try:
                body = gzip.decompress(body)
            except (OSError, EOFError, zlib.error) as exc:
                raise GunzipError(f"failed to gunzip response body: {exc}", response=response) from exc

        response.body_bytes = body
        response.size = len(body)
        logger.debug("HTTP %s from %s (%d bytes)", response.status_code(), request.url, response.size)

        for hook in self.after_response:
            try:
                hook(self, response)
            except HzClientError as exc:
                if exc.response is None:
                    exc.response = response
                raise

        return response

    def close(self) -> None:
        """Close the transport if this client built it."""
        close = getattr(self.doer, "close", None)
        if self._owns_doer and callable(close):
            close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def new_client(host_url: str, *ops: Option) -> Client:
    """Build a client for ``host_url``; options are applied in order."""
    return Client(get_options(*ops, with_host_url(host_url)))


__all__ = ["AfterResponseFunc", "BeforeRequestFunc", "Client", "new_client"]

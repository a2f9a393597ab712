# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed default transport."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import ClientSettings, load_client_settings
from ..context import RequestContext
from .headers import Headers
from .models import RawRequest, RawResponse
from .transport import Doer, Middleware, MiddlewareHost, chain_middlewares

logger = logging.getLogger(__name__)


class HttpxTransport(Doer, MiddlewareHost):
    """Synchronous httpx transport with middleware support.

    The body is read off the wire without content decoding; gzip handling is
    the client's job.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        client: httpx.Client | None = None,
        **client_options: Any,
    ):
        self.settings = settings or load_client_settings()
        self._middlewares: list[Middleware] = []
        if client is None:
            kwargs: dict[str, Any] = {
                "follow_redirects": self.settings.follow_redirects,
                "timeout": self.settings.timeout,
                "verify": self.settings.verify_ssl,
            }
            if not self.settings.keep_alive:
                kwargs["limits"] = httpx.Limits(max_keepalive_connections=0)
            kwargs.update(client_options)
            client = httpx.Client(**kwargs)
        self._client = client

    def use(self, *middlewares: Middleware) -> None:
        self._middlewares.extend(middlewares)

    def do(self, context: RequestContext, raw_request: RawRequest, raw_response: RawResponse) -> None:
        endpoint = chain_middlewares(self._round_trip, self._middlewares)
        endpoint(context, raw_request, raw_response)

    def _round_trip(self, context: RequestContext, raw_request: RawRequest, raw_response: RawResponse) -> None:
        context.raise_if_cancelled()

        headers = raw_request.headers.copy()
        if "User-Agent" not in headers:
            headers.set("User-Agent", self.settings.user_agent)
        if raw_request.host:
            headers.set("Host", raw_request.host)

        timeout = raw_request.options.timeout
        if timeout is None:
            timeout = context.timeout if context.timeout is not None else self.settings.timeout
        follow_redirects = raw_request.options.follow_redirects
        if follow_redirects is None:
            follow_redirects = self.settings.follow_redirects

        request = self._client.build_request(
            raw_request.method,
            raw_request.url,
            headers=list(headers.items()),
            content=raw_request.body or None,
            timeout=timeout,
        )
        logger.debug("%s %s", raw_request.method, raw_request.url)

        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        resp = self._client.send(request, stream=True, follow_redirects=follow_redirects)
        try:
            raw_response.status_code = resp.status_code
            raw_response.headers = Headers(resp.headers)
            raw_response.url = str(resp.url)

            content = bytearray()
            truncated = False
            for chunk in resp.iter_raw():
                context.raise_if_cancelled()
                if not chunk:
                    continue
                remaining = max_body_bytes - len(content)
                if len(chunk) > remaining:
                    content.extend(chunk[:remaining])
                    truncated = True
                    break
                content.extend(chunk)
            raw_response.content = bytes(content)
            raw_response.meta.update(
                {
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                    "body_bytes_limit": max_body_bytes,
                }
            )
        finally:
            resp.close()

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpxTransport"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process transports for tests and offline callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..context import RequestContext
from .headers import Headers
from .models import RawRequest, RawResponse
from .transport import Doer


@dataclass
class StubReply:
    status_code: int = 200
    headers: dict[str, Any] = field(default_factory=dict)
    content: bytes = b""


class StubTransport(Doer):
    """Deterministic, programmable doer keyed by request URL (query string ignored)."""

    def __init__(self, replies: dict[str, StubReply] | None = None, default: StubReply | None = None):
        self._replies = dict(replies or {})
        self._default = default
        self.requests: list[RawRequest] = []

    def add(
        self,
        url: str,
        status_code: int = 200,
        *,
        headers: dict[str, Any] | None = None,
        content: bytes = b"",
    ) -> None:
        self._replies[url] = StubReply(status_code=status_code, headers=dict(headers or {}), content=content)

    def do(self, context: RequestContext, raw_request: RawRequest, raw_response: RawResponse) -> None:
        context.raise_if_cancelled()
        self.requests.append(raw_request)
        reply = self._replies.get(raw_request.url) or self._replies.get(raw_request.url.split("?", 1)[0]) or self._default
        if reply is None:
            raise ConnectionError(f"No stubbed response configured for {raw_request.url}")
        raw_response.status_code = reply.status_code
        raw_response.headers = Headers(reply.headers)
        raw_response.content = reply.content
        raw_response.url = raw_request.url


__all__ = ["StubReply", "StubTransport"]

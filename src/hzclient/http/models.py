# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Raw request/response data models exchanged with transports."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .headers import Headers


@dataclass
class RequestOptions:
    """Per-request transport options; ``None`` means "use the transport default"."""

    timeout: float | None = None
    follow_redirects: bool | None = None
    tags: dict[str, str] = field(default_factory=dict)


RequestOption = Callable[["RawRequest"], None]


def with_request_timeout(timeout: float) -> RequestOption:
    """Override the transport timeout for a single request."""

    def apply(raw_request: RawRequest) -> None:
        raw_request.options.timeout = timeout

    return apply


def with_follow_redirects(follow: bool) -> RequestOption:
    def apply(raw_request: RawRequest) -> None:
        raw_request.options.follow_redirects = follow

    return apply


def with_tag(key: str, value: str) -> RequestOption:
    """Attach an opaque tag that middleware can read from ``raw_request.options.tags``."""

    def apply(raw_request: RawRequest) -> None:
        raw_request.options.tags[key] = value

    return apply


@dataclass
class RawRequest:
    """Fully resolved request handed to a transport."""

    method: str
    url: str
    body: bytes = b""
    headers: Headers = field(default_factory=Headers)
    host: str | None = None
    options: RequestOptions = field(default_factory=RequestOptions)

    def set_options(self, *options: RequestOption) -> None:
        for option in options:
            option(self)


@dataclass
class RawResponse:
    """Response container filled in place by a transport.

    ``content`` holds the wire body; content decoding is left to the client.
    """

    status_code: int = 0
    headers: Headers = field(default_factory=Headers)
    content: bytes = b""
    url: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def content_length(self) -> int:
        """Return the declared Content-Length, or -1 when absent or malformed."""
        value = self.headers.get("Content-Length").strip()
        if not value:
            return -1
        try:
            return int(value)
        except ValueError:
            return -1


__all__ = [
    "RawRequest",
    "RawResponse",
    "RequestOption",
    "RequestOptions",
    "with_follow_redirects",
    "with_request_timeout",
    "with_tag",
]

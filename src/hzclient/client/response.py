# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response wrapper with cached, content-decoded body bytes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..http.headers import Headers
from ..http.models import RawResponse

if TYPE_CHECKING:
    from .request import Request


class Response:
    def __init__(self, request: Request, raw_response: RawResponse | None):
        self.request = request
        self.raw_response = raw_response
        self.body_bytes = b""
        self.size = 0
        self.is_error = False
        self.result_value: Any = None
        self.error_value: Any = None

    def status_code(self) -> int:
        """Return the HTTP status code, e.g. 200; 0 when nothing was received."""
        if self.raw_response is None:
            return 0
        return self.raw_response.status_code

    def body(self) -> bytes:
        """Return the response body after gzip decoding."""
        if self.raw_response is None:
            return b""
        return self.body_bytes

    def text(self, encoding: str = "utf-8") -> str:
        return self.body().decode(encoding, errors="replace")

    def header(self) -> Headers:
        """Return a copy of the response headers."""
        if self.raw_response is None:
            return Headers()
        return self.raw_response.headers.copy()

    def result(self) -> Any:
        """Return the deserialized success payload, or None when nothing was decoded."""
        return self.result_value

    def error(self) -> Any:
        """Return the deserialized error payload, or None when nothing was decoded."""
        return self.error_value

    def __repr__(self) -> str:
        return f"Response(status_code={self.status_code()}, size={self.size})"


__all__ = ["Response"]

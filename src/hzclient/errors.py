# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from .client.response import Response


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class HzClientError(Exception):
    """Base class for every error raised by the client runtime.

    Errors raised after the transport call carry the wrapped ``Response`` so
    callers can still inspect status, headers and body.
    """

    def __init__(self, message: str = "", *, response: Response | None = None):
        super().__init__(message)
        self.response = response


class ConfigError(HzClientError):
    """Invalid client configuration, reported at construction."""


class URLError(HzClientError):
    """The request URL could not be resolved."""


class EncodingError(HzClientError):
    """The request body could not be serialized."""


class DecodingError(HzClientError):
    """The response body could not be deserialized."""


class GunzipError(HzClientError):
    """A gzip-encoded response body could not be decoded."""


class ContextCancelledError(HzClientError):
    """The request context was cancelled before the round trip finished."""


class TransportError(HzClientError):
    """The transport failed to perform the round trip."""

    def __init__(
        self,
        message: str = "",
        *,
        response: Response | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        super().__init__(message, response=response)
        self.category = category


class HttpStatusError(HzClientError):
    """The result decider flagged the response status and no error receptor was set.

    ``str(err)`` is the JSON document ``{"status_code": <int>, "body": <text>}``.
    """

    def __init__(self, message: str, *, status_code: int, body: str, response: Response | None = None):
        super().__init__(message, response=response)
        self.status_code = status_code
        self.body = body


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, ContextCancelledError):
        return ErrorCategory.CANCELLED

    if isinstance(exc, (httpx.TimeoutException, TimeoutError, socket.timeout)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping: dict[Any, str] = {
        ErrorCategory.TIMEOUT: "Network timeout during request",
        ErrorCategory.CANCELLED: "Request cancelled by its context",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.BODY_TOO_LARGE: "Response body exceeded the size limit",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "ConfigError",
    "ContextCancelledError",
    "DecodingError",
    "EncodingError",
    "ErrorCategory",
    "GunzipError",
    "HttpStatusError",
    "HzClientError",
    "TransportError",
    "URLError",
    "categorize_exception",
    "error_category_to_reason",
]

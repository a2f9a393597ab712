# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fluent per-request builder."""

from __future__ import annotations

import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..context import RequestContext, get_request_context
from ..http.headers import Headers
from ..http.models import RawRequest, RequestOption
from ..http.query import QueryParams

if TYPE_CHECKING:
    from .client import Client
    from .response import Response


def dereference_value(value: Any) -> Any:
    """
    Unwrap a reference to its referent.

    Weak references are resolved; a dead reference becomes ``None``. Any
    other value is returned unchanged, so dereferencing is idempotent.
    ``None`` marks an absent value that setters leave out of the request.
    """
    while isinstance(value, weakref.ReferenceType):
        value = value()
    return value


def format_value(value: Any) -> str:
    """Format a header or query value the way it should appear on the wire."""
    value = dereference_value(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class Request:
    """A single call under construction.

    Setters mutate and return the request. A request is owned by one caller
    and is not reused after :meth:`execute`.
    """

    def __init__(self, client: Client):
        self.client = client
        self.url = ""
        self.method = ""
        self.query_param = QueryParams()
        self.header = Headers()
        self.path_params: dict[str, str] = {}
        self.request_options: list[RequestOption] = []
        self.body_param: Any = None
        self.result: Any = None
        self.error: Any = None
        self.raw_request: RawRequest | None = None
        self.ctx: RequestContext | None = None

    def set_context(self, ctx: RequestContext) -> Request:
        self.ctx = ctx
        return self

    def context(self) -> RequestContext:
        """Return the request context, falling back to the ambient one."""
        return self.ctx if self.ctx is not None else get_request_context()

    def set_header(self, header: str, value: Any) -> Request:
        value = dereference_value(value)
        if value is not None:
            self.header.set(header, format_value(value))
        return self

    def set_headers(self, headers: Mapping[str, Any]) -> Request:
        for header, value in headers.items():
            self.set_header(header, value)
        return self

    def set_query_param(self, param: str, value: Any) -> Request:
        """Set ``param``; list and tuple values add one entry per element."""
        value = dereference_value(value)
        if value is None:
            return self
        if _is_sequence(value):
            for item in value:
                item = dereference_value(item)
                if item is not None:
                    self.query_param.add(param, format_value(item))
        else:
            self.query_param.set(param, format_value(value))
        return self

    def set_query_params(self, params: Mapping[str, Any]) -> Request:
        for param, value in params.items():
            self.set_query_param(param, value)
        return self

    def set_path_param(self, param: str, value: Any) -> Request:
        value = dereference_value(value)
        if value is not None:
            self.path_params[param] = format_value(value)
        return self

    def set_path_params(self, params: Mapping[str, Any]) -> Request:
        for param, value in params.items():
            self.set_path_param(param, value)
        return self

    def set_body_param(self, body: Any) -> Request:
        self.body_param = dereference_value(body)
        return self

    def set_result(self, result: Any) -> Request:
        """Receptor for a successful response body (a class, dataclass instance, dict or list)."""
        self.result = result
        return self

    def set_error(self, error: Any) -> Request:
        """Receptor for a response body the result decider flags as an error."""
        self.error = error
        return self

    def set_request_option(self, *options: RequestOption) -> Request:
        self.request_options.extend(options)
        return self

    def execute(self, method: str, url: str) -> Response:
        self.method = method.upper()
        self.url = url
        return self.client.execute(self)

    def __repr__(self) -> str:
        return f"Request(method={self.method!r}, url={self.url!r})"


__all__ = ["Request", "dereference_value", "format_value"]

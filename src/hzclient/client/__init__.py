# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Generic client runtime exports."""

from .client import AfterResponseFunc, BeforeRequestFunc, Client, new_client
from .hooks import (
    create_http_request,
    default_request_body_bind,
    default_response_result_decider,
    is_payload_supported,
    parse_request_header,
    parse_request_url,
    parse_response_body,
)
from .options import (
    BindRequestBody,
    ClientOptions,
    Option,
    ResponseResultDecider,
    get_options,
    with_header,
    with_host_url,
    with_middleware,
    with_request_body_bind,
    with_response_result_decider,
    with_settings,
    with_transport,
    with_transport_options,
)
from .request import Request, dereference_value, format_value
from .response import Response

__all__ = [
    "AfterResponseFunc",
    "BeforeRequestFunc",
    "BindRequestBody",
    "Client",
    "ClientOptions",
    "Option",
    "Request",
    "Response",
    "ResponseResultDecider",
    "create_http_request",
    "default_request_body_bind",
    "default_response_result_decider",
    "dereference_value",
    "format_value",
    "get_options",
    "is_payload_supported",
    "new_client",
    "parse_request_header",
    "parse_request_url",
    "parse_response_body",
    "with_header",
    "with_host_url",
    "with_middleware",
    "with_request_body_bind",
    "with_response_result_decider",
    "with_settings",
    "with_transport",
    "with_transport_options",
]

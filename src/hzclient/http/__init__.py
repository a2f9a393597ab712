# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport and codec exports."""

from .adapters import StubReply, StubTransport
from .codec import (
    JSON_CONTENT_TYPE,
    PLAIN_TEXT_TYPE,
    Shape,
    detect_content_type,
    encode_body,
    is_json_type,
    is_xml_type,
    shape_of,
    unmarshal_content,
)
from .headers import Headers, canonical_header_key
from .httpx_transport import HttpxTransport
from .models import (
    RawRequest,
    RawResponse,
    RequestOption,
    RequestOptions,
    with_follow_redirects,
    with_request_timeout,
    with_tag,
)
from .query import QueryParams
from .sniff import sniff_content_type
from .transport import Doer, Endpoint, Middleware, MiddlewareHost

__all__ = [
    "JSON_CONTENT_TYPE",
    "PLAIN_TEXT_TYPE",
    "Doer",
    "Endpoint",
    "Headers",
    "HttpxTransport",
    "Middleware",
    "MiddlewareHost",
    "QueryParams",
    "RawRequest",
    "RawResponse",
    "RequestOption",
    "RequestOptions",
    "Shape",
    "StubReply",
    "StubTransport",
    "canonical_header_key",
    "detect_content_type",
    "encode_body",
    "is_json_type",
    "is_xml_type",
    "shape_of",
    "sniff_content_type",
    "unmarshal_content",
    "with_follow_redirects",
    "with_request_timeout",
    "with_tag",
]

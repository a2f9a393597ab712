# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pre-request and post-response hooks run by :class:`~hzclient.client.client.Client`.

Pre-request hooks take ``(client, request)``, post-response hooks take
``(client, response)``. Both signal failure by raising.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from ..errors import DecodingError, EncodingError, HttpStatusError, URLError
from ..http.codec import detect_content_type, encode_body, is_json_type, is_xml_type, unmarshal_content
from ..http.headers import Headers
from ..http.models import RawRequest, RawResponse

if TYPE_CHECKING:
    from .client import Client
    from .request import Request
    from .response import Response

logger = logging.getLogger(__name__)

HDR_CONTENT_TYPE_KEY = "Content-Type"
HDR_CONTENT_ENCODING_KEY = "Content-Encoding"

# Characters left unescaped inside a single path segment.
_PATH_SEGMENT_SAFE = "$&+:=@"
_NO_PAYLOAD_METHODS = frozenset({"HEAD", "OPTIONS", "GET", "DELETE"})


def is_payload_supported(method: str) -> bool:
    return method.upper() not in _NO_PAYLOAD_METHODS


def _split_url(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError as exc:
        raise URLError(f"invalid request URL {url!r}: {exc}") from exc
    return parts


def parse_request_url(client: Client, request: Request) -> None:
    url = request.url
    # Longest names first so ":id" never clobbers the prefix of ":idx".
    for name in sorted(request.path_params, key=len, reverse=True):
        url = url.replace(":" + name, quote(request.path_params[name], safe=_PATH_SEGMENT_SAFE))

    parts = _split_url(url)
    if not parts.scheme:
        path = urlunsplit(parts)
        if path and not path.startswith("/"):
            path = "/" + path
        if not client.host_url:
            raise URLError(f"relative request URL {path!r} and no base URL configured")
        parts = _split_url(client.host_url.rstrip("/") + path)

    query = request.query_param.encode()
    if query:
        if parts.query.strip():
            query = parts.query + "&" + query
        parts = parts._replace(query=query)

    request.url = urlunsplit(parts)


def parse_request_header(client: Client, request: Request) -> None:
    header = client.header.copy()
    for key in request.header:
        header.delete(key)
        header.set_all(key, request.header.get_all(key))
    request.header = header


def default_request_body_bind(client: Client, request: Request) -> tuple[str, bytes]:
    """Serialize the request body; see :mod:`hzclient.http.codec` for the encoding policy."""
    if not is_payload_supported(request.method):
        return "", b""
    content_type = request.header.get(HDR_CONTENT_TYPE_KEY)
    if not content_type.strip():
        content_type = detect_content_type(request.body_param)
        request.header.set(HDR_CONTENT_TYPE_KEY, content_type)
    try:
        body = encode_body(content_type, request.body_param)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"failed to encode request body as {content_type}: {exc}") from exc
    return content_type, body


def create_http_request(client: Client, request: Request) -> None:
    content_type, body = client.bind_request_body(client, request)
    if content_type.strip():
        request.header.set(HDR_CONTENT_TYPE_KEY, content_type)

    raw_request = RawRequest(method=request.method, url=request.url, body=body, headers=Headers())
    for key, value in request.header.items():
        raw_request.headers.add(key, value)
    raw_request.set_options(*request.request_options)

    host = request.header.get("Host")
    if host:
        raw_request.host = host
    request.raw_request = raw_request


def default_response_result_decider(status_code: int, raw_response: RawResponse | None) -> bool:
    """Return True when the status code is 400 or above."""
    return status_code > 399


def _unmarshal(content_type: str, response: Response, receptor: Any) -> Any:
    try:
        return unmarshal_content(content_type, response.body(), receptor)
    except (TypeError, ValueError, ET.ParseError) as exc:
        raise DecodingError(f"failed to decode {content_type} response body: {exc}", response=response) from exc


def parse_response_body(client: Client, response: Response) -> None:
    status_code = response.status_code()
    if status_code == 204:
        return

    # Only JSON and XML bodies are decoded; anything else stays on the raw response.
    content_type = response.header().get(HDR_CONTENT_TYPE_KEY)
    decodable = is_json_type(content_type) or is_xml_type(content_type)
    request = response.request

    response.is_error = client.response_result_decider(status_code, response.raw_response)
    if response.is_error:
        if request.error is not None:
            if decodable:
                response.error_value = _unmarshal(content_type, response, request.error)
            return
        body = response.body().decode("utf-8", errors="replace")
        message = json.dumps({"status_code": status_code, "body": body}, separators=(",", ":"), ensure_ascii=False)
        logger.debug("HTTP %s flagged as error for %s", status_code, request.url)
        raise HttpStatusError(message, status_code=status_code, body=body, response=response)

    if request.result is not None and decodable:
        response.result_value = _unmarshal(content_type, response, request.result)


__all__ = [
    "create_http_request",
    "default_request_body_bind",
    "default_response_result_decider",
    "is_payload_supported",
    "parse_request_header",
    "parse_request_url",
    "parse_response_body",
]

import json
import weakref
from dataclasses import dataclass

import pytest

from hzclient.client import (
    Response,
    create_http_request,
    default_request_body_bind,
    default_response_result_decider,
    dereference_value,
    new_client,
    parse_request_header,
    parse_request_url,
    parse_response_body,
    with_header,
    with_transport,
)
from hzclient.context import RequestContext, request_context
from hzclient.errors import DecodingError, EncodingError, HttpStatusError, URLError
from hzclient.http.adapters import StubTransport
from hzclient.http.headers import Headers
from hzclient.http.models import RawResponse, with_request_timeout, with_tag


@dataclass
class ApiError:
    code: int = 0
    message: str = ""


@dataclass
class Payload:
    name: str = ""


class Token:
    def __str__(self):
        return "tok"


def make_client(host_url="http://api.example", *ops):
    return new_client(host_url, with_transport(StubTransport()), *ops)


def make_response(request, status_code, content_type="application/json", body=b""):
    raw = RawResponse(status_code=status_code, headers=Headers({"Content-Type": content_type}), content=body)
    response = Response(request, raw)
    response.body_bytes = body
    response.size = len(body)
    return response


def test_dereference_value_unwraps_weak_references_idempotently():
    token = Token()
    ref = weakref.ref(token)
    assert dereference_value(ref) is token
    assert dereference_value(dereference_value(ref)) is dereference_value(ref)
    for value in ("a", 1, None, [1], {"k": "v"}):
        assert dereference_value(value) == value
        assert dereference_value(dereference_value(value)) == dereference_value(value)


def test_setters_format_values_and_skip_absent_ones():
    token = Token()
    request = (
        make_client()
        .r()
        .set_header("x-flag", True)
        .set_header("x-token", weakref.ref(token))
        .set_header("x-missing", None)
        .set_query_params({"n": 3, "tags": ["a", None, "b"], "skip": None})
        .set_path_params({"id": 7, "gone": None})
    )
    assert request.header.get("X-Flag") == "true"
    assert request.header.get("X-Token") == "tok"
    assert "X-Missing" not in request.header
    assert list(request.query_param.items()) == [("n", "3"), ("tags", "a"), ("tags", "b")]
    assert request.path_params == {"id": "7"}


def test_request_context_falls_back_to_ambient():
    request = make_client().r()
    assert request.context().timeout is None
    assert request.context().cancelled is False
    with request_context(timeout=3.0):
        assert request.context().timeout == 3.0
    ctx = RequestContext(timeout=1.0)
    assert request.set_context(ctx).context() is ctx


def test_parse_request_url_substitutes_escaped_path_params():
    client = make_client()
    request = client.r().set_path_params({"id": "a/b", "bid": "42"})
    request.url = "/users/:id/books/:bid"
    parse_request_url(client, request)
    assert request.url == "http://api.example/users/a%2Fb/books/42"


def test_parse_request_url_prefers_longer_placeholder_names():
    client = make_client()
    request = client.r().set_path_params({"id": "1", "idx": "2"})
    request.url = "/items/:idx/:id"
    parse_request_url(client, request)
    assert request.url == "http://api.example/items/2/1"


@pytest.mark.parametrize(
    ("host_url", "template", "expected"),
    [
        ("http://127.0.0.1:8899", "/life/client1", "http://127.0.0.1:8899/life/client1"),
        ("http://127.0.0.1:8899", "life/client1", "http://127.0.0.1:8899/life/client1"),
        ("http://127.0.0.1:8899/", "/life/client1", "http://127.0.0.1:8899/life/client1"),
        ("http://host/api", "/v1/items", "http://host/api/v1/items"),
        ("http://host", "https://other.example/x", "https://other.example/x"),
    ],
)
def test_parse_request_url_joins_base_url(host_url, template, expected):
    client = make_client(host_url)
    request = client.r()
    request.url = template
    parse_request_url(client, request)
    assert request.url == expected


def test_parse_request_url_appends_query_in_insertion_order():
    client = make_client()
    request = client.r().set_query_param("tag", ["x", "y"]).set_query_param("q", "a b")
    request.url = "/search?lang=en"
    parse_request_url(client, request)
    assert request.url == "http://api.example/search?lang=en&tag=x&tag=y&q=a+b"


def test_parse_request_url_rejects_bad_urls():
    client = make_client()
    request = client.r()
    request.url = "http://[::1/x"
    with pytest.raises(URLError):
        parse_request_url(client, request)

    request.url = "http://host:port/x"
    with pytest.raises(URLError):
        parse_request_url(client, request)


def test_parse_request_url_requires_base_for_relative_urls():
    client = make_client("")
    request = client.r()
    request.url = "/x"
    with pytest.raises(URLError):
        parse_request_url(client, request)


def test_parse_request_header_overrides_defaults_without_mutating_them():
    client = make_client("http://api.example", with_header({"X-Default": "1", "X-Over": ["a", "b"]}))
    request = client.r().set_header("x-over", "c")
    parse_request_header(client, request)

    assert request.header.get_all("X-Over") == ["c"]
    assert request.header.get_all("X-Default") == ["1"]
    assert client.header.get_all("X-Over") == ["a", "b"]


def test_default_request_body_bind_detects_and_encodes():
    client = make_client()
    request = client.r().set_body_param({"a": 1})
    request.method = "POST"
    content_type, body = default_request_body_bind(client, request)
    assert content_type == "application/json; charset=utf-8"
    assert body == b'{"a":1}'
    assert request.header.get("Content-Type") == content_type


def test_default_request_body_bind_keeps_explicit_content_type():
    client = make_client()
    request = client.r().set_body_param(Payload(name="x")).set_header("Content-Type", "application/xml")
    request.method = "PUT"
    content_type, body = default_request_body_bind(client, request)
    assert content_type == "application/xml"
    assert body == b"<Payload><name>x</name></Payload>"


@pytest.mark.parametrize("method", ["GET", "HEAD", "OPTIONS", "DELETE"])
def test_default_request_body_bind_skips_methods_without_payload(method):
    client = make_client()
    request = client.r().set_body_param({"a": 1})
    request.method = method
    assert default_request_body_bind(client, request) == ("", b"")
    assert "Content-Type" not in request.header


def test_default_request_body_bind_wraps_encoder_failures():
    client = make_client()
    request = client.r().set_body_param({"a": object()})
    request.method = "POST"
    with pytest.raises(EncodingError):
        default_request_body_bind(client, request)


def test_create_http_request_builds_raw_request():
    client = make_client()
    request = (
        client.r()
        .set_body_param([1, 2])
        .set_header("Host", "virtual.example")
        .set_header("X-A", "1")
        .set_request_option(with_request_timeout(2.5), with_tag("route", "list"))
    )
    request.method = "POST"
    request.url = "http://api.example/items"
    create_http_request(client, request)

    raw = request.raw_request
    assert raw.method == "POST"
    assert raw.url == "http://api.example/items"
    assert raw.body == b"[1,2]"
    assert raw.headers.get("Content-Type") == "application/json; charset=utf-8"
    assert raw.headers.get("X-A") == "1"
    assert raw.host == "virtual.example"
    assert raw.options.timeout == 2.5
    assert raw.options.tags == {"route": "list"}


def test_default_response_result_decider_threshold():
    for status in range(0, 600):
        assert default_response_result_decider(status, None) is (status > 399)


def test_parse_response_body_no_content_leaves_result_untouched():
    client = make_client()
    receptor = Payload(name="keep")
    request = client.r().set_result(receptor)
    response = make_response(request, 204, body=b'{"name": "changed"}')
    parse_response_body(client, response)
    assert receptor.name == "keep"
    assert response.result() is None


def test_parse_response_body_synthesizes_error_without_receptor():
    client = make_client()
    request = client.r()
    response = make_response(request, 500, body=b'{"msg":"bad"}')
    with pytest.raises(HttpStatusError) as exc_info:
        parse_response_body(client, response)
    assert str(exc_info.value) == '{"status_code":500,"body":"{\\"msg\\":\\"bad\\"}"}'
    assert json.loads(str(exc_info.value)) == {"status_code": 500, "body": '{"msg":"bad"}'}
    assert exc_info.value.response is response


def test_parse_response_body_fills_error_receptor():
    client = make_client()
    request = client.r().set_error(ApiError).set_result(Payload)
    response = make_response(request, 404, body=b'{"code": 7, "message": "missing"}')
    parse_response_body(client, response)
    assert response.is_error is True
    assert response.error() == ApiError(code=7, message="missing")
    assert response.result() is None


def test_parse_response_body_error_receptor_ignores_non_structured_bodies():
    client = make_client()
    request = client.r().set_error(ApiError)
    response = make_response(request, 503, content_type="text/html", body=b"<h1>down</h1>")
    parse_response_body(client, response)
    assert response.is_error is True
    assert response.error() is None


def test_parse_response_body_fills_result_receptor():
    client = make_client()
    request = client.r().set_result(Payload)
    response = make_response(request, 200, content_type="application/json; charset=utf-8", body=b'{"name": "ok"}')
    parse_response_body(client, response)
    assert response.result() == Payload(name="ok")

    xml_request = client.r().set_result(Payload)
    xml_response = make_response(xml_request, 200, content_type="application/xml", body=b"<Payload><name>x</name></Payload>")
    parse_response_body(client, xml_response)
    assert xml_response.result() == Payload(name="x")


def test_parse_response_body_leaves_other_content_types_to_caller():
    client = make_client()
    request = client.r().set_result(Payload)
    response = make_response(request, 200, content_type="text/plain", body=b"hello")
    parse_response_body(client, response)
    assert response.result() is None
    assert response.body() == b"hello"


def test_parse_response_body_wraps_decode_failures():
    client = make_client()
    request = client.r().set_result(Payload)
    response = make_response(request, 200, body=b"{broken")
    with pytest.raises(DecodingError) as exc_info:
        parse_response_body(client, response)
    assert exc_info.value.response is response


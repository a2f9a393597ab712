import gzip

import httpx
import pytest

from hzclient.client import new_client, with_middleware, with_transport
from hzclient.config import ClientSettings
from hzclient.context import RequestContext
from hzclient.errors import ContextCancelledError, ErrorCategory, TransportError
from hzclient.http.headers import Headers
from hzclient.http.httpx_transport import HttpxTransport
from hzclient.http.models import RawRequest, RawResponse, with_follow_redirects, with_request_timeout, with_tag


def mock_transport(handler, settings=None):
    return HttpxTransport(settings or ClientSettings(user_agent="UA/1.0"), client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_httpx_transport_builds_client_from_settings(monkeypatch):
    created = {}

    class FakeHttpxClient:
        def __init__(self, **kwargs):
            created.update(kwargs)

        def close(self):
            created["closed"] = True

    monkeypatch.setattr(httpx, "Client", FakeHttpxClient)
    transport = HttpxTransport(ClientSettings(timeout=4.0, verify_ssl=False, keep_alive=False), trust_env=False)
    assert created["timeout"] == 4.0
    assert created["verify"] is False
    assert created["follow_redirects"] is True
    assert created["trust_env"] is False
    assert created["limits"].max_keepalive_connections == 0
    transport.close()
    assert created["closed"] is True


def test_httpx_transport_sends_request_and_fills_response():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(201, headers={"Content-Type": "application/json", "Content-Length": "2"}, stream=httpx.ByteStream(b"{}"))

    transport = mock_transport(handler)
    raw_request = RawRequest(method="POST", url="http://api.example/items", body=b'{"a":1}', headers=Headers({"X-A": ["1", "2"]}))
    raw_request.host = "virtual.example"
    raw_request.set_options(with_request_timeout(1.5))
    raw_response = RawResponse()

    transport.do(RequestContext(), raw_request, raw_response)

    sent = captured["request"]
    assert sent.method == "POST"
    assert str(sent.url) == "http://api.example/items"
    assert sent.content == b'{"a":1}'
    assert sent.headers.get_list("x-a") == ["1", "2"]
    assert sent.headers["host"] == "virtual.example"
    assert sent.headers["user-agent"] == "UA/1.0"
    assert sent.extensions["timeout"]["read"] == 1.5
    assert raw_response.status_code == 201
    assert raw_response.content == b"{}"
    assert raw_response.headers.get("Content-Type") == "application/json"
    assert raw_response.meta["body_truncated"] is False


def test_httpx_transport_keeps_wire_body_encoded():
    compressed = gzip.compress(b"hello")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip", "Content-Length": str(len(compressed))},
            stream=httpx.ByteStream(compressed),
        )

    raw_response = RawResponse()
    mock_transport(handler).do(RequestContext(), RawRequest(method="GET", url="http://api.example/z"), raw_response)
    assert raw_response.content == compressed


def test_httpx_transport_truncates_large_bodies():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=httpx.ByteStream(b"x" * 100))

    raw_response = RawResponse()
    transport = mock_transport(handler, ClientSettings(max_body_bytes=10))
    transport.do(RequestContext(), RawRequest(method="GET", url="http://api.example/big"), raw_response)
    assert raw_response.content == b"x" * 10
    assert raw_response.meta["body_truncated"] is True


def test_client_rejects_truncated_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Type": "application/json"}, stream=httpx.ByteStream(b'{"id": ' + b"1" * 64 + b"}"))

    client = new_client("http://api.example", with_transport(mock_transport(handler, ClientSettings(max_body_bytes=16))))
    with pytest.raises(TransportError) as exc_info:
        client.r().set_result(dict).execute("GET", "/big")
    err = exc_info.value
    assert err.category == ErrorCategory.BODY_TOO_LARGE
    assert "16 byte limit" in str(err)
    assert err.response.status_code() == 200
    assert err.response.result() is None


def test_httpx_transport_uses_context_timeout_and_redirect_option():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["timeout"] = request.extensions["timeout"]
        return httpx.Response(204, stream=httpx.ByteStream(b""))

    raw_request = RawRequest(method="GET", url="http://api.example/t")
    raw_request.set_options(with_follow_redirects(False))
    mock_transport(handler).do(RequestContext(timeout=0.25), raw_request, RawResponse())
    assert captured["timeout"]["connect"] == 0.25


def test_httpx_transport_checks_cancellation_before_sending():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, stream=httpx.ByteStream(b""))

    ctx = RequestContext.with_cancel()
    ctx.cancel()
    with pytest.raises(ContextCancelledError):
        mock_transport(handler).do(ctx, RawRequest(method="GET", url="http://api.example/c"), RawResponse())
    assert calls == []


def test_httpx_transport_runs_middleware_through_client():
    events = []

    def handler(request: httpx.Request) -> httpx.Response:
        events.append("send")
        return httpx.Response(200, headers={"Content-Type": "text/plain"}, stream=httpx.ByteStream(b"pong"))

    def outer(next_endpoint):
        def endpoint(ctx, raw_request, raw_response):
            events.append(("outer", raw_request.options.tags.get("trace")))
            next_endpoint(ctx, raw_request, raw_response)
            events.append(("outer-done", raw_response.status_code))

        return endpoint

    def inner(next_endpoint):
        def endpoint(ctx, raw_request, raw_response):
            events.append("inner")
            next_endpoint(ctx, raw_request, raw_response)

        return endpoint

    client = new_client("http://api.example", with_transport(mock_transport(handler)), with_middleware(outer, inner))
    response = client.r().set_request_option(with_tag("trace", "t1")).execute("GET", "/ping")

    assert response.body() == b"pong"
    assert events == [("outer", "t1"), "inner", "send", ("outer-done", 200)]


def test_httpx_transport_errors_surface_as_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = new_client("http://api.example", with_transport(mock_transport(handler)))
    with pytest.raises(TransportError) as exc_info:
        client.r().execute("GET", "/down")
    assert exc_info.value.category == ErrorCategory.CONNECTION_ERROR
    assert exc_info.value.response.status_code() == 0

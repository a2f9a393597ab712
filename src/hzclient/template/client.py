# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed client for the template service."""

from __future__ import annotations

import threading

import httpx

from ..client import Client, Option, new_client, with_transport_options
from ..context import RequestContext
from ..http.models import RawResponse, RequestOption
from .models import Req, Resp

DEFAULT_HOST_URL = "http://127.0.0.1:8899"


class TemplateClient:
    """One method per endpoint; each returns ``(resp, raw_response)`` or raises."""

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def new(cls, host_url: str, *ops: Option) -> TemplateClient:
        return cls(new_client(host_url, *ops))

    def _post(
        self,
        ctx: RequestContext,
        req: Req,
        path: str,
        path_value: str | None,
        req_opts: tuple[RequestOption, ...],
    ) -> tuple[Resp, RawResponse | None]:
        ret = (
            self.client.r()
            .set_context(ctx)
            .set_query_params({"q1": req.query_string, "q2": req.mix_string})
            .set_path_params({"p1": path_value, "p2": req.mix_string})
            .set_body_param(req)
            .set_headers({"h1": req.header_string, "h2": req.mix_string})
            .set_request_option(*req_opts)
            .set_result(Resp)
            .execute("POST", path)
        )
        return ret.result() or Resp(), ret.raw_response

    def biz_method2(self, ctx: RequestContext, req: Req, *req_opts: RequestOption) -> tuple[Resp, RawResponse | None]:
        return self._post(ctx, req, "/life/client1", req.query_string, req_opts)

    def biz_method3(self, ctx: RequestContext, req: Req, *req_opts: RequestOption) -> tuple[Resp, RawResponse | None]:
        return self._post(ctx, req, "/life/client2", req.path_string, req_opts)

    def biz_method4(self, ctx: RequestContext, req: Req, *req_opts: RequestOption) -> tuple[Resp, RawResponse | None]:
        return self._post(ctx, req, "/life/client3", req.path_string, req_opts)


_default_client: TemplateClient | None = None
_default_client_lock = threading.Lock()


def default_client() -> TemplateClient:
    """Process-wide client, built once on first use."""
    global _default_client
    if _default_client is None:
        with _default_client_lock:
            if _default_client is None:
                _default_client = TemplateClient.new(
                    DEFAULT_HOST_URL,
                    with_transport_options(limits=httpx.Limits(keepalive_expiry=30.0)),
                )
    return _default_client


def biz_method2(ctx: RequestContext, req: Req, *req_opts: RequestOption) -> tuple[Resp, RawResponse | None]:
    return default_client().biz_method2(ctx, req, *req_opts)


def biz_method3(ctx: RequestContext, req: Req, *req_opts: RequestOption) -> tuple[Resp, RawResponse | None]:
    return default_client().biz_method3(ctx, req, *req_opts)


def biz_method4(ctx: RequestContext, req: Req, *req_opts: RequestOption) -> tuple[Resp, RawResponse | None]:
    return default_client().biz_method4(ctx, req, *req_opts)

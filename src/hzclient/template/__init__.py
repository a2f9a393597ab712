# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Template service facade built on the generic client runtime."""

from .client import DEFAULT_HOST_URL, TemplateClient, biz_method2, biz_method3, biz_method4, default_client
from .models import Req, Resp

__all__ = [
    "DEFAULT_HOST_URL",
    "Req",
    "Resp",
    "TemplateClient",
    "biz_method2",
    "biz_method3",
    "biz_method4",
    "default_client",
]

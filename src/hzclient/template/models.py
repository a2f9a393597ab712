# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response models for the template service."""

from dataclasses import dataclass, field


@dataclass
class Req:
    query_string: str | None = field(default=None, metadata={"json": "QueryString,omitempty"})
    mix_string: str | None = field(default=None, metadata={"json": "MixString,omitempty"})
    header_string: str | None = field(default=None, metadata={"json": "HeaderString,omitempty"})
    path_string: str | None = field(default=None, metadata={"json": "PathString,omitempty"})


@dataclass
class Resp:
    message: str | None = field(default=None, metadata={"json": "Message,omitempty"})

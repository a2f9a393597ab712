# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for hzclient.

The package logger carries a ``NullHandler`` so importing hzclient never prints
anything. Applications opt in with :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import os

LOGGER_NAME = "hzclient"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
# httpx logs one INFO line per request; httpcore logs connection and wire events at DEBUG.
WIRE_LOGGERS = ("httpx", "httpcore")

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def _level(name: str | None, default: int = logging.WARNING) -> int:
    level = getattr(logging, (name or "").strip().upper(), None)
    return level if isinstance(level, int) else default


def setup_logging(level: str | None = None, *, wire: bool | None = None) -> None:
    """Configure stderr logging for the client runtime.

    ``level`` defaults to ``HZCLIENT_LOG_LEVEL`` (WARNING). Pass ``wire=True``
    (or set ``HZCLIENT_LOG_WIRE``) to also surface httpx/httpcore logs at the
    same level; otherwise they stay at WARNING.
    """
    effective = _level(level or os.getenv("HZCLIENT_LOG_LEVEL"))
    if wire is None:
        wire = os.getenv("HZCLIENT_LOG_WIRE", "").strip().lower() in {"1", "true", "yes", "on"}

    logging.basicConfig(level=effective, format=LOG_FORMAT)
    logging.getLogger(LOGGER_NAME).setLevel(effective)
    for name in WIRE_LOGGERS:
        logging.getLogger(name).setLevel(effective if wire else max(effective, logging.WARNING))


__all__ = ["LOGGER_NAME", "setup_logging"]

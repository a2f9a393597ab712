# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Content sniffing for raw byte bodies.

Implements the subset of the WHATWG MIME sniffing algorithm that HTTP
libraries commonly ship: markup signatures, well-known binary magic numbers,
BOM-prefixed text, and a binary/plain-text split for the rest. At most the
first 512 bytes are considered.
"""

from __future__ import annotations

SNIFF_LEN = 512

_WHITESPACE = b"\t\n\x0c\r "

_HTML_SIGNATURES = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

# (prefix, content type); checked after markup.
_EXACT_SIGNATURES = (
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", "text/plain; charset=utf-8"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x00\x00\x02\x00", "image/x-icon"),
    (b"BM", "image/bmp"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x1aE\xdf\xa3", "video/webm"),
    (b".snd", "audio/basic"),
    (b"OggS\x00", "application/ogg"),
    (b"MThd\x00\x00\x00\x06", "audio/midi"),
    (b"ID3", "audio/mpeg"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"PK\x03\x04", "application/zip"),
    (b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    (b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    (b"\x00asm", "application/wasm"),
    (b"wOFF", "font/woff"),
    (b"wOF2", "font/woff2"),
)


def _is_tag_terminator(byte: int) -> bool:
    return byte in b" >"


def _match_html(data: bytes) -> bool:
    upper = data.upper()
    for signature in _HTML_SIGNATURES:
        if not upper.startswith(signature) or len(data) <= len(signature):
            continue
        if signature == b"<!--" or _is_tag_terminator(data[len(signature)]):
            return True
    return False


def _match_riff(data: bytes) -> str | None:
    if len(data) < 12 or not data.startswith(b"RIFF"):
        return None
    kind = data[8:12]
    if kind == b"WEBP":
        return "image/webp"
    if kind == b"WAVE":
        return "audio/wave"
    if kind == b"AVI ":
        return "video/avi"
    return None


def _match_mp4(data: bytes) -> bool:
    if len(data) < 12:
        return False
    box_size = int.from_bytes(data[:4], "big")
    if box_size % 4 != 0 or len(data) < box_size or data[4:8] != b"ftyp":
        return False
    for start in range(8, box_size, 4):
        if start == 12:
            continue
        if data[start : start + 3] == b"mp4":
            return True
    return False


def _is_binary(data: bytes) -> bool:
    return any(byte <= 0x08 or byte == 0x0B or 0x0E <= byte <= 0x1A or 0x1C <= byte <= 0x1F for byte in data)


def sniff_content_type(data: bytes) -> str:
    """Return a MIME type for ``data``; falls back to ``application/octet-stream``."""
    data = bytes(data[:SNIFF_LEN])
    if not data:
        return "text/plain; charset=utf-8"

    stripped = data.lstrip(_WHITESPACE)
    if _match_html(stripped):
        return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    for signature, content_type in _EXACT_SIGNATURES:
        if data.startswith(signature):
            return content_type

    riff = _match_riff(data)
    if riff:
        return riff
    if _match_mp4(data):
        return "video/mp4"

    if not _is_binary(data):
        return "text/plain; charset=utf-8"
    return "application/octet-stream"


__all__ = ["SNIFF_LEN", "sniff_content_type"]

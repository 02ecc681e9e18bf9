# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Responses may come from
httpx, from recorded fixtures, or from stub transports, so lookups never assume a
particular key casing.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping


def normalize_headers(headers: Mapping[object, object] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    out: dict[str, str] = {}
    for key, value in (headers or {}).items():
        name = "" if key is None else str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    lower = name.lower()
    for key, value in (headers or {}).items():
        if key is not None and str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


def media_type(content_type: str) -> str:
    """Strip parameters from a Content-Type value: `application/json; charset=utf-8` -> `application/json`."""
    return content_type.split(";", 1)[0].strip().lower()


def basic_auth_header(username: str | None, password: str | None) -> str:
    """Build a `Basic` Authorization header value."""
    raw = f"{username or ''}:{password or ''}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


__all__ = ["basic_auth_header", "header_value", "media_type", "normalize_headers"]

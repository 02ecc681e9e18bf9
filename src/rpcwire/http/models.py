# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across rpcwire."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .headers import header_value, normalize_headers

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None
    limit: int | None = None


@dataclass
class HttpResponse:
    """Status, headers and raw body bytes of a single response."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        return header_value(self.headers, "content-type")

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HttpResponse:
        """Helper to normalize dictionary-like responses (e.g., recorded fixtures)."""
        raw_body = data.get("body")
        content: bytes = b""
        if isinstance(raw_body, (bytes, bytearray, memoryview)):
            content = bytes(raw_body)
        elif isinstance(raw_body, str):
            content = raw_body.encode("utf-8")

        return cls(
            status_code=int(data.get("status_code") or 200),
            headers=normalize_headers(data.get("headers")),
            content=content,
            url=data.get("url"),
            meta={k: v for k, v in data.items() if k not in {"status_code", "headers", "body", "url"}},
        )

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import basic_auth_header, header_value, media_type, normalize_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import build_origin, build_query, compose_path, join_path

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "basic_auth_header",
    "build_origin",
    "build_query",
    "compose_path",
    "create_default_http_client",
    "header_value",
    "join_path",
    "media_type",
    "normalize_headers",
]

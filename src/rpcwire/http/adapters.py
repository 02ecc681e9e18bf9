# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Callable

from ..errors import TransportError
from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests."""

    def __init__(self, responses: dict[str, HttpResponse | Responder] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, path: str, response: HttpResponse | Responder) -> None:
        """Register a canned response (or a callable producing one) for a request path."""
        self._responses[path] = response

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        target = request.path.split("?", 1)[0]
        for key in (request.path, target):
            if key in self._responses:
                response = self._responses[key]
                return response(request) if callable(response) else response
        raise TransportError(f"No stubbed response configured for {request.path}")

    async def close(self) -> None:
        self.closed = True

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import asyncio
import logging

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, TransportError, error_category_to_reason
from .client import HttpClient
from .models import HttpRequest, HttpResponse
from .url import strip_query

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Asynchronous httpx client wrapper.

    Every request opens its own AsyncClient and closes it once the body is drained,
    so no connection outlives the call that created it.
    """

    def __init__(self, settings: HttpSettings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or load_http_settings()
        self._transport = transport

    async def request(self, request: HttpRequest) -> HttpResponse:
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        max_body_bytes = request.limit if request.limit is not None else self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = self.settings.max_body_bytes

        client = httpx.AsyncClient(transport=self._transport, timeout=timeout, follow_redirects=False)
        try:
            # httpx times each phase separately; the whole exchange shares one deadline.
            resp, content, truncated = await asyncio.wait_for(
                self._exchange(client, request, max_body_bytes),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, TimeoutError) as exc:
            logger.debug("%s %s timed out after %ss", request.method, strip_query(request.path), timeout)
            raise TransportError(
                f"{error_category_to_reason(ErrorCategory.TIMEOUT)}: no complete response within {timeout}s",
                ErrorCategory.TIMEOUT,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            logger.debug("%s %s failed: %r", request.method, strip_query(request.path), exc)
            raise TransportError.from_exception(exc) from exc
        finally:
            # An injected transport belongs to the caller and is released by close().
            if self._transport is None:
                await client.aclose()

        return HttpResponse(
            status_code=resp.status_code,
            headers={key.lower(): value for key, value in resp.headers.items()},
            content=bytes(content),
            url=str(resp.url),
            meta={
                "body_truncated": truncated,
                "body_bytes_read": len(content),
                "body_bytes_limit": max_body_bytes,
            },
        )

    async def _exchange(
        self, client: httpx.AsyncClient, request: HttpRequest, max_body_bytes: int
    ) -> tuple[httpx.Response, bytearray, bool]:
        """Send the request and drain the body, stopping at `max_body_bytes`."""
        async with client.stream(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
        ) as resp:
            content = bytearray()
            truncated = False
            async for chunk in resp.aiter_bytes():
                if not chunk:
                    continue
                remaining = max_body_bytes - len(content)
                if len(chunk) > remaining:
                    content.extend(chunk[:remaining])
                    truncated = True
                    break
                content.extend(chunk)
        return resp, content, truncated

    async def close(self) -> None:
        if self._transport is not None:
            await self._transport.aclose()

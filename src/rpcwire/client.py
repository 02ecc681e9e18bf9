# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level client for HTTP and JSON-RPC calls against one configured endpoint."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from contextlib import suppress
from typing import Any

from .config import ClientConfig, resolve_config
from .http.client import HttpClient, create_default_http_client
from .http.headers import basic_auth_header
from .http.models import HttpRequest
from .http.url import build_origin, compose_path, strip_query
from .response import interpret_response
from .rpc import RpcSequence, build_envelope, unwrap_result

logger = logging.getLogger(__name__)


def encode_json(value: Any) -> bytes:
    """Compact UTF-8 JSON, as sent on the wire."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class Client:
    """
    Issue requests against a single HTTP/JSON-RPC endpoint.

    Options are resolved once into a ClientConfig. Each call builds a fresh
    HttpRequest, hands it to the transport, and runs the response through
    interpret_response. JSON-RPC ids come from a counter owned by this instance.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: HttpClient | None = None,
        **options: Any,
    ):
        self.config = config or resolve_config(**options)
        self.http_client = http_client or create_default_http_client()
        self.sequence = RpcSequence()

    def build_request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        has_body: bool = False,
    ) -> HttpRequest:
        """Compose the target, inject auth and serialize the body for one call."""
        cfg = self.config
        headers = dict(cfg.headers)
        if cfg.has_basic_auth:
            headers["Authorization"] = basic_auth_header(cfg.username, cfg.password)

        content: bytes | None = None
        if has_body:
            content = encode_json(body)
            headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(len(content))

        target = compose_path(cfg.path, path, query)
        return HttpRequest(
            url=build_origin(cfg.ssl, cfg.host, cfg.port) + target,
            method=method,
            path=target,
            headers=headers,
            body=content,
            timeout=cfg.timeout,
            limit=cfg.limit,
        )

    async def send(self, request: HttpRequest) -> Any:
        """Dispatch one request and interpret its response."""
        logger.debug("%s %s", request.method, strip_query(request.path))
        response = await self.http_client.request(request)
        logger.debug("%s %s -> %s", request.method, strip_query(request.path), response.status_code)
        return interpret_response(response)

    async def request(self, method: str, path: str, params: Any = None) -> Any:
        """
        Send a request and return the parsed JSON body.

        For GET, `params` is the query mapping. For every other method it is the JSON
        body. A configured token is appended to the query of GET calls and merged into
        object bodies otherwise.
        """
        method = method.upper()
        token = self.config.token

        if method == "GET":
            query = dict(params) if params else {}
            if token:
                query["token"] = token
            return await self.send(self.build_request(method, path, query=query))

        body = params
        query = None
        if token:
            if body is None:
                body = {"token": token}
            elif isinstance(body, Mapping):
                body = {**body, "token": token}
            else:
                query = {"token": token}
        request = self.build_request(method, path, query=query, body=body, has_body=body is not None)
        return await self.send(request)

    async def get(self, path: str, query: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, query)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request("PUT", path, body)

    async def delete(self, path: str, body: Any = None) -> Any:
        return await self.request("DELETE", path, body)

    del_ = delete

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request("PATCH", path, body)

    async def execute(self, path: str, method: str, params: Any = None) -> Any:
        """
        Invoke a remote procedure and return its `result`.

        The envelope is sent exactly as `{"method", "params", "id"}`; a configured
        token travels in the query string instead of the body.
        """
        call_id = self.sequence.next_id()
        envelope = build_envelope(method, params, call_id)
        query = {"token": self.config.token} if self.config.token else None
        request = self.build_request("POST", path, query=query, body=envelope, has_body=True)
        logger.debug("rpc %s id=%d", method, call_id)
        return unwrap_result(await self.send(request))

    async def close(self) -> None:
        with suppress(Exception):
            await self.http_client.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.close()


__all__ = ["Client", "encode_json"]

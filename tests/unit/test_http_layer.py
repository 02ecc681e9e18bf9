# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import json

import httpx
import pytest

from rpcwire.config import HttpSettings
from rpcwire.errors import ErrorCategory, TransportError
from rpcwire.http.adapters import StubHttpClient
from rpcwire.http.headers import basic_auth_header, header_value, media_type, normalize_headers
from rpcwire.http.httpx_client import HttpxClient
from rpcwire.http.models import HttpRequest, HttpResponse


def test_http_response_from_mapping_keeps_meta():
    mapping = {
        "status_code": 201,
        "headers": {"X-Test": "1"},
        "body": "hello",
        "url": "http://x",
        "extra": "value",
    }
    resp = HttpResponse.from_mapping(mapping)
    assert resp.status_code == 201
    assert resp.headers["x-test"] == "1"
    assert resp.text == "hello"
    assert resp.content == b"hello"
    assert resp.meta == {"extra": "value"}


def test_header_helpers():
    headers = {"Content-Type": "application/json; charset=utf-8"}
    assert header_value(headers, "content-type") == "application/json; charset=utf-8"
    assert header_value({"X-A": "1"}, "x-a") == "1"
    assert header_value(None, "x") == ""
    assert normalize_headers({"X-A": None, "": "skip"}) == {"x-a": ""}
    assert media_type("Application/Json ; charset=utf-8") == "application/json"
    assert basic_auth_header("foo", "bar") == "Basic Zm9vOmJhcg=="


@pytest.mark.asyncio
async def test_httpx_client_sends_request_as_given():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["target"] = request.url.raw_path
        seen["headers"] = request.headers
        seen["body"] = request.content
        return httpx.Response(200, json={"ok": True})

    client = HttpxClient(HttpSettings(), transport=httpx.MockTransport(handler))
    resp = await client.request(
        HttpRequest(
            url="http://localhost:8118/foo//?a=1",
            method="POST",
            path="/foo//?a=1",
            headers={"User-Agent": "brq", "Host": "localhost:8118", "Content-Length": "2"},
            body=b"{}",
        )
    )

    assert seen["method"] == "POST"
    assert seen["target"] == b"/foo//?a=1"
    assert seen["headers"]["user-agent"] == "brq"
    assert seen["headers"]["host"] == "localhost:8118"
    assert seen["headers"]["content-length"] == "2"
    assert seen["body"] == b"{}"
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/json"
    assert json.loads(resp.content) == {"ok": True}
    assert resp.meta["body_truncated"] is False


@pytest.mark.asyncio
async def test_httpx_client_truncates_at_limit():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"x" * 100))
    client = HttpxClient(HttpSettings(), transport=transport)
    resp = await client.request(HttpRequest(url="http://localhost/", limit=10))
    assert resp.content == b"x" * 10
    assert resp.meta["body_truncated"] is True
    assert resp.meta["body_bytes_limit"] == 10


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("exc_type", "category"),
    [
        (httpx.ReadTimeout, ErrorCategory.TIMEOUT),
        (httpx.ConnectError, ErrorCategory.CONNECTION_ERROR),
    ],
)
async def test_httpx_client_wraps_transport_failures(exc_type, category):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("boom", request=request)

    client = HttpxClient(HttpSettings(), transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError) as excinfo:
        await client.request(HttpRequest(url="http://localhost/"))
    assert excinfo.value.category == category
    assert isinstance(excinfo.value.__cause__, exc_type)


@pytest.mark.asyncio
async def test_stub_http_client_records_and_matches_paths():
    stub = StubHttpClient()
    stub.add("/", HttpResponse(status_code=200))
    stub.add("/echo", lambda request: HttpResponse(status_code=200, content=request.body or b""))

    first = await stub.request(HttpRequest(url="http://localhost/?token=1", path="/?token=1"))
    second = await stub.request(HttpRequest(url="http://localhost/echo", path="/echo", body=b"hi"))

    assert first.status_code == 200
    assert second.content == b"hi"
    assert [r.path for r in stub.requests] == ["/?token=1", "/echo"]

    with pytest.raises(TransportError):
        await stub.request(HttpRequest(url="http://localhost/missing", path="/missing"))

    await stub.close()
    assert stub.closed is True


@pytest.mark.asyncio
async def test_httpx_client_times_out_on_slow_body():
    body = b'{"result": 1, "id": 1}'
    writers = []

    async def trickle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writers.append(writer)
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                b"Content-Length: " + str(len(body)).encode() + b"\r\n\r\n"
            )
            for i in range(len(body)):
                writer.write(body[i : i + 1])
                await writer.drain()
                await asyncio.sleep(0.1)
        except (ConnectionError, asyncio.IncompleteReadError):
            pass

    server = await asyncio.start_server(trickle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    client = HttpxClient(HttpSettings())
    loop = asyncio.get_running_loop()
    started = loop.time()
    try:
        with pytest.raises(TransportError) as excinfo:
            await client.request(HttpRequest(url=f"http://127.0.0.1:{port}/", method="POST", body=b"{}", timeout=0.5))
        elapsed = loop.time() - started
    finally:
        for writer in writers:
            writer.close()
        server.close()
        await server.wait_closed()

    assert excinfo.value.category == ErrorCategory.TIMEOUT
    assert elapsed < 1.5

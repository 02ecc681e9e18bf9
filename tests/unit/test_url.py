# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from rpcwire.http.url import build_origin, build_query, compose_path, join_path, strip_query


@pytest.mark.parametrize(
    ("base", "path", "expected"),
    [
        ("", "/foo//", "/foo//"),
        ("/", "/bar/", "/bar/"),
        ("/", "/bar", "/bar"),
        ("/foo/", "/bar/", "/foo/bar/"),
        ("/api", "/v1", "/api/v1"),
        ("/api//", "v1", "/api/v1"),
        ("/a//b/", "/c//d", "/a//b/c//d"),
        ("", "", "/"),
        ("/base/", "", "/base/"),
    ],
)
def test_join_path_collapses_only_the_boundary(base, path, expected):
    assert join_path(base, path) == expected


def test_build_query_keeps_order_and_does_not_escape():
    assert build_query({"b": "2", "a": "x y", "c": 3}) == "b=2&a=x y&c=3"
    assert build_query({}) == ""
    assert build_query(None) == ""


def test_compose_path_appends_query():
    assert compose_path("/", "/", {"query": "param"}) == "/?query=param"
    assert compose_path("/api/", "/wallet", {"a": "1", "token": "t"}) == "/api/wallet?a=1&token=t"
    assert compose_path("", "/x") == "/x"


def test_build_origin_and_strip_query():
    assert build_origin(False, "localhost", 8118) == "http://localhost:8118"
    assert build_origin(True, "example.com", 443) == "https://example.com:443"
    assert build_origin(False, "::1", 80) == "http://[::1]:80"
    assert strip_query("/path?token=secret") == "/path"

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Path and query-string composition."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config import bracket_host


def join_path(base: str, path: str) -> str:
    """
    Join a base path and a request path.

    The slashes that meet at the join collapse into one when there are two or more of
    them; duplicate slashes elsewhere in either part are kept as they are.

      ("/", "/bar/")    -> "/bar/"
      ("/foo/", "/bar") -> "/foo/bar"
      ("", "/foo//")    -> "/foo//"
    """
    base = base or ""
    path = path or "/"
    head = base.rstrip("/")
    tail = path.lstrip("/")
    boundary = (len(base) - len(head)) + (len(path) - len(tail))
    if boundary >= 2:
        return f"{head}/{tail}"
    return base + path


def build_query(query: Mapping[str, Any] | None) -> str:
    """Serialize query parameters in insertion order; keys and values are not escaped."""
    if not query:
        return ""
    return "&".join(f"{key}={'' if value is None else value}" for key, value in query.items())


def compose_path(base: str, path: str, query: Mapping[str, Any] | None = None) -> str:
    """Return the full request target: joined path plus `?query` when there is one."""
    joined = join_path(base, path)
    qs = build_query(query)
    return f"{joined}?{qs}" if qs else joined


def build_origin(ssl: bool, host: str, port: int) -> str:
    scheme = "https" if ssl else "http"
    return f"{scheme}://{bracket_host(host)}:{port}"


def strip_query(target: str) -> str:
    """Drop the query string; used for log lines so tokens never reach the logs."""
    return target.split("?", 1)[0]


__all__ = ["build_origin", "build_query", "compose_path", "join_path", "strip_query"]

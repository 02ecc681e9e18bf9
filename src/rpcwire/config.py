# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for rpcwire."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from urllib.parse import unquote, urlsplit

from .version import __version__

DEFAULT_USER_AGENT = f"rpcwire/{__version__}"
DEFAULT_HOST = "localhost"
DEFAULT_PORTS = {False: 80, True: 443}


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 10.0
    max_body_bytes: int = 16 * 1024 * 1024
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("RPCWIRE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        timeout = _float_env("RPCWIRE_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            max_body_bytes=max_body_bytes,
            user_agent=os.getenv("RPCWIRE_USER_AGENT", cls.user_agent),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def bracket_host(host: str) -> str:
    """Wrap a bare IPv6 literal in brackets so it can be followed by `:port`."""
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


def merge_headers(*layers: Mapping[str, Any] | None) -> dict[str, str]:
    """
    Merge header mappings left to right.

    A later key replaces any earlier key that matches case-insensitively, taking the
    later spelling and moving to the later position.
    """
    merged: dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if key is None:
                continue
            name = str(key)
            lower = name.lower()
            for existing in [k for k in merged if k.lower() == lower]:
                del merged[existing]
            merged[name] = "" if value is None else str(value)
    return merged


@dataclass(frozen=True)
class ClientConfig:
    """Resolved, immutable client configuration."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORTS[False]
    ssl: bool = False
    path: str = ""
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    username: str | None = None
    password: str | None = None
    token: str | None = None
    timeout: float = HttpSettings.timeout
    limit: int = HttpSettings.max_body_bytes
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def timeout_ms(self) -> int:
        return int(self.timeout * 1000)

    @property
    def has_basic_auth(self) -> bool:
        return self.username is not None or self.password is not None

    @classmethod
    def from_options(
        cls,
        *,
        url: str | None = None,
        host: str | None = None,
        port: int | str | None = None,
        ssl: bool | None = None,
        path: str | None = None,
        headers: Mapping[str, Any] | None = None,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        limit: int | None = None,
        user_agent: str | None = None,
        settings: HttpSettings | None = None,
    ) -> ClientConfig:
        """
        Build a ClientConfig from loose constructor options.

        Values parsed from `url` seed the result; explicit keyword options win over them,
        and environment-backed HttpSettings fill whatever is still missing.
        """
        settings = settings or load_http_settings()
        seeded = _parse_url_options(url) if url else {}

        ssl = bool(ssl if ssl is not None else seeded.get("ssl", False))
        host = host or seeded.get("host") or DEFAULT_HOST
        if port is None:
            port = seeded.get("port") or DEFAULT_PORTS[ssl]
        port = int(port)
        path = path if path is not None else seeded.get("path", "")
        username = username if username is not None else seeded.get("username")
        password = password if password is not None else seeded.get("password")
        if username is not None and password is None:
            password = ""
        if password is not None and username is None:
            username = ""

        user_agent = user_agent or settings.user_agent
        derived = {"User-Agent": user_agent, "Host": f"{bracket_host(host)}:{port}"}

        return cls(
            host=host,
            port=port,
            ssl=ssl,
            path=path,
            headers=merge_headers(derived, headers),
            username=username,
            password=password,
            token=token or None,
            timeout=float(timeout) if timeout is not None else settings.timeout,
            limit=int(limit) if limit is not None else settings.max_body_bytes,
            user_agent=user_agent,
        )


def _parse_url_options(url: str) -> dict[str, Any]:
    parts = urlsplit(url)
    options: dict[str, Any] = {"ssl": parts.scheme.lower() in {"https", "wss"}}
    if parts.hostname:
        options["host"] = parts.hostname
    try:
        if parts.port is not None:
            options["port"] = parts.port
    except ValueError:
        pass
    if parts.path:
        options["path"] = parts.path
    if parts.username is not None:
        options["username"] = unquote(parts.username)
        options["password"] = unquote(parts.password or "")
    return options


def resolve_config(**options: Any) -> ClientConfig:
    """Shortcut for ClientConfig.from_options."""
    return ClientConfig.from_options(**options)


__all__ = [
    "DEFAULT_USER_AGENT",
    "ClientConfig",
    "HttpSettings",
    "bracket_host",
    "load_http_settings",
    "merge_headers",
    "resolve_config",
]

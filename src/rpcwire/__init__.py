# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
rpcwire package entrypoint.

A small asynchronous client for HTTP requests and JSON-RPC calls against a single
configured endpoint. Transport is abstracted behind an injectable HttpClient
protocol, and failures surface as classified ClientError subclasses.
"""

from .client import Client
from .config import ClientConfig, HttpSettings, load_http_settings, resolve_config
from .errors import (
    BadContentTypeError,
    BadStatusError,
    ClientError,
    ErrorCategory,
    ErrorKind,
    ResponseParseError,
    RpcError,
    TransportError,
    UnauthorizedError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    compose_path,
    create_default_http_client,
)
from .log import setup_logging
from .response import interpret_response
from .version import __version__

__all__ = [
    "BadContentTypeError",
    "BadStatusError",
    "Client",
    "ClientConfig",
    "ClientError",
    "ErrorCategory",
    "ErrorKind",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "ResponseParseError",
    "RpcError",
    "StubHttpClient",
    "TransportError",
    "UnauthorizedError",
    "compose_path",
    "create_default_http_client",
    "interpret_response",
    "load_http_settings",
    "resolve_config",
    "setup_logging",
    "__version__",
]

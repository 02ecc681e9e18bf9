# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import Any

import httpx


class ErrorKind(str, Enum):
    TRANSPORT = "TRANSPORT"
    BAD_CONTENT_TYPE = "BAD_CONTENT_TYPE"
    UNAUTHORIZED = "UNAUTHORIZED"
    BAD_STATUS = "BAD_STATUS"
    RPC = "RPC"


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)) or isinstance(
        exc, (ssl_module.SSLError, ssl_module.CertificateError)
    ):
        return ErrorCategory.SSL_ERROR

    if isinstance(cause, (socket.gaierror, socket.herror)) or isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


class ClientError(Exception):
    """Base client error."""

    kind: ErrorKind


class TransportError(ClientError):
    """Connection refused, timeout, or socket-level failure."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.message = message
        self.category = category

    @classmethod
    def from_exception(cls, exc: BaseException) -> TransportError:
        category = categorize_exception(exc)
        detail = str(exc) or type(exc).__name__
        return cls(f"{error_category_to_reason(category)}: {detail}", category)


class BadContentTypeError(ClientError):
    kind = ErrorKind.BAD_CONTENT_TYPE

    def __init__(self, message: str = "Bad response (wrong content-type)."):
        super().__init__(message)
        self.message = message


class ResponseParseError(BadContentTypeError):
    """Body advertised as JSON but could not be decoded."""


class UnauthorizedError(ClientError):
    kind = ErrorKind.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Unauthorized (bad API key)."):
        super().__init__(message)
        self.message = message


class BadStatusError(ClientError):
    kind = ErrorKind.BAD_STATUS

    def __init__(self, status_code: int):
        message = f"Status code: {status_code}."
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RpcError(ClientError):
    """Remote error object carrying a code, as returned in the response body."""

    kind = ErrorKind.RPC

    def __init__(self, message: str, code: Any, type: str):  # noqa: A002
        super().__init__(message)
        self.message = message
        self.code = code
        self.type = type

    @classmethod
    def from_payload(cls, error: dict[str, Any]) -> RpcError:
        message = error.get("message")
        return cls(
            "" if message is None else str(message),
            error.get("code"),
            str(error.get("type")),
        )


__all__ = [
    "BadContentTypeError",
    "BadStatusError",
    "ClientError",
    "ErrorCategory",
    "ErrorKind",
    "ResponseParseError",
    "RpcError",
    "TransportError",
    "UnauthorizedError",
    "categorize_exception",
    "error_category_to_reason",
]

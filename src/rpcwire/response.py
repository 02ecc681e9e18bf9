# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response validation and failure classification."""

from __future__ import annotations

import json
import logging
from typing import Any

from .errors import BadContentTypeError, BadStatusError, ResponseParseError, RpcError, UnauthorizedError
from .http.headers import media_type
from .http.models import HttpResponse

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
SUCCESS_STATUS = 200


def is_json_response(response: HttpResponse) -> bool:
    return media_type(response.content_type).startswith(JSON_MEDIA_TYPE)


def parse_json_body(response: HttpResponse) -> Any:
    """Decode the body as UTF-8 JSON; an empty body decodes to None."""
    if response.meta.get("body_truncated"):
        raise ResponseParseError(f"Response body exceeded limit ({response.meta.get('body_bytes_limit')} bytes).")
    raw = response.content.strip()
    if not raw:
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise ResponseParseError(f"Bad response (invalid JSON: {exc}).") from exc


def coded_error(body: Any) -> dict[str, Any] | None:
    """Return the body's `error` object when it carries a `code`, else None."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and "code" in error:
        return error
    return None


def interpret_response(response: HttpResponse) -> Any:
    """
    Validate a response and return its parsed JSON body.

    Checks run in a fixed order: content type, JSON decoding, 401, coded `error`
    object, then status. Only status 200 counts as success. An `error` member
    without a `code` is ordinary payload and is returned unchanged.
    """
    if not is_json_response(response):
        raise BadContentTypeError()

    body = parse_json_body(response)

    if response.status_code == 401:
        raise UnauthorizedError()

    error = coded_error(body)
    if error is not None:
        logger.debug("remote error code=%r type=%r", error.get("code"), error.get("type"))
        raise RpcError.from_payload(error)

    if response.status_code != SUCCESS_STATUS:
        raise BadStatusError(response.status_code)

    return body


__all__ = ["coded_error", "interpret_response", "is_json_response", "parse_json_body"]

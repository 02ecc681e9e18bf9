# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from rpcwire.http.models import HttpResponse


def _json_response(data=None, status_code=200, raw=None):
    content = raw if raw is not None else (b"" if data is None else json.dumps(data).encode("utf-8"))
    return HttpResponse(status_code=status_code, headers={"content-type": "application/json"}, content=content)


@pytest.fixture
def json_response():
    return _json_response


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("RPCWIRE_HTTP_TIMEOUT", "RPCWIRE_HTTP_MAX_BODY_BYTES", "RPCWIRE_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)

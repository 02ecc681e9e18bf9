# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON-RPC envelope framing."""

from __future__ import annotations

from typing import Any


class RpcSequence:
    """Per-client call id counter; the first id handed out is 1."""

    def __init__(self, start: int = 0):
        self._last = start

    @property
    def last(self) -> int:
        return self._last

    def next_id(self) -> int:
        # No await in here: concurrent callers on one event loop never share an id.
        self._last += 1
        return self._last


def build_envelope(method: str, params: Any = None, call_id: int = 0) -> dict[str, Any]:
    return {"method": method, "params": params, "id": call_id}


def unwrap_result(body: Any) -> Any:
    """Return the `result` member of a JSON-RPC response; None when the body has none."""
    if isinstance(body, dict):
        return body.get("result")
    return None


__all__ = ["RpcSequence", "build_envelope", "unwrap_result"]

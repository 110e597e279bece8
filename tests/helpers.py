"""Shared test doubles and log-line builders."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

NOW = datetime(2025, 12, 30, 12, 0, 0, tzinfo=UTC)


def ts(dt: datetime) -> str:
    """25-character RFC3339 prefix as written by the log shipper."""
    return dt.strftime("%Y-%m-%dT%H:%M:%S+00:00")


def completion_body(content: str) -> str:
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; replays queued responses or exceptions."""

    def __init__(self, replies: list[FakeResponse | Exception]) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, *, data: bytes, headers: dict[str, str], timeout=None) -> FakeResponse:
        self.calls.append(
            {"url": url, "body": json.loads(data), "headers": headers, "timeout": timeout}
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self) -> None:
        self.closed = True

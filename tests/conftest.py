from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

import pytest
from helpers import NOW, FakeResponse, FakeSession, ts

from log_summarizer.core.completion import CompletionClient


@pytest.fixture
def make_client() -> Callable[..., tuple[CompletionClient, FakeSession]]:
    def _make(*replies: FakeResponse | Exception) -> tuple[CompletionClient, FakeSession]:
        session = FakeSession(list(replies))
        client = CompletionClient(
            "http://llm.test/v1/chat/completions",
            "test-model",
            session=session,
        )
        return client, session

    return _make


@pytest.fixture
def write_recent_log() -> Callable[[Path, int], list[str]]:
    """Write n lines inside the hour before NOW plus noise; return the lines that qualify."""

    def _write(path: Path, n: int) -> list[str]:
        kept = [
            f"{ts(NOW - timedelta(minutes=50) + timedelta(seconds=i))} host app[42]: event {i}"
            for i in range(n)
        ]
        head = [
            f"{ts(NOW - timedelta(hours=3))} host app[42]: too old",
            "short line",
        ]
        tail = [
            "",
            "2025-12-30T11:30:00Z host app[42]: Z designator leaves trailing text in the prefix",
            f"{ts(NOW + timedelta(minutes=5))} host app[42]: from the future",
        ]
        path.write_text("\n".join(head + kept + tail) + "\n", encoding="utf-8")
        return kept

    return _write

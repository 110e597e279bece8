from __future__ import annotations

from pathlib import Path

import pytest
from helpers import FakeResponse, completion_body

from log_summarizer.tools.summarize import analyze_logs_impl, enhance_summary_impl


@pytest.mark.asyncio
async def test_analyze_logs_impl_returns_run_summary(tmp_path: Path, make_client) -> None:
    log = tmp_path / "remote.log"
    log.write_text("no timestamps here at all, nothing qualifies\n", encoding="utf-8")
    client, _ = make_client()

    out = await analyze_logs_impl(
        log_path=str(log),
        output_path=str(tmp_path / "summary.txt"),
        window="2h",
        client=client,
    )

    assert out["lines"] == 0
    assert out["chunks"] == 0
    assert out["final_written"] is False
    assert out["output_path"] == str(tmp_path / "summary.txt")
    assert set(out["window"]) == {"start", "end"}


@pytest.mark.asyncio
async def test_analyze_logs_impl_rejects_bad_window(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="invalid duration"):
        await analyze_logs_impl(log_path=str(tmp_path / "remote.log"), window="soon")


@pytest.mark.asyncio
async def test_enhance_summary_impl(tmp_path: Path, make_client) -> None:
    summary = tmp_path / "summary.txt"
    summary.write_text("=== Part 1/1 ===\n\nOOM killer invoked\n", encoding="utf-8")
    client, _ = make_client(FakeResponse(completion_body("Memory pressure on db01.")))

    out = await enhance_summary_impl(
        summary_path=str(summary),
        output_path=str(tmp_path / "recommendations.txt"),
        client=client,
    )

    assert out["output_path"] == str(tmp_path / "recommendations.txt")
    assert "Memory pressure on db01." in out["report"]
    assert "## RECOMMENDATIONS" in out["report"]

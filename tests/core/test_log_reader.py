from __future__ import annotations

import gzip
from datetime import timedelta
from pathlib import Path

import pytest
from helpers import NOW, ts

from log_summarizer.core.log_reader import iter_window_lines, read_window_lines
from log_summarizer.core.time_window import lookback_window


@pytest.mark.asyncio
async def test_read_window_lines_keeps_only_lines_inside(tmp_path: Path, write_recent_log) -> None:
    path = tmp_path / "remote.log"
    expected = write_recent_log(path, 5)

    lines = await read_window_lines(path, lookback_window(timedelta(hours=1), now=NOW))

    assert lines == expected


@pytest.mark.asyncio
async def test_read_window_lines_excludes_exact_bounds(tmp_path: Path) -> None:
    window = lookback_window(timedelta(hours=1), now=NOW)
    path = tmp_path / "remote.log"
    path.write_text(
        "\n".join(
            [
                f"{ts(window.start)} at start",
                f"{ts(window.start + timedelta(seconds=1))} just inside",
                f"{ts(window.end)} at end",
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    lines = await read_window_lines(path, window)

    assert [line[26:] for line in lines] == ["just inside"]


@pytest.mark.asyncio
async def test_read_window_lines_strips_crlf(tmp_path: Path) -> None:
    path = tmp_path / "remote.log"
    line = f"{ts(NOW - timedelta(minutes=1))} kernel: link up"
    path.write_bytes((line + "\r\n").encode("utf-8"))

    lines = await read_window_lines(path, lookback_window(timedelta(hours=1), now=NOW))

    assert lines == [line]


@pytest.mark.asyncio
async def test_iter_window_lines_reads_gzip(tmp_path: Path) -> None:
    path = tmp_path / "remote.log.gz"
    line = f"{ts(NOW - timedelta(minutes=10))} cron[7]: job done"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(line + "\n")

    window = lookback_window(timedelta(hours=1), now=NOW)
    lines = [x async for x in iter_window_lines(path, window)]

    assert lines == [line]


@pytest.mark.asyncio
async def test_read_window_lines_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await read_window_lines(tmp_path / "nope.log", lookback_window(timedelta(hours=1), now=NOW))


@pytest.mark.asyncio
async def test_read_window_lines_keeps_bare_carriage_return(tmp_path: Path) -> None:
    path = tmp_path / "remote.log"
    line = f"{ts(NOW - timedelta(minutes=5))} app: progress 10%\rprogress 100% done"
    path.write_bytes((line + "\n").encode("utf-8"))

    lines = await read_window_lines(path, lookback_window(timedelta(hours=1), now=NOW))

    assert lines == [line]


@pytest.mark.asyncio
async def test_read_window_lines_keeps_bare_carriage_return_in_gzip(tmp_path: Path) -> None:
    path = tmp_path / "remote.log.gz"
    line = f"{ts(NOW - timedelta(minutes=5))} app: step 1\rstep 2"
    with gzip.open(path, "wb") as f:
        f.write((line + "\r\n").encode("utf-8"))

    lines = await read_window_lines(path, lookback_window(timedelta(hours=1), now=NOW))

    assert lines == [line]

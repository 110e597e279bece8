"""Log loading and time-window filtering."""

from __future__ import annotations

import gzip
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .models import TimeWindow
from .time_window import line_timestamp

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _open_lines(path: Path, *, encoding: str, decode_errors: str):
    """Open a plain or gzip log for async reading.

    Lines end at "\n" only; a bare "\r" stays inside the line.
    """
    if path.suffix.lower() != ".gz":
        async with aiofiles.open(
            path, encoding=encoding, errors=decode_errors, newline="\n"
        ) as f:
            yield f
        return

    af = wrap(gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors, newline="\n"))
    try:
        yield af
    finally:
        await af.close()


async def iter_window_lines(
    log_path: str | Path,
    window: TimeWindow,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> AsyncIterator[str]:
    """Yield lines whose timestamp prefix lies strictly inside the window.

    Lines shorter than the timestamp prefix, or whose prefix is not a complete
    RFC3339 value, are skipped without error.
    """
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    dropped = 0
    async with _open_lines(path, encoding=encoding, decode_errors=decode_errors) as f:
        async for line in f:
            line = line.rstrip("\r\n")
            ts = line_timestamp(line)
            if ts is None:
                if line:
                    dropped += 1
                continue
            if ts in window:
                yield line

    if dropped:
        logger.debug("Skipped %d lines without a parseable timestamp in %s", dropped, path)


async def read_window_lines(log_path: str | Path, window: TimeWindow, **kwargs) -> list[str]:
    """Collect iter_window_lines into a list."""
    return [line async for line in iter_window_lines(log_path, window, **kwargs)]

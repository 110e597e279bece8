"""Report rendering and persistence.

The progress report is rewritten after every chunk so partial results survive
a crash. The final report adds a header and bounds the body by characters.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import aiofiles

from .models import ChunkResult, Report

SEPARATOR = "\n\n---\n\n"
RFC1123_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"


def format_generated_on(ts: datetime) -> str:
    return f"Generated on {ts.strftime(RFC1123_FORMAT)}"


def render_progress(report: Report) -> str:
    """Render the checkpoint variant: all analyses, then all errors."""
    parts: list[str] = []
    if report.analyses:
        parts.append("## SUCCESSFUL ANALYSES\n\n")
        for r in report.analyses:
            parts.append(r.render())
            parts.append(SEPARATOR)

    if report.errors:
        parts.append("\n\n## ERRORS\n\n")
        for r in report.errors:
            parts.append(r.render())
            parts.append("\n\n")

    return "".join(parts)


def _append_bounded(
    parts: list[str],
    results: Sequence[ChunkResult],
    *,
    total_chars: int,
    max_chars: int,
    trailer: str,
    noun: str,
) -> int:
    """Append rendered results until max_chars would be exceeded; return the new total."""
    for i, r in enumerate(results):
        text = r.render()
        if total_chars + len(text) > max_chars:
            parts.append(
                f"\n\n*Note: {len(results) - i} additional {noun} were truncated "
                "due to size limits.*\n"
            )
            break
        parts.append(text)
        parts.append(trailer)
        total_chars += len(text)
    return total_chars


def render_final(
    report: Report,
    *,
    generated_at: datetime,
    max_chars: int,
    window_label: str = "hour",
) -> str:
    """Render the final report with header, counts and a size-bounded body."""
    parts: list[str] = [
        "# LOG ANALYSIS SUMMARY\n",
        f"{format_generated_on(generated_at)}\n\n",
        f"Processed {len(report.analyses)} chunks of logs from the last {window_label}.\n",
    ]
    if report.errors:
        parts.append(f"Encountered {len(report.errors)} errors during processing.\n")
    parts.append("\n---\n\n")

    parts.append("## DETAILED FINDINGS\n\n")
    total = _append_bounded(
        parts,
        report.analyses,
        total_chars=0,
        max_chars=max_chars,
        trailer=SEPARATOR,
        noun="analyses",
    )

    if report.errors:
        parts.append("\n\n## ERRORS\n\n")
        _append_bounded(
            parts,
            report.errors,
            total_chars=total,
            max_chars=max_chars,
            trailer="\n\n",
            noun="errors",
        )

    return "".join(parts)


async def write_report(path: str | Path, text: str) -> None:
    """Overwrite path with text (UTF-8)."""
    async with aiofiles.open(Path(path), "w", encoding="utf-8") as f:
        await f.write(text)

"""Chunked log analysis.

Filters the log to the configured window, sends each chunk to the completion
endpoint one at a time, and checkpoints the report after every chunk.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

from .chunker import plan_chunks
from .completion import (
    ANALYZER_SYSTEM_PROMPT,
    CompletionClient,
    CompletionError,
    build_chunk_prompt,
    client_for,
    redact_text,
)
from .config import AnalyzerConfig
from .log_reader import read_window_lines
from .models import AnalysisRun, Chunk, ChunkResult, Report
from .report import render_final, render_progress, write_report
from .time_window import describe_duration, lookback_window

logger = logging.getLogger(__name__)


def process_chunk(chunk: Chunk, *, client: CompletionClient, redact: bool = False) -> ChunkResult:
    """Send one chunk; transport/API failures become an error result."""
    text = redact_text(chunk.text) if redact else chunk.text
    try:
        reply = client.complete(ANALYZER_SYSTEM_PROMPT, build_chunk_prompt(text), label=chunk.label)
    except CompletionError as e:
        return ChunkResult(label=chunk.label, text=str(e), ok=False)

    if reply is None:
        reply = f"No analysis received for {chunk.label}."
    return ChunkResult(label=chunk.label, text=reply)


async def _save(path, text: str, *, what: str) -> bool:
    try:
        await write_report(path, text)
    except OSError as e:
        logger.error("Failed to write %s to %s: %s", what, path, e)
        return False
    return True


async def analyze_logs(
    cfg: AnalyzerConfig | None = None,
    *,
    client: CompletionClient | None = None,
    now: datetime | None = None,
) -> AnalysisRun:
    """Run the analyzer end to end and return a summary of the run.

    Raises FileNotFoundError/OSError when the log cannot be read.
    """
    if cfg is None:
        cfg = AnalyzerConfig()
    if client is not None:
        return await _analyze(cfg, client, now)
    with client_for(cfg) as owned:
        return await _analyze(cfg, owned, now)


async def _analyze(
    cfg: AnalyzerConfig, client: CompletionClient, now: datetime | None
) -> AnalysisRun:
    window = lookback_window(cfg.window_duration, now=now)
    logger.info(
        "Filtering logs from %s to %s",
        window.start.isoformat(timespec="seconds"),
        window.end.isoformat(timespec="seconds"),
    )

    lines = await read_window_lines(cfg.log_path, window)
    logger.info("Found %d log lines in the last %s", len(lines), describe_duration(cfg.window_duration))

    chunks = plan_chunks(
        lines,
        max_lines=cfg.max_lines_per_chunk,
        max_tokens=cfg.max_tokens_per_chunk,
    )
    if chunks:
        logger.info(
            "Processing logs in chunks of up to %d lines",
            min(cfg.max_lines_per_chunk, len(lines)),
        )

    report = Report()
    checkpoints = 0
    for chunk in chunks:
        last = chunk.start_line + len(chunk.lines)
        logger.info(
            "Processing chunk %d/%d (lines %d-%d)",
            chunk.index,
            chunk.total,
            chunk.start_line + 1,
            last,
        )

        result = await asyncio.to_thread(process_chunk, chunk, client=client, redact=cfg.redact)
        report.add(result)
        if result.ok:
            logger.info("Successfully processed chunk %d/%d", chunk.index, chunk.total)
        else:
            logger.warning("Error processing chunk %d/%d: %s", chunk.index, chunk.total, result.text)

        if await _save(cfg.output_path, render_progress(report), what="progress"):
            checkpoints += 1

    final_written = False
    if report.analyses:
        final = render_final(
            report,
            generated_at=datetime.now(UTC) if now is None else now,
            max_chars=cfg.max_summary_chars,
            window_label=describe_duration(cfg.window_duration),
        )
        final_written = await _save(cfg.output_path, final, what="final summary")
    else:
        logger.info("No successful analyses to summarize")

    logger.info("Log analysis saved to %s", cfg.output_path)
    return AnalysisRun(
        window=window,
        output_path=cfg.output_path,
        line_count=len(lines),
        chunk_count=len(chunks),
        success_count=len(report.analyses),
        error_count=len(report.errors),
        checkpoints=checkpoints,
        final_written=final_written,
    )

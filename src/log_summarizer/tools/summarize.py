"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from log_summarizer.core.analyzer import analyze_logs
from log_summarizer.core.completion import CompletionClient
from log_summarizer.core.config import resolve_analyzer_config, resolve_enhancer_config
from log_summarizer.core.enhancer import enhance_summary
from log_summarizer.core.time_window import parse_duration


def _path(p: str | None) -> Path | None:
    return Path(p).expanduser() if p else None


async def analyze_logs_impl(
    *,
    log_path: str | None = None,
    output_path: str | None = None,
    window: str | None = None,
    max_lines_per_chunk: int | None = None,
    max_tokens_per_chunk: int | None = None,
    max_summary_chars: int | None = None,
    endpoint: str | None = None,
    model: str | None = None,
    client: CompletionClient | None = None,
) -> dict[str, Any]:
    """Implementation for the `analyze_logs` MCP tool."""
    cfg = resolve_analyzer_config(
        log_path=_path(log_path),
        output_path=_path(output_path),
        window_duration=parse_duration(window) if window else None,
        max_lines_per_chunk=max_lines_per_chunk,
        max_tokens_per_chunk=max_tokens_per_chunk,
        max_summary_chars=max_summary_chars,
        endpoint=endpoint,
        model=model,
    )
    run = await analyze_logs(cfg, client=client)
    return {
        "window": {
            "start": run.window.start.isoformat(),
            "end": run.window.end.isoformat(),
        },
        "lines": run.line_count,
        "chunks": run.chunk_count,
        "succeeded": run.success_count,
        "failed": run.error_count,
        "checkpoints": run.checkpoints,
        "final_written": run.final_written,
        "output_path": str(run.output_path),
    }


async def enhance_summary_impl(
    *,
    summary_path: str | None = None,
    output_path: str | None = None,
    endpoint: str | None = None,
    model: str | None = None,
    client: CompletionClient | None = None,
) -> dict[str, Any]:
    """Implementation for the `enhance_summary` MCP tool."""
    cfg = resolve_enhancer_config(
        summary_path=_path(summary_path),
        output_path=_path(output_path),
        endpoint=endpoint,
        model=model,
    )
    text = await enhance_summary(cfg, client=client)
    return {"output_path": str(cfg.output_path), "report": text}

"""MCP server entrypoint (stdio transport).

Exposes the analyzer and the enhancer as tools so an MCP client can run a
triage pass and read back the recommendations.

Run locally (stdio):
    log-summarizer-mcp
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_summarizer.logging_config import configure_logging
from log_summarizer.tools.summarize import analyze_logs_impl, enhance_summary_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("log-summarizer", json_response=True)


@mcp.tool()
async def analyze_logs(
    log_path: str | None = None,
    output_path: str | None = None,
    window: str | None = None,
    max_lines_per_chunk: int | None = None,
    max_tokens_per_chunk: int | None = None,
    max_summary_chars: int | None = None,
) -> dict[str, Any]:
    """Summarize recent log lines chunk by chunk and write a report.

    Parameters
    ----------
    log_path:
        Log file whose lines start with a 25-character RFC3339 timestamp.
    output_path:
        Report file; rewritten after every chunk and finalized at the end.
    window:
        Lookback window ending now (e.g., 1h, 30m, 1h30m). Default: 1h.
    max_lines_per_chunk / max_tokens_per_chunk:
        Chunk sizing; windows above the token estimate are shrunk.
    max_summary_chars:
        Character ceiling of the final report body.

    Returns
    -------
    dict:
        Window, line/chunk counts, success/error counts and the output path.
    """
    return await analyze_logs_impl(
        log_path=log_path,
        output_path=output_path,
        window=window,
        max_lines_per_chunk=max_lines_per_chunk,
        max_tokens_per_chunk=max_tokens_per_chunk,
        max_summary_chars=max_summary_chars,
    )


@mcp.tool()
async def enhance_summary(
    summary_path: str | None = None,
    output_path: str | None = None,
) -> dict[str, Any]:
    """Condense a written report and add a RECOMMENDATIONS section.

    Returns
    -------
    dict:
        {"output_path": str, "report": str}
    """
    return await enhance_summary_impl(summary_path=summary_path, output_path=output_path)


def main() -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()

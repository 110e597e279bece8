"""Report enhancement.

Sends a previously written report to the model in a single request and adds a
recommendations section. Every failure here is fatal to the run.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path

import aiofiles

from .completion import ENHANCER_SYSTEM_PROMPT, CompletionClient, build_enhance_prompt, client_for
from .config import EnhancerConfig
from .report import format_generated_on, write_report

logger = logging.getLogger(__name__)

# Search this far into the cut text for a line boundary.
LINE_BOUNDARY_SEARCH = 1000

FALLBACK_RECOMMENDATIONS = (
    "\n\n## RECOMMENDATIONS\n\n"
    "The AI did not provide specific recommendations. "
    "Please review the summary to determine appropriate actions.\n"
)


def truncate_tail(data: bytes, max_bytes: int) -> bytes:
    """Keep the trailing max_bytes, starting on a line boundary when one is near."""
    if len(data) <= max_bytes:
        return data
    data = data[len(data) - max_bytes :]
    nl = data.find(b"\n", 0, LINE_BOUNDARY_SEARCH)
    if nl != -1:
        data = data[nl + 1 :]
    return data


async def load_summary(path: str | Path, *, max_bytes: int) -> str:
    async with aiofiles.open(Path(path), "rb") as f:
        data = await f.read()
    logger.info("Read %d bytes from summary file", len(data))

    if len(data) > max_bytes:
        logger.info("Summary file is very large, truncating to last %d bytes", max_bytes)
        data = truncate_tail(data, max_bytes)
    return data.decode("utf-8", errors="replace")


def has_recommendations(reply: str) -> bool:
    return "RECOMMENDATION" in reply.upper()


def render_enhanced(reply: str | None, *, generated_at: datetime) -> str:
    text = reply if reply is not None else "No summary generated."
    out = (
        "# ENHANCED LOG SUMMARY WITH RECOMMENDATIONS\n"
        f"{format_generated_on(generated_at)}\n\n"
        f"{text}"
    )
    if not has_recommendations(text):
        out += FALLBACK_RECOMMENDATIONS
    return out


async def enhance_summary(
    cfg: EnhancerConfig | None = None,
    *,
    client: CompletionClient | None = None,
    now: datetime | None = None,
) -> str:
    """Write the enhanced report to cfg.output_path and return its text."""
    if cfg is None:
        cfg = EnhancerConfig()
    if client is not None:
        return await _enhance(cfg, client, now)
    with client_for(cfg) as owned:
        return await _enhance(cfg, owned, now)


async def _enhance(cfg: EnhancerConfig, client: CompletionClient, now: datetime | None) -> str:
    summary = await load_summary(cfg.summary_path, max_bytes=cfg.max_input_bytes)

    logger.info("Sending request to AI service...")
    reply = await asyncio.to_thread(
        client.complete,
        ENHANCER_SYSTEM_PROMPT,
        build_enhance_prompt(summary),
        label="summary",
    )

    text = render_enhanced(reply, generated_at=datetime.now(UTC) if now is None else now)
    await write_report(cfg.output_path, text)
    logger.info("Enhanced summary with recommendations saved to %s", cfg.output_path)
    return text

"""Chunk planning.

Lines are grouped into fixed-size windows; a window whose token estimate
exceeds the ceiling is shrunk proportionally, and the next window starts
right after the shrunk one so no line is skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import Chunk

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Rough token count (1 token ~ 4 characters)."""
    return len(text) // CHARS_PER_TOKEN


def shrink_size(size: int, estimated: int, max_tokens: int) -> int:
    """Scale a window size by max_tokens / estimated, keeping 1 <= result <= size."""
    if estimated <= max_tokens:
        return size
    return max(1, min(size, size * max_tokens // estimated))


def _window_sizes(lines: Sequence[str], *, lines_per_chunk: int, max_tokens: int) -> list[int]:
    sizes: list[int] = []
    i = 0
    while i < len(lines):
        size = min(lines_per_chunk, len(lines) - i)
        estimated = estimate_tokens("\n".join(lines[i : i + size]))
        if estimated > max_tokens:
            new_size = shrink_size(size, estimated, max_tokens)
            logger.info(
                "Chunk at line %d too large (%d tokens), reducing from %d to %d lines",
                i + 1,
                estimated,
                size,
                new_size,
            )
            size = new_size
        sizes.append(size)
        i += size
    return sizes


def plan_chunks(lines: Sequence[str], *, max_lines: int, max_tokens: int) -> list[Chunk]:
    """Split kept lines into ordered, non-empty chunks covering every line."""
    if max_lines < 1:
        raise ValueError("max_lines must be >= 1")
    if max_tokens < 1:
        raise ValueError("max_tokens must be >= 1")
    if not lines:
        return []

    lines_per_chunk = min(max_lines, len(lines))
    sizes = _window_sizes(lines, lines_per_chunk=lines_per_chunk, max_tokens=max_tokens)

    chunks: list[Chunk] = []
    start = 0
    for index, size in enumerate(sizes, start=1):
        chunks.append(
            Chunk(
                index=index,
                total=len(sizes),
                lines=tuple(lines[start : start + size]),
                start_line=start,
            )
        )
        start += size
    return chunks

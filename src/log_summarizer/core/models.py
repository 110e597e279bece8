"""Core data models for the summarization pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Open time interval; both bounds are exclusive."""

    start: datetime
    end: datetime

    def __contains__(self, ts: datetime) -> bool:
        return self.start < ts < self.end


@dataclass(frozen=True, slots=True)
class Chunk:
    """Contiguous group of kept log lines sent together in one request."""

    index: int  # 1-based
    total: int
    lines: tuple[str, ...]
    start_line: int = 0  # offset into the filtered sequence

    @property
    def label(self) -> str:
        return f"Part {self.index}/{self.total}"

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def estimated_tokens(self) -> int:
        return len(self.text) // 4


@dataclass(frozen=True, slots=True)
class ChunkResult:
    """Outcome of one chunk request: an analysis or an error message."""

    label: str
    text: str
    ok: bool = True

    def render(self) -> str:
        if self.ok:
            return f"=== {self.label} ===\n\n{self.text}"
        return f"{self.label}: {self.text}"


@dataclass(slots=True)
class Report:
    """Successful analyses and errors, in processing order."""

    analyses: list[ChunkResult] = field(default_factory=list)
    errors: list[ChunkResult] = field(default_factory=list)

    def add(self, result: ChunkResult) -> None:
        if result.ok:
            self.analyses.append(result)
        else:
            self.errors.append(result)


@dataclass(frozen=True, slots=True)
class AnalysisRun:
    """Summary of a finished analyzer run."""

    window: TimeWindow
    output_path: Path
    line_count: int
    chunk_count: int
    success_count: int
    error_count: int
    checkpoints: int
    final_written: bool

"""Pipeline configuration.

Every path, endpoint and limit the two programs use lives here instead of in
module constants. Environment variables (``LOG_SUMMARIZER_*``) override the
dataclass defaults; explicit CLI/tool arguments override both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from datetime import timedelta
from pathlib import Path

from .time_window import parse_duration

ENV_PREFIX = "LOG_SUMMARIZER_"

DEFAULT_ENDPOINT = "http://localhost:1234/v1/chat/completions"
DEFAULT_MODEL = "qwen2.5-7b-instruct-1m"
DEFAULT_SUMMARY_PATH = Path("log_summary.txt")
DEFAULT_RECOMMENDATIONS_PATH = Path("log_recommendations.txt")


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    """Options for the chunked log analyzer.

    log_path:
        Log file to read; each kept line starts with a 25-character RFC3339 timestamp.
    output_path:
        Report file, overwritten after every chunk and once more at the end.
    endpoint:
        Chat-completion URL receiving one POST per chunk.
    model:
        Model identifier sent with every request.
    window_duration:
        Lines are kept when their timestamp falls inside (now - window_duration, now).
    max_lines_per_chunk:
        Target number of lines per chunk before token-based shrinking.
    max_tokens_per_chunk:
        Estimated-token ceiling (chars / 4); larger windows are shrunk.
    max_summary_chars:
        Character ceiling for the body of the final report.
    temperature:
        Sampling temperature sent with every request.
    request_timeout:
        Seconds to wait on the endpoint; None leaves the transport default.
    redact:
        Mask e-mail addresses, IPs and tokens before sending log text.
    """

    log_path: Path = Path("/var/log/remote.log")
    output_path: Path = DEFAULT_SUMMARY_PATH
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    window_duration: timedelta = timedelta(hours=1)
    max_lines_per_chunk: int = 30
    max_tokens_per_chunk: int = 1500
    max_summary_chars: int = 20000
    temperature: float = 0.3
    request_timeout: float | None = None
    redact: bool = False


@dataclass(frozen=True, slots=True)
class EnhancerConfig:
    """Options for the report enhancer.

    summary_path:
        Report produced by the analyzer.
    output_path:
        Enhanced report with recommendations.
    max_input_bytes:
        Larger reports are cut to their trailing bytes before sending.
    """

    summary_path: Path = DEFAULT_SUMMARY_PATH
    output_path: Path = DEFAULT_RECOMMENDATIONS_PATH
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    max_input_bytes: int = 100_000
    temperature: float = 0.3
    request_timeout: float | None = None


def _env(name: str) -> str | None:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _env_positive_int(name: str) -> int | None:
    raw = _env(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= 1")
    return value


def _env_timeout() -> float | None:
    raw = _env("TIMEOUT")
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}TIMEOUT must be a number of seconds") from exc
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}TIMEOUT must be > 0")
    return value


def _env_window() -> timedelta | None:
    raw = _env("WINDOW")
    if raw is None:
        return None
    try:
        return parse_duration(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}WINDOW: {exc}") from exc


def _check_timeout(timeout: float | None) -> None:
    if timeout is not None and not timeout > 0:
        raise ValueError("request_timeout must be > 0")


def _validate_analyzer(cfg: AnalyzerConfig) -> AnalyzerConfig:
    if cfg.max_lines_per_chunk < 1:
        raise ValueError("max_lines_per_chunk must be >= 1")
    if cfg.max_tokens_per_chunk < 1:
        raise ValueError("max_tokens_per_chunk must be >= 1")
    if cfg.max_summary_chars < 1:
        raise ValueError("max_summary_chars must be >= 1")
    if cfg.window_duration <= timedelta(0):
        raise ValueError("window_duration must be > 0")
    _check_timeout(cfg.request_timeout)
    return cfg


def resolve_analyzer_config(cfg: AnalyzerConfig | None = None, **overrides) -> AnalyzerConfig:
    """Return analyzer config with env overrides, then explicit overrides, applied."""
    if cfg is None:
        cfg = AnalyzerConfig()

    env: dict[str, object] = {}
    if (v := _env("LOG_PATH")) is not None:
        env["log_path"] = Path(v)
    if (v := _env("OUTPUT_PATH")) is not None:
        env["output_path"] = Path(v)
    if (v := _env("ENDPOINT")) is not None:
        env["endpoint"] = v
    if (v := _env("MODEL")) is not None:
        env["model"] = v
    if (w := _env_window()) is not None:
        env["window_duration"] = w
    if (n := _env_positive_int("MAX_LINES_PER_CHUNK")) is not None:
        env["max_lines_per_chunk"] = n
    if (n := _env_positive_int("MAX_TOKENS_PER_CHUNK")) is not None:
        env["max_tokens_per_chunk"] = n
    if (n := _env_positive_int("MAX_SUMMARY_CHARS")) is not None:
        env["max_summary_chars"] = n
    if (t := _env_timeout()) is not None:
        env["request_timeout"] = t

    env.update({k: v for k, v in overrides.items() if v is not None})
    if not env:
        return _validate_analyzer(cfg)
    return _validate_analyzer(replace(cfg, **env))


def resolve_enhancer_config(cfg: EnhancerConfig | None = None, **overrides) -> EnhancerConfig:
    """Return enhancer config with env overrides, then explicit overrides, applied."""
    if cfg is None:
        cfg = EnhancerConfig()

    env: dict[str, object] = {}
    if (v := _env("SUMMARY_PATH")) is not None:
        env["summary_path"] = Path(v)
    if (v := _env("RECOMMENDATIONS_PATH")) is not None:
        env["output_path"] = Path(v)
    if (v := _env("ENDPOINT")) is not None:
        env["endpoint"] = v
    if (v := _env("MODEL")) is not None:
        env["model"] = v
    if (n := _env_positive_int("MAX_INPUT_BYTES")) is not None:
        env["max_input_bytes"] = n
    if (t := _env_timeout()) is not None:
        env["request_timeout"] = t

    env.update({k: v for k, v in overrides.items() if v is not None})
    if env:
        cfg = replace(cfg, **env)
    if cfg.max_input_bytes < 1:
        raise ValueError("max_input_bytes must be >= 1")
    _check_timeout(cfg.request_timeout)
    return cfg

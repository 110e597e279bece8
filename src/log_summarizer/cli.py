from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence
from datetime import timedelta
from pathlib import Path

from log_summarizer.core.analyzer import analyze_logs
from log_summarizer.core.completion import CompletionError
from log_summarizer.core.config import resolve_analyzer_config, resolve_enhancer_config
from log_summarizer.core.enhancer import enhance_summary
from log_summarizer.core.time_window import parse_duration
from log_summarizer.logging_config import configure_logging

logger = logging.getLogger("log_summarizer")


def _duration(s: str) -> timedelta:
    try:
        return parse_duration(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{s}'") from e
    if value < 1:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return value


def _positive_float(s: str) -> float:
    try:
        value = float(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a number, got '{s}'") from e
    if not 0 < value < float("inf"):
        raise argparse.ArgumentTypeError("value must be > 0")
    return value


def _add_endpoint_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--endpoint", default=None, help="Chat-completion URL")
    p.add_argument("--model", default=None, help="Model identifier sent with each request")
    p.add_argument(
        "--timeout",
        dest="request_timeout",
        type=_positive_float,
        default=None,
        help="Request timeout in seconds (default: none)",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="log-summarizer",
        description="Summarize recent log lines with a chat-completion model.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    a = sub.add_parser("analyze", help="Summarize the recent window of a log file chunk by chunk")
    a.add_argument("--log", dest="log_path", type=Path, default=None, help="Log file to read")
    a.add_argument("--output", dest="output_path", type=Path, default=None, help="Report file")
    a.add_argument(
        "--window",
        dest="window_duration",
        type=_duration,
        default=None,
        help="Lookback window ending now, e.g. 1h, 30m (default: 1h)",
    )
    a.add_argument("--max-lines", dest="max_lines_per_chunk", type=_positive_int, default=None)
    a.add_argument("--max-tokens", dest="max_tokens_per_chunk", type=_positive_int, default=None)
    a.add_argument("--max-chars", dest="max_summary_chars", type=_positive_int, default=None)
    a.add_argument("--redact", action="store_true", default=None, help="Mask IPs, e-mails and tokens")
    _add_endpoint_args(a)

    e = sub.add_parser("enhance", help="Add recommendations to a previously written report")
    e.add_argument("--summary", dest="summary_path", type=Path, default=None, help="Report to read")
    e.add_argument("--output", dest="output_path", type=Path, default=None, help="Enhanced report")
    e.add_argument("--max-bytes", dest="max_input_bytes", type=_positive_int, default=None)
    _add_endpoint_args(e)

    return p


def _run_analyze(args: argparse.Namespace) -> int:
    cfg = resolve_analyzer_config(
        log_path=args.log_path,
        output_path=args.output_path,
        window_duration=args.window_duration,
        max_lines_per_chunk=args.max_lines_per_chunk,
        max_tokens_per_chunk=args.max_tokens_per_chunk,
        max_summary_chars=args.max_summary_chars,
        endpoint=args.endpoint,
        model=args.model,
        request_timeout=args.request_timeout,
        redact=args.redact,
    )
    logger.info("Log analyzer starting...")
    try:
        run = asyncio.run(analyze_logs(cfg))
    except OSError as e:
        logger.critical("Failed to read log file: %s", e)
        return 1

    print(
        f"Processed {run.chunk_count} chunks ({run.success_count} ok, {run.error_count} failed) "
        f"from {run.line_count} lines -> {run.output_path}"
    )
    return 0


def _run_enhance(args: argparse.Namespace) -> int:
    cfg = resolve_enhancer_config(
        summary_path=args.summary_path,
        output_path=args.output_path,
        max_input_bytes=args.max_input_bytes,
        endpoint=args.endpoint,
        model=args.model,
        request_timeout=args.request_timeout,
    )
    logger.info("Log summary enhancer starting...")
    try:
        asyncio.run(enhance_summary(cfg))
    except OSError as e:
        logger.critical("Failed to read or write report: %s", e)
        return 1
    except CompletionError as e:
        logger.critical("Failed to enhance summary: %s", e)
        return 1

    print(f"Enhanced summary written to {cfg.output_path}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        if args.command == "analyze":
            code = _run_analyze(args)
        else:
            code = _run_enhance(args)
    except ValueError as e:
        logger.critical("Error: %s", e)
        raise SystemExit(2)

    raise SystemExit(code)


if __name__ == "__main__":
    main()

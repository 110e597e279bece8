"""Process-wide logging setup shared by the CLI and the MCP server."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "LOG_SUMMARIZER_LOG_LEVEL"


def configure_logging(default_level: str = "INFO") -> None:
    """Configure root logging on stderr; stdout is left for tool output."""
    level_name = os.getenv(LOG_LEVEL_ENV, default_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

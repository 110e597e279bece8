"""Chat-completion package."""

from __future__ import annotations

from .client import (
    ApiError,
    CompletionClient,
    CompletionError,
    MalformedResponseError,
    PayloadError,
    ResponseParseError,
    TransportError,
    client_for,
)
from .models import ChatRequest, Choice, DecodedCompletion, decode_completion
from .prompt import (
    ANALYZER_SYSTEM_PROMPT,
    ENHANCER_SYSTEM_PROMPT,
    build_chunk_prompt,
    build_enhance_prompt,
)
from .redaction import redact_text

__all__ = [
    "ANALYZER_SYSTEM_PROMPT",
    "ENHANCER_SYSTEM_PROMPT",
    "ApiError",
    "Choice",
    "ChatRequest",
    "CompletionClient",
    "CompletionError",
    "DecodedCompletion",
    "MalformedResponseError",
    "PayloadError",
    "ResponseParseError",
    "TransportError",
    "build_chunk_prompt",
    "build_enhance_prompt",
    "client_for",
    "decode_completion",
    "redact_text",
]

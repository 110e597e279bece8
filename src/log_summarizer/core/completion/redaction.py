"""Masking of sensitive values in log text sent to the model."""

from __future__ import annotations

import re

_HEX = r"[0-9a-fA-F]{1,4}"
_GROUPS = rf"(?:{_HEX}(?::{_HEX}){{0,6}})?"

# Order matters: JWTs before the generic long-token rule.
# IPv6 needs all eight groups or a "::", so clock times like 12:30:45 stay.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\beyJ[\w-]{10,}\.[\w-]{10,}\.[\w-]{10,}\b"), "<JWT>"),
    (re.compile(r"(?i)\b[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}\b"), "<EMAIL>"),
    (re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b"), "<IP>"),
    (re.compile(rf"(?<![\w:])(?:{_HEX}:){{7}}{_HEX}(?![\w:])"), "<IP>"),
    (re.compile(rf"(?<![\w:])(?=[0-9a-fA-F:]*[0-9a-fA-F]){_GROUPS}::{_GROUPS}(?![\w:])"), "<IP>"),
    (re.compile(r"\b[\w-]{32,}\b"), "<TOKEN>"),
)


def redact_text(text: str) -> str:
    for pattern, placeholder in _RULES:
        text = pattern.sub(placeholder, text)
    return text

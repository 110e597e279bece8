"""Prompt construction for chunk analysis and report enhancement."""

from __future__ import annotations

ANALYZER_SYSTEM_PROMPT = (
    "You are a log analyzer. Extract the MOST IMPORTANT issues and patterns from the logs. "
    "Be concise. Focus only on critical findings."
)

ENHANCER_SYSTEM_PROMPT = (
    "You are a system administrator assistant. Your task is to analyze log summaries, "
    "create a concise meta-summary, and provide specific actionable recommendations to "
    "address the issues found in the logs."
)


def build_chunk_prompt(chunk_text: str) -> str:
    """Build the user message for one chunk of log lines."""
    return (
        "Analyze these logs and identify the most important issues. "
        "Keep your response SHORT and FOCUSED only on critical findings:\n\n"
        f"{chunk_text}"
    )


def build_enhance_prompt(summary_text: str) -> str:
    """Build the user message asking for a meta-summary plus recommendations."""
    return (
        "Here is a summary of log analysis. Please create a shorter, more concise summary "
        'of the key issues found, and then add a section called "RECOMMENDATIONS" that '
        "lists specific, actionable steps to address the problems.\n\n"
        f"{summary_text}"
    )

"""
Text utility functions for the File Indexer.

Provides whitespace normalization and truncation used before
tokenization and for console previews.
"""

import re
from typing import List

_WHITESPACE = re.compile(r"\s+")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def collapse_whitespace(text: str) -> str:
    """
    Collapse every whitespace run, line breaks included, into one space.

    Args:
        text: Raw extracted text.

    Returns:
        Single-spaced, trimmed text on one line.
    """
    if not text:
        return ""

    return _WHITESPACE.sub(" ", text).strip()


def split_lines(text: str) -> List[str]:
    """Split text on any line break convention."""
    if not text:
        return []
    return _LINE_BREAK.split(text)


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to maximum length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix.
        suffix: String to append when truncated.

    Returns:
        Truncated text or original if within limit.
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    # Try to break at word boundary
    truncated = text[:truncate_at]
    last_space = truncated.rfind(" ")

    if last_space > truncate_at * 0.7:
        truncated = truncated[:last_space]

    return truncated + suffix

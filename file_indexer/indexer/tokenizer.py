"""
Tokenizer and word-frequency builder.

Turns extracted text into normalized tokens and counts them on a
FileEntry. Input is bounded (whole-text and per-line truncation) and the
number of distinct tokens per file is capped.
"""

import re
from typing import Iterator

from ..core import FileEntry, get_logger
from ..core.models import MAX_UNIQUE_WORDS
from ..utils import collapse_whitespace, split_lines

logger = get_logger(__name__)

MAX_TEXT_CHARS = 100_000
MAX_LINE_CHARS = 10_000
MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 50

# Markup/entity artifacts and common web/protocol tokens.
NOISE_WORDS = frozenset({
    "nbsp", "amp", "lt", "gt", "quot", "apos",
    "http", "https", "www", "com", "org", "net",
    "xml", "html", "body", "div", "span", "class"
})

_SEPARATORS = re.compile(r"[^a-zA-Zа-яА-ЯёЁ0-9_-]+")
_DIGITS = re.compile(r"[0-9]+")
_REPEATED_CHAR = re.compile(r"(.)\1{2,}")


def is_valid_word(word: str) -> bool:
    """
    Check whether a lowercase candidate is worth indexing.

    Rejects tokens outside [2, 50] characters, all-digit tokens, noise
    words and tokens made of one character repeated three or more times.
    Two-character repeats such as "xx" are accepted.
    """
    if not MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH:
        return False

    if _DIGITS.fullmatch(word):
        return False

    if word in NOISE_WORDS:
        return False

    if _REPEATED_CHAR.fullmatch(word):
        return False

    return True


class Tokenizer:
    """
    Builds per-file word-frequency maps from plain text.

    Every accepted occurrence adds exactly one to its token's count.
    """

    def __init__(
        self,
        max_text_chars: int = MAX_TEXT_CHARS,
        max_line_chars: int = MAX_LINE_CHARS,
        max_unique_words: int = MAX_UNIQUE_WORDS
    ):
        """
        Initialize the tokenizer.

        Args:
            max_text_chars: Whole-text truncation limit.
            max_line_chars: Per-line truncation limit.
            max_unique_words: Distinct-token cap per file.
        """
        self.max_text_chars = max_text_chars
        self.max_line_chars = max_line_chars
        self.max_unique_words = max_unique_words

    def tokenize(self, text: str) -> Iterator[str]:
        """
        Yield accepted lowercase tokens in text order.

        Args:
            text: Extracted plain text.

        Yields:
            Normalized tokens passing every filter.
        """
        text = collapse_whitespace(text)

        if len(text) > self.max_text_chars:
            logger.debug(f"Text truncated from {len(text)} to {self.max_text_chars} characters")
            text = text[:self.max_text_chars]

        for line in split_lines(text):
            if not line:
                continue

            for candidate in _SEPARATORS.split(line[:self.max_line_chars]):
                word = candidate.lower()
                if is_valid_word(word):
                    yield word

    def build(self, text: str, entry: FileEntry) -> int:
        """
        Count the tokens of a text on an entry.

        Args:
            text: Extracted plain text.
            entry: Entry whose frequency map is updated in place.

        Returns:
            Number of occurrences recorded (excluding tokens dropped by the cap).
        """
        if not text:
            return 0

        recorded = 0
        dropped = 0

        for word in self.tokenize(text):
            if entry.add_word(word, max_unique=self.max_unique_words):
                recorded += 1
            else:
                dropped += 1

        if dropped:
            logger.warning(
                f"Distinct word cap ({self.max_unique_words}) reached for "
                f"{entry.file_name}: {dropped} occurrences of new words ignored"
            )

        return recorded

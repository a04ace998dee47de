"""
Data model for indexed files.

A FileEntry is built once per file during the tree walk, filled by the
tokenizer, persisted by the repository and later rebuilt from metadata
only when returned by a search.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union


MAX_UNIQUE_WORDS = 100_000


def get_extension(file_name: str) -> str:
    """
    Derive the lowercase extension of a file name.

    The extension is the text after the last dot, provided the dot is
    neither the first nor the last character (".bashrc" and "notes."
    have no extension).

    Args:
        file_name: Bare file name, without directories.

    Returns:
        Lowercase extension without leading dot, or "" if absent.
    """
    dot_index = file_name.rfind(".")
    if 0 < dot_index < len(file_name) - 1:
        return file_name[dot_index + 1:].lower()
    return ""


@dataclass
class FileEntry:
    """
    Metadata and word-frequency profile of one indexed file.

    Attributes:
        path: Canonical absolute path with forward slashes (unique key).
        file_name: Bare file name.
        size: File size in bytes.
        last_modified: Modification time in epoch milliseconds.
        extension: Lowercase extension without leading dot.
        word_counts: Mapping of lowercase token to occurrence count.
        id: Store-assigned identifier, None until first persisted.
        relevance: Summed match count, set only by content search.
    """
    path: str
    file_name: str
    size: int
    last_modified: int
    extension: str
    word_counts: Dict[str, int] = field(default_factory=dict)
    id: Optional[int] = None
    relevance: Optional[int] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileEntry":
        """
        Build an entry from filesystem attributes, read once.

        Args:
            path: Path to an existing file.

        Returns:
            FileEntry with an empty frequency map.

        Raises:
            OSError: If the file cannot be stat'ed.
        """
        path = Path(os.path.abspath(path))
        stat = path.stat()

        return cls(
            path=path.as_posix(),
            file_name=path.name,
            size=stat.st_size,
            last_modified=stat.st_mtime_ns // 1_000_000,
            extension=get_extension(path.name)
        )

    @property
    def total_words(self) -> int:
        """Total number of token occurrences."""
        return sum(self.word_counts.values())

    @property
    def unique_words(self) -> int:
        """Number of distinct tokens."""
        return len(self.word_counts)

    @property
    def formatted_last_modified(self) -> str:
        """Modification time as 'YYYY-MM-DD HH:MM:SS' in local time."""
        return datetime.fromtimestamp(self.last_modified / 1000).strftime("%Y-%m-%d %H:%M:%S")

    def add_word(self, word: str, count: int = 1, max_unique: int = MAX_UNIQUE_WORDS) -> bool:
        """
        Add occurrences of a token to the frequency map.

        Known tokens are always incremented. New tokens are admitted only
        while the map holds fewer than max_unique keys.

        Args:
            word: Token to count (lowercased here).
            count: Number of occurrences to add.
            max_unique: Cap on distinct keys.

        Returns:
            True if the occurrence was recorded, False if dropped by the cap.
        """
        word = word.lower()

        if word in self.word_counts:
            self.word_counts[word] += count
            return True

        if len(self.word_counts) >= max_unique:
            return False

        self.word_counts[word] = count
        return True

    def contains_word(self, word: str) -> bool:
        return word.lower() in self.word_counts

    def get_word_count(self, word: str) -> int:
        return self.word_counts.get(word.lower(), 0)

    def top_words(self, limit: int = 10) -> List[Tuple[str, int]]:
        """Most frequent tokens, highest count first."""
        return sorted(self.word_counts.items(), key=lambda item: (-item[1], item[0]))[:limit]

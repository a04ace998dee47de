"""
Recursive tree walker driving extraction and tokenization per file.

Visits every file under a root directory, filters by extension allow-list
and size gates, and builds one FileEntry per accepted file. Failures on
individual files are logged and counted as skipped; only an invalid root
aborts the walk.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from ..core import FileEntry, get_logger, ExtractionError, ValidationError
from ..core.models import get_extension
from ..extraction import ContentExtractor, ExtractionStatus
from ..utils import validate_directory, format_file_size
from .tokenizer import Tokenizer

logger = get_logger(__name__)

DEFAULT_MAX_FILE_SIZE_MB = 50


@dataclass
class WalkStats:
    """Counters from one walk."""
    total: int = 0
    processed: int = 0
    skipped: int = 0
    skipped_extension: int = 0
    skipped_size: int = 0
    skipped_empty: int = 0
    failed: int = 0
    without_content: int = 0
    unreadable_directories: int = 0
    errors: List[str] = field(default_factory=list)


class FileWalker:
    """
    Walks a directory tree and builds FileEntry objects.

    Every visited file ends up either as a returned entry (processed) or
    counted as skipped. Directories that cannot be listed are counted
    apart from files.
    """

    def __init__(
        self,
        extensions: Iterable[str] = (),
        extractor: ContentExtractor = None,
        tokenizer: Tokenizer = None,
        max_file_size_mb: float = DEFAULT_MAX_FILE_SIZE_MB,
        log_progress_every: int = 100,
        progress_callback: Callable[[int, str], None] = None
    ):
        """
        Initialize the walker.

        Args:
            extensions: Accepted extensions, with or without leading dot,
                        case-insensitive. Empty accepts every file.
            extractor: Format dispatcher. Defaults to a stock ContentExtractor.
            tokenizer: Frequency builder. Defaults to a stock Tokenizer.
            max_file_size_mb: Files larger than this are skipped.
            log_progress_every: Log a progress line every N visited files.
            progress_callback: Optional callback(visited, filename).
        """
        self.extensions = {ext.lower().lstrip(".") for ext in extensions if ext}
        self.extractor = extractor or ContentExtractor()
        self.tokenizer = tokenizer or Tokenizer()
        self.max_file_size_bytes = int(max_file_size_mb * 1024 * 1024)
        self.log_every = max(1, log_progress_every)
        self.progress_callback = progress_callback
        self.stats = WalkStats()

        logger.debug(f"Supported extensions: {sorted(self.extensions) or 'all'}")

    def is_supported(self, file_name: str) -> bool:
        """Check a file name against the extension allow-list."""
        if not self.extensions:
            return True
        return get_extension(file_name) in self.extensions

    def walk(self, directory: Union[str, Path]) -> List[FileEntry]:
        """
        Walk a directory tree and build entries for accepted files.

        Args:
            directory: Root directory, as typed by the user.

        Returns:
            Entries of processed files, in no particular order.

        Raises:
            ValidationError: If the root is empty, missing or not a directory.
        """
        root = validate_directory(str(directory))

        self.stats = WalkStats()
        entries: List[FileEntry] = []

        logger.info(f"Walking directory: {root}")

        for dirpath, _dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            for name in filenames:
                entry = self._visit(Path(dirpath) / name)

                if entry is not None:
                    entries.append(entry)

                if self.progress_callback:
                    self.progress_callback(self.stats.total, name)

                if self.stats.total % self.log_every == 0:
                    logger.info(
                        f"Progress: {self.stats.total} files visited "
                        f"({self.stats.processed} processed, {self.stats.skipped} skipped)"
                    )

        logger.info(
            f"Walk complete: {self.stats.processed}/{self.stats.total} files processed, "
            f"{self.stats.skipped} skipped"
        )

        return entries

    def process_file(self, filepath: Union[str, Path]) -> FileEntry:
        """
        Build the entry of a single file, extracting and counting its words.

        Files outside the size gates get a metadata-only entry.

        Args:
            filepath: Path to a regular file.

        Returns:
            FileEntry with its frequency map filled.

        Raises:
            ValidationError: If the path is not an existing file.
            ExtractionError: If the file cannot be read.
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            raise ValidationError(
                f"Not a file: {filepath}",
                suggestion="Check the path and point to an existing file"
            )

        try:
            entry = FileEntry.from_path(filepath)
        except OSError as e:
            raise ExtractionError(f"Cannot stat file: {e}", filepath=str(filepath))

        gate = self._size_gate(entry)
        if gate:
            logger.warning(f"{filepath}: {gate}, content not indexed")
            return entry

        self._fill(entry, filepath)
        return entry

    def _visit(self, filepath: Path) -> Optional[FileEntry]:
        """Process one visited file, updating counters."""
        self.stats.total += 1

        if not self.is_supported(filepath.name):
            logger.debug(f"Unsupported extension: {filepath}")
            self.stats.skipped_extension += 1
            self.stats.skipped += 1
            return None

        try:
            entry = FileEntry.from_path(filepath)

            gate = self._size_gate(entry)
            if gate:
                if entry.size == 0:
                    logger.debug(f"Skipping {filepath}: {gate}")
                    self.stats.skipped_empty += 1
                else:
                    logger.warning(f"Skipping {filepath}: {gate}")
                    self.stats.skipped_size += 1
                self.stats.skipped += 1
                return None

            self._fill(entry, filepath)

        except (ExtractionError, OSError) as e:
            self._record_failure(filepath, getattr(e, "message", None) or str(e))
            return None

        except Exception as e:
            logger.exception(f"Unexpected error processing {filepath}")
            self._record_failure(filepath, str(e))
            return None

        self.stats.processed += 1
        return entry

    def _size_gate(self, entry: FileEntry) -> Optional[str]:
        """Reason why a file is outside the size gates, or None."""
        if entry.size == 0:
            return "empty file"
        if entry.size > self.max_file_size_bytes:
            return (
                f"file too large ({format_file_size(entry.size)} > "
                f"{format_file_size(self.max_file_size_bytes)})"
            )
        return None

    def _fill(self, entry: FileEntry, filepath: Path) -> None:
        """Extract a file's text and count its words on the entry."""
        result = self.extractor.extract(filepath, entry.extension)

        if result.status is ExtractionStatus.TEXT:
            self.tokenizer.build(result.text, entry)
            logger.debug(
                f"Indexed {filepath}: {entry.total_words} words, {entry.unique_words} unique"
            )
            return

        self.stats.without_content += 1

        if result.status is ExtractionStatus.EMPTY:
            logger.debug(f"No text in {filepath}")
        else:
            logger.warning(f"No content indexed for {filepath}: {result.status.value} ({result.detail})")

    def _record_failure(self, filepath: Path, reason: str) -> None:
        self.stats.failed += 1
        self.stats.skipped += 1
        self.stats.errors.append(f"{filepath}: {reason}")
        logger.error(f"Failed to process {filepath}: {reason}")

    def _on_walk_error(self, error: OSError) -> None:
        """Count directories that cannot be listed and keep walking."""
        self.stats.unreadable_directories += 1
        self.stats.errors.append(f"{error.filename}: {error.strerror}")
        logger.error(f"Cannot read directory {error.filename}: {error.strerror}")

"""
Main indexing pipeline for the File Indexer.

Orchestrates the complete indexing workflow: walking a directory tree,
extracting and counting words per file, and saving the resulting batch
to the database in a single transaction.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from ..core import FileEntry, get_logger
from ..database import FileRepository
from .file_walker import FileWalker

logger = get_logger(__name__)


@dataclass
class IndexingStats:
    """Statistics from an indexing run."""
    files_scanned: int = 0
    files_indexed: int = 0
    files_skipped: int = 0
    files_failed: int = 0
    files_without_content: int = 0
    directories_failed: int = 0
    files_saved: int = 0
    content_rows: int = 0
    total_words: int = 0
    elapsed_seconds: float = 0.0
    errors: List[str] = field(default_factory=list)


class IndexBuilder:
    """
    Orchestrates the indexing pipeline.

    A directory run produces one batch: if saving fails, nothing from the
    run is committed and the DatabaseError propagates.
    """

    def __init__(self, walker: FileWalker, repository: FileRepository):
        """
        Initialize the index builder.

        Args:
            walker: Configured tree walker.
            repository: Repository receiving the batch.
        """
        self.walker = walker
        self.repository = repository

    def index_directory(self, directory: Union[str, Path]) -> IndexingStats:
        """
        Walk a directory and persist every processed file.

        Args:
            directory: Root directory, as typed by the user.

        Returns:
            IndexingStats with counts and any per-file errors.

        Raises:
            ValidationError: If the directory is invalid (store untouched).
            DatabaseError: If the batch cannot be saved (rolled back).
        """
        started = time.time()
        stats = IndexingStats()

        logger.info(f"Starting indexing of {directory}")

        entries = self.walker.walk(directory)
        walk_stats = self.walker.stats

        stats.files_scanned = walk_stats.total
        stats.files_indexed = walk_stats.processed
        stats.files_skipped = walk_stats.skipped
        stats.files_failed = walk_stats.failed
        stats.files_without_content = walk_stats.without_content
        stats.directories_failed = walk_stats.unreadable_directories
        stats.errors = list(walk_stats.errors)
        stats.total_words = sum(entry.total_words for entry in entries)

        if entries:
            stats.content_rows = self.repository.save_batch(entries)
            stats.files_saved = len(entries)
        else:
            logger.warning(f"No files to index in {directory}")

        stats.elapsed_seconds = round(time.time() - started, 3)

        logger.info(
            f"Indexing complete: {stats.files_saved} files saved, "
            f"{stats.content_rows} content rows, {stats.files_skipped} skipped "
            f"in {stats.elapsed_seconds}s"
        )

        return stats

    def index_file(self, filepath: Union[str, Path]) -> FileEntry:
        """
        Index a single file, replacing any previous entry for its path.

        Args:
            filepath: Path to the file.

        Returns:
            The saved entry, with its store id set.
        """
        entry = self.walker.process_file(filepath)
        self.repository.save(entry)

        logger.info(f"Indexed {entry.path}: {entry.total_words} words")
        return entry

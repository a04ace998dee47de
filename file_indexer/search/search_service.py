"""
Search facade over the file repository.

Exposes name, content and path lookups. Path-based variants hydrate the
word counts of every result; name and content search return metadata
only and leave hydration to the caller. Store failures surface as a
single SearchError, without retry.
"""

import sqlite3
from contextlib import contextmanager
from typing import Generator, List, Optional

from ..core import FileEntry, get_logger, DatabaseError, SearchError, ValidationError
from ..database import FileRepository
from ..utils import to_store_path
from .models import SearchType

logger = get_logger(__name__)


class SearchService:
    """
    Query facade used by the command line layer.

    Provides name, content and path search plus index maintenance
    (count, clear, statistics).
    """

    def __init__(self, repository: FileRepository):
        """
        Initialize the search service.

        Args:
            repository: Repository answering the queries.
        """
        self.repository = repository

    def search(self, query: str, search_type: SearchType) -> List[FileEntry]:
        """
        Run a metadata-only search.

        Args:
            query: Substring to look for.
            search_type: FILE_NAME or CONTENT.

        Returns:
            Matching entries with empty word counts.
        """
        if search_type is SearchType.FILE_NAME:
            return self.search_by_name(query)
        if search_type is SearchType.CONTENT:
            return self.search_by_content(query)
        raise ValueError(f"Unknown search type: {search_type}")

    def search_by_name(self, name: str) -> List[FileEntry]:
        """Files whose name contains the query."""
        name = self._require(name)
        with self._translate_errors(name, "name search"):
            results = self.repository.search_by_name(name)
        logger.info(f"Name search '{name}': {len(results)} results")
        return results

    def search_by_content(self, word: str) -> List[FileEntry]:
        """Files containing matching words, by descending summed count."""
        word = self._require(word)
        with self._translate_errors(word, "content search"):
            results = self.repository.search_by_content(word)
        logger.info(f"Content search '{word}': {len(results)} results")
        return results

    def find_by_path(self, path: str) -> Optional[FileEntry]:
        """Single file by exact path, hydrated."""
        path = self._require(path)
        with self._translate_errors(path, "path lookup"):
            return self.repository.find_by_path(path)

    def search_by_exact_path(self, path: str) -> List[FileEntry]:
        """Files stored under exactly this path, hydrated."""
        path = self._require(path)
        with self._translate_errors(path, "exact path search"):
            return self._hydrated(self.repository.search_by_exact_path(path))

    def search_by_partial_path(self, partial_path: str) -> List[FileEntry]:
        """Files whose path or name contains the query, hydrated."""
        partial_path = self._require(partial_path)
        with self._translate_errors(partial_path, "partial path search"):
            return self._hydrated(self.repository.search_by_partial_path(partial_path))

    def search_by_partial_name(self, name: str) -> List[FileEntry]:
        """Files whose name contains the input's last component, hydrated."""
        name = self._require(name)
        with self._translate_errors(name, "partial name search"):
            return self._hydrated(self.repository.search_by_name_partial(name))

    def find_file_details(self, query: str) -> List[FileEntry]:
        """
        Locate files from a path or name typed by a user.

        Tries an exact path match, then a partial path match, then a
        match on the file name extracted from the input.

        Args:
            query: Path or file name, either separator convention.

        Returns:
            Hydrated entries from the first strategy that finds anything.
        """
        query = to_store_path(self._require(query))

        for strategy in (
            self.search_by_exact_path,
            self.search_by_partial_path,
            self.search_by_partial_name
        ):
            results = strategy(query)
            if results:
                return results

        logger.info(f"No indexed file matches '{query}'")
        return []

    def load_word_counts(self, entry: FileEntry) -> FileEntry:
        """Hydrate one entry's word counts."""
        with self._translate_errors(entry.path, "word count loading"):
            return self.repository.load_word_counts(entry)

    def count_indexed_files(self) -> int:
        with self._translate_errors(None, "file count"):
            return self.repository.count_files()

    def clear_index(self) -> None:
        with self._translate_errors(None, "index clearing"):
            self.repository.clear()

    def get_statistics(self) -> dict:
        with self._translate_errors(None, "statistics"):
            return self.repository.get_statistics()

    def _hydrated(self, entries: List[FileEntry]) -> List[FileEntry]:
        self.repository.load_word_counts_for(entries)
        return entries

    @staticmethod
    def _require(query: str) -> str:
        if query is None or not query.strip():
            raise ValidationError(
                "Search query cannot be empty",
                suggestion="Enter part of a file name, a path or a word"
            )
        return query.strip()

    @staticmethod
    @contextmanager
    def _translate_errors(query: Optional[str], operation: str) -> Generator[None, None, None]:
        """Convert store failures into SearchError."""
        try:
            yield
        except (DatabaseError, sqlite3.Error) as e:
            message = getattr(e, "message", None) or str(e)
            logger.error(f"{operation} failed: {message}")
            raise SearchError(
                f"{operation.capitalize()} failed: {message}",
                query=query
            ) from e

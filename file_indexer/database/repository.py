"""
File repository for batched writes and lookups on the files/contents tables.

Batch saves are atomic: every metadata and content write of a batch runs
in one transaction and a failure rolls back the whole batch. Metadata
queries never load word counts; load_word_counts() hydrates an entry on
demand.
"""

import sqlite3
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..core import FileEntry, get_logger, DatabaseError
from ..utils import to_store_path
from .connection import DatabaseManager
from .schema import get_statistics

logger = get_logger(__name__)

DEFAULT_CONTENT_BATCH_SIZE = 500

LIKE_ESCAPE = "\\"

UPSERT_FILE_SQL = """
    INSERT INTO files (path, name, size, last_modified, extension)
    VALUES (?, ?, ?, ?, ?)
    ON CONFLICT(path) DO UPDATE SET
        name = excluded.name,
        size = excluded.size,
        last_modified = excluded.last_modified,
        extension = excluded.extension,
        indexed_at = CURRENT_TIMESTAMP
"""

INSERT_CONTENT_SQL = "INSERT INTO contents (file_id, word, count) VALUES (?, ?, ?)"

FILE_COLUMNS = (
    "f.id AS id, f.path AS path, f.name AS name, f.size AS size, "
    "f.last_modified AS last_modified, f.extension AS extension"
)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(value: str) -> str:
    """Build a LIKE pattern matching any string containing value."""
    return f"%{escape_like(value)}%"


class FileRepository:
    """
    Repository for FileEntry persistence and lookup.

    Wraps an explicitly constructed DatabaseManager; all sqlite3 errors
    surface as DatabaseError.
    """

    def __init__(self, db: DatabaseManager, content_batch_size: int = DEFAULT_CONTENT_BATCH_SIZE):
        """
        Initialize the repository.

        Args:
            db: Database manager owning the shared connection.
            content_batch_size: Number of content rows sent per executemany call.
        """
        self.db = db
        self.content_batch_size = content_batch_size

    def save_batch(self, entries: List[FileEntry]) -> int:
        """
        Persist a batch of entries in a single transaction.

        Each file row is upserted by path and the store id is written back
        to the entry. Existing content rows of each file are replaced by
        the entry's current frequency map.

        Args:
            entries: Entries to persist.

        Returns:
            Number of content rows written.

        Raises:
            DatabaseError: If any statement fails; nothing is committed.
        """
        if not entries:
            return 0

        logger.info(f"Saving batch of {len(entries)} files")

        assigned: List[Tuple[FileEntry, int]] = []
        rows_written = 0

        try:
            with self.db.transaction() as conn:
                for entry in entries:
                    file_id = self._upsert_file(conn, entry)
                    assigned.append((entry, file_id))

                pending: List[Tuple[int, str, int]] = []

                for entry, file_id in assigned:
                    conn.execute("DELETE FROM contents WHERE file_id = ?", (file_id,))

                    for word, count in entry.word_counts.items():
                        pending.append((file_id, word, count))

                        if len(pending) >= self.content_batch_size:
                            conn.executemany(INSERT_CONTENT_SQL, pending)
                            rows_written += len(pending)
                            pending.clear()

                if pending:
                    conn.executemany(INSERT_CONTENT_SQL, pending)
                    rows_written += len(pending)

        except sqlite3.Error as e:
            logger.error(f"Batch save failed, transaction rolled back: {e}")
            raise DatabaseError(
                f"Failed to save batch: {e}",
                {"batch_size": len(entries)}
            )

        for entry, file_id in assigned:
            entry.id = file_id

        logger.info(f"Saved {len(entries)} files, {rows_written} content rows")
        return rows_written

    def save(self, entry: FileEntry) -> int:
        """Persist a single entry (a batch of one)."""
        return self.save_batch([entry])

    @staticmethod
    def _upsert_file(conn: sqlite3.Connection, entry: FileEntry) -> int:
        """Insert or replace the metadata row of an entry and return its id."""
        path = to_store_path(entry.path)

        conn.execute(UPSERT_FILE_SQL, (
            path,
            entry.file_name,
            entry.size,
            entry.last_modified,
            entry.extension
        ))

        row = conn.execute("SELECT id FROM files WHERE path = ?", (path,)).fetchone()
        return row["id"]

    def find_by_path(self, path: Union[str, Path]) -> Optional[FileEntry]:
        """
        Fetch a single file by exact path, with word counts loaded.

        Args:
            path: File path, either separator convention.

        Returns:
            Hydrated FileEntry or None.
        """
        entries = self.search_by_exact_path(path)
        if not entries:
            return None

        entry = entries[0]
        self.load_word_counts(entry)
        return entry

    def search_by_exact_path(self, path: Union[str, Path]) -> List[FileEntry]:
        """Files whose stored path equals the normalized input."""
        return self._query_files(
            f"SELECT {FILE_COLUMNS} FROM files f WHERE f.path = ?",
            (to_store_path(path),)
        )

    def search_by_partial_path(self, partial_path: str) -> List[FileEntry]:
        """Files whose path or name contains the normalized input."""
        pattern = contains_pattern(to_store_path(partial_path))
        return self._query_files(
            f"""
            SELECT {FILE_COLUMNS} FROM files f
            WHERE f.path LIKE ? ESCAPE '{LIKE_ESCAPE}'
               OR f.name LIKE ? ESCAPE '{LIKE_ESCAPE}'
            ORDER BY f.path
            """,
            (pattern, pattern)
        )

    def search_by_name(self, name: str) -> List[FileEntry]:
        """Files whose name contains the given text."""
        return self._query_files(
            f"""
            SELECT {FILE_COLUMNS} FROM files f
            WHERE f.name LIKE ? ESCAPE '{LIKE_ESCAPE}'
            ORDER BY f.name
            """,
            (contains_pattern(name),)
        )

    def search_by_name_partial(self, name: str) -> List[FileEntry]:
        """Files whose name contains the last path component of the input."""
        file_name = to_store_path(name).rstrip("/").rsplit("/", 1)[-1]
        return self.search_by_name(file_name)

    def search_by_content(self, word: str) -> List[FileEntry]:
        """
        Files containing words that match a substring, most relevant first.

        Relevance is the sum of the counts of all matching content rows
        of a file and is stored on each returned entry.

        Args:
            word: Substring matched against stored (lowercase) words.

        Returns:
            FileEntry list ordered by descending relevance.
        """
        rows = self._fetch_all(
            f"""
            SELECT {FILE_COLUMNS}, SUM(c.count) AS relevance
            FROM files f
            JOIN contents c ON c.file_id = f.id
            WHERE c.word LIKE ? ESCAPE '{LIKE_ESCAPE}'
            GROUP BY f.id
            ORDER BY relevance DESC
            """,
            (contains_pattern(word.lower()),)
        )

        results = []
        for row in rows:
            entry = self._row_to_entry(row)
            entry.relevance = row["relevance"]
            results.append(entry)

        return results

    def load_word_counts(self, entry: FileEntry) -> FileEntry:
        """
        Hydrate an entry's frequency map from the store.

        Entries that were never persisted (id is None) are left untouched.

        Args:
            entry: Entry to hydrate in place.

        Returns:
            The same entry.
        """
        if entry.id is None:
            return entry

        rows = self._fetch_all(
            "SELECT word, count FROM contents WHERE file_id = ?",
            (entry.id,)
        )

        word_counts: Dict[str, int] = {}
        for row in rows:
            word_counts[row["word"]] = row["count"]

        entry.word_counts = word_counts
        return entry

    def load_word_counts_for(self, entries: Iterable[FileEntry]) -> None:
        """Hydrate every entry of a result set (one query per entry)."""
        for entry in entries:
            self.load_word_counts(entry)

    def count_files(self) -> int:
        """
        Get total indexed file count.

        Returns:
            Number of rows in the files table.
        """
        row = self._fetch_one("SELECT COUNT(*) AS count FROM files")
        return row["count"]

    def count_words(self) -> int:
        """Number of (file, word, count) content rows."""
        row = self._fetch_one("SELECT COUNT(*) AS count FROM contents")
        return row["count"]

    def clear(self) -> None:
        """Delete every content and file row in one transaction."""
        try:
            with self.db.transaction() as conn:
                conn.execute("DELETE FROM contents")
                conn.execute("DELETE FROM files")
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to clear index: {e}")

        logger.info("Index cleared")

    def get_statistics(self) -> dict:
        try:
            return get_statistics(self.db)
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to read statistics: {e}")

    def _query_files(self, sql: str, params: tuple = ()) -> List[FileEntry]:
        return [self._row_to_entry(row) for row in self._fetch_all(sql, params)]

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            with self.db.connection() as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(f"Query failed: {e}", {"sql": " ".join(sql.split())})

    def _fetch_one(self, sql: str, params: tuple = ()) -> sqlite3.Row:
        try:
            with self.db.connection() as conn:
                return conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(f"Query failed: {e}", {"sql": " ".join(sql.split())})

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> FileEntry:
        """Convert a database row to a metadata-only FileEntry."""
        return FileEntry(
            id=row["id"],
            path=row["path"],
            file_name=row["name"],
            size=row["size"],
            last_modified=row["last_modified"],
            extension=row["extension"]
        )

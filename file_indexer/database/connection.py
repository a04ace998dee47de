"""
SQLite connection management for the File Indexer.

A DatabaseManager owns one persistent connection for the lifetime of the
process. All access is serialized through a re-entrant lock, so a single
writer is guaranteed even if a caller shares the manager across threads.
"""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union

from ..core import get_config, get_logger, DatabaseError
from ..utils import ensure_directory

logger = get_logger(__name__)

MEMORY_DATABASE = ":memory:"
DEFAULT_TIMEOUT_SECONDS = 30.0


class DatabaseManager:
    """
    Manages the SQLite connection with proper lifecycle handling.

    Enables foreign keys (needed for content row cascades) and provides
    context managers for transactional writes and plain reads.
    """

    def __init__(self, db_path: Union[str, Path] = None, timeout: float = None):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file, or ":memory:".
                     Defaults to config value.
            timeout: Seconds to wait on a locked database. Defaults to config value.
        """
        if db_path is None:
            config = get_config()
            db_path = config.paths.database_path
            if timeout is None:
                timeout = config.database.timeout_seconds

        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS

        if str(db_path) == MEMORY_DATABASE:
            self.db_path = MEMORY_DATABASE
        else:
            self.db_path = Path(db_path)
            ensure_directory(self.db_path.parent)

        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with optimal settings."""
        try:
            conn = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=self.timeout
            )

            conn.row_factory = sqlite3.Row

            conn.execute("PRAGMA foreign_keys=ON")
            conn.execute("PRAGMA synchronous=NORMAL")
            conn.execute("PRAGMA temp_store=MEMORY")

            if self.db_path != MEMORY_DATABASE:
                conn.execute("PRAGMA journal_mode=WAL")

            logger.debug(f"Opened database connection: {self.db_path}")
            return conn

        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to connect to database: {e}",
                {"path": str(self.db_path)}
            )

    def get_connection(self) -> sqlite3.Connection:
        """Return the live connection, opening it on first use."""
        with self._lock:
            if self._connection is None:
                self._connection = self._create_connection()
            return self._connection

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for read access to the shared connection.

        Yields:
            SQLite connection with Row factory enabled.
        """
        with self._lock:
            yield self.get_connection()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager wrapping a block in a single transaction.

        Commits on success. Any exception rolls back every statement
        executed inside the block and is re-raised.

        Yields:
            SQLite connection inside an open transaction.
        """
        with self._lock:
            conn = self.get_connection()
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    @contextmanager
    def cursor(self, commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
        """
        Context manager for database cursors with automatic commit/rollback.

        Args:
            commit: Whether to commit on successful exit.

        Yields:
            SQLite cursor for query execution.
        """
        with self._lock:
            conn = self.get_connection()
            cursor = conn.cursor()

            try:
                yield cursor
                if commit:
                    conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                cursor.close()

    def close(self) -> None:
        """Close the shared connection if open."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logger.debug(f"Closed database connection: {self.db_path}")

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

"""
Database schema definitions for the File Indexer.

Defines the files table (one row per indexed file, unique by path) and
the contents table (one row per file/word pair) with cascading deletes.
"""

import sqlite3

from ..core import get_logger, DatabaseError
from .connection import DatabaseManager

logger = get_logger(__name__)


FILES_TABLE = """
CREATE TABLE IF NOT EXISTS files (
    id INTEGER PRIMARY KEY,
    path TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    size INTEGER NOT NULL,
    last_modified INTEGER NOT NULL,
    extension TEXT NOT NULL,
    indexed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

CONTENTS_TABLE = """
CREATE TABLE IF NOT EXISTS contents (
    id INTEGER PRIMARY KEY,
    file_id INTEGER NOT NULL,
    word TEXT NOT NULL,
    count INTEGER NOT NULL,
    FOREIGN KEY (file_id) REFERENCES files(id) ON DELETE CASCADE
)
"""

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_files_path ON files(path)",
    "CREATE INDEX IF NOT EXISTS idx_files_name ON files(name)",
    "CREATE INDEX IF NOT EXISTS idx_contents_word ON contents(word)",
    "CREATE INDEX IF NOT EXISTS idx_contents_file ON contents(file_id)"
]


def init_schema(db: DatabaseManager) -> None:
    """
    Initialize database schema if not exists.

    Args:
        db: Database manager owning the connection.

    Raises:
        DatabaseError: If a DDL statement fails.
    """
    logger.debug("Initializing database schema")

    try:
        with db.cursor() as cur:
            cur.execute(FILES_TABLE)
            cur.execute(CONTENTS_TABLE)

            for index_sql in INDEXES:
                cur.execute(index_sql)
    except sqlite3.Error as e:
        raise DatabaseError(f"Failed to initialize schema: {e}")

    logger.debug("Schema initialization complete")


def get_statistics(db: DatabaseManager) -> dict:
    """
    Get database statistics for display.

    Args:
        db: Database manager owning the connection.

    Returns:
        Dictionary with file, row and word counts and size info.
    """
    with db.connection() as conn:
        stats = {}

        row = conn.execute("SELECT COUNT(*) AS count, SUM(size) AS total FROM files").fetchone()
        stats["total_files"] = row["count"]
        stats["total_size_bytes"] = row["total"] or 0

        row = conn.execute("SELECT COUNT(*) AS count FROM contents").fetchone()
        stats["content_rows"] = row["count"]

        row = conn.execute("SELECT COUNT(DISTINCT word) AS count FROM contents").fetchone()
        stats["distinct_words"] = row["count"]

        row = conn.execute("SELECT MAX(indexed_at) AS newest FROM files").fetchone()
        stats["last_indexed"] = row["newest"]

        stats["database_path"] = str(db.db_path)

    return stats

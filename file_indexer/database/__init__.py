"""
Database module for SQLite persistence of file metadata and word counts.

Provides connection management, schema definitions, and the batched
repository used by the indexer and the search service.
"""

from .connection import DatabaseManager
from .schema import init_schema, get_statistics
from .repository import FileRepository

__all__ = [
    "DatabaseManager",
    "init_schema",
    "get_statistics",
    "FileRepository"
]

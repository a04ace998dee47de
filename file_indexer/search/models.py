"""
Data models for search functionality.
"""

from enum import Enum


class SearchType(Enum):
    """Kinds of metadata-only search exposed by SearchService.search()."""
    FILE_NAME = "name"
    CONTENT = "content"

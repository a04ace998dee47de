"""
Search module providing name, content and path lookups over the index.
"""

from .models import SearchType
from .search_service import SearchService

__all__ = [
    "SearchType",
    "SearchService"
]

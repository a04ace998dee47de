"""
Utility module providing shared helper functions.

Contains path normalization, file operations and text processing
utilities used across the application. Depends only on the core module.
"""

from .path_utils import (
    normalize_path,
    to_store_path,
    suggest_path_correction,
    validate_directory,
    get_extension
)
from .file_utils import (
    format_file_size,
    ensure_directory
)
from .text_utils import (
    collapse_whitespace,
    split_lines,
    truncate_text
)

__all__ = [
    "normalize_path",
    "to_store_path",
    "suggest_path_correction",
    "validate_directory",
    "get_extension",
    "format_file_size",
    "ensure_directory",
    "collapse_whitespace",
    "split_lines",
    "truncate_text"
]

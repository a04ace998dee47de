"""
File utility functions for the File Indexer.

Provides byte-size formatting for logs and console output, and
directory management.
"""

from pathlib import Path
from typing import Union


def format_file_size(size_bytes: int) -> str:
    """
    Format a byte count for display.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Human readable size, e.g. "1.5 MB".
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 ** 2:
        return f"{size_bytes / 1024:.1f} KB"
    if size_bytes < 1024 ** 3:
        return f"{size_bytes / 1024 ** 2:.1f} MB"
    return f"{size_bytes / 1024 ** 3:.1f} GB"


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create directory tree if it doesn't exist.

    Args:
        path: Directory path to create.

    Returns:
        Path object of the directory.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path

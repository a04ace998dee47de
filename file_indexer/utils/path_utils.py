"""
Path normalization and validation for user-supplied paths.

Paths are canonicalized (slash direction, duplicate and trailing slashes)
before any filesystem or store operation, and rejected with a corrective
suggestion when unusable.
"""

import os
import re
from pathlib import Path
from typing import Union

from ..core.exceptions import ValidationError
from ..core.models import get_extension

_DUPLICATE_SLASHES = re.compile(r"/{2,}")
_DRIVE_ONLY = re.compile(r"^[A-Za-z]:$")
_ROOT = re.compile(r"^([A-Za-z]:)?/$")
_FORBIDDEN_CHARS = re.compile(r'[<>"|?*]')

EXAMPLE_PATH = "D:/documents/books"


def normalize_path(raw_path: str) -> str:
    """
    Canonicalize a user-supplied path string.

    Converts backslashes to forward slashes, collapses duplicate slashes,
    drops a trailing slash (except on a root) and completes bare drive
    letters ("C:" becomes "C:/").

    Args:
        raw_path: Path as typed by the user.

    Returns:
        Normalized path string.

    Raises:
        ValidationError: If the path is empty or blank.
    """
    if raw_path is None or not str(raw_path).strip():
        raise ValidationError(
            "Path cannot be empty",
            suggestion=f"Example of a valid path: {EXAMPLE_PATH}"
        )

    normalized = str(raw_path).strip().replace("\\", "/")
    normalized = _DUPLICATE_SLASHES.sub("/", normalized)

    if _DRIVE_ONLY.match(normalized):
        return normalized + "/"

    if normalized.endswith("/") and not _ROOT.match(normalized):
        normalized = normalized.rstrip("/")

    return normalized


def to_store_path(path: Union[str, Path]) -> str:
    """Convert a path to the separator convention used by the store."""
    return str(path).replace("\\", "/")


def suggest_path_correction(raw_path: str) -> str:
    """
    Build a user-facing hint explaining how to fix a path.

    Args:
        raw_path: The rejected path.

    Returns:
        Multi-line suggestion text (empty for None).
    """
    if raw_path is None:
        return ""

    hints = []

    if "\\" in raw_path and "/" not in raw_path:
        hints.append("Backslashes detected, forward slashes are recommended")
    if "//" in raw_path.replace("\\", "/"):
        hints.append("Duplicate slashes detected, remove the extra slashes")
    if raw_path.endswith(("/", "\\")) and len(raw_path.strip("/\\")) > 0:
        hints.append("Path ends with a slash, remove the trailing slash")
    if _FORBIDDEN_CHARS.search(raw_path):
        hints.append('Path contains forbidden characters: < > " | ? *')

    corrected = raw_path.strip().replace("\\", "/")
    corrected = _DUPLICATE_SLASHES.sub("/", corrected)
    if len(corrected) > 1 and corrected.endswith("/"):
        corrected = corrected.rstrip("/")

    hints.append(f"Try: {corrected}")
    hints.append(f"Example of a valid path: {EXAMPLE_PATH}")

    return "\n".join(f"- {hint}" for hint in hints)


def validate_directory(raw_path: str) -> Path:
    """
    Normalize a path and check that it is a readable directory.

    Args:
        raw_path: Directory path as typed by the user.

    Returns:
        Absolute Path of the directory (symlinks are not resolved).

    Raises:
        ValidationError: If the path is empty, missing, not a directory
                         or not readable.
    """
    normalized = normalize_path(raw_path)
    path = Path(os.path.abspath(normalized))

    if not path.exists():
        raise ValidationError(
            f"Directory does not exist: {path}",
            suggestion=suggest_path_correction(raw_path),
            details={"path": str(path)}
        )

    if not path.is_dir():
        raise ValidationError(
            f"Path is not a directory: {path}",
            suggestion="Point to the folder containing the file, not the file itself",
            details={"path": str(path)}
        )

    if not os.access(path, os.R_OK | os.X_OK):
        raise ValidationError(
            f"Directory is not readable: {path}",
            suggestion="Check the access permissions of the directory",
            details={"path": str(path)}
        )

    return path


__all__ = [
    "normalize_path",
    "to_store_path",
    "suggest_path_correction",
    "validate_directory",
    "get_extension"
]

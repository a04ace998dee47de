"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
the FileEntry model and the custom exception hierarchy. It has no internal
dependencies.
"""

from .config_loader import get_config, reload_config, Config
from .logger import get_logger, configure_logging
from .models import FileEntry
from .exceptions import (
    FileIndexerError,
    ConfigurationError,
    ValidationError,
    ExtractionError,
    EncryptedDocumentError,
    DatabaseError,
    SearchError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "get_logger",
    "configure_logging",
    "FileEntry",
    "FileIndexerError",
    "ConfigurationError",
    "ValidationError",
    "ExtractionError",
    "EncryptedDocumentError",
    "DatabaseError",
    "SearchError"
]

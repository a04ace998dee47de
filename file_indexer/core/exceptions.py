"""
Custom exception hierarchy for the File Indexer.

Provides specific exception types for different failure modes:
configuration errors, path validation, extraction failures,
database issues, and search problems.
"""


class FileIndexerError(Exception):
    """Base exception for all File Indexer errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FileIndexerError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(FileIndexerError):
    """Raised when user input (typically a path) is rejected before any I/O."""

    def __init__(self, message: str, suggestion: str = None, details: dict = None):
        """
        Initialize validation error.

        Args:
            message: Error description.
            suggestion: Corrective hint shown to the user.
            details: Additional context.
        """
        super().__init__(message, details)
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\n{self.suggestion}"
        return self.message


class ExtractionError(FileIndexerError):
    """Raised when text extraction from a file fails."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            filepath: Path to the problematic file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class DatabaseError(FileIndexerError):
    """Raised when SQLite operations fail."""
    pass


class SearchError(FileIndexerError):
    """Raised when search query execution fails."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query


class EncryptedDocumentError(ExtractionError):
    """Raised by a backend when a document is encrypted and cannot be read."""
    pass

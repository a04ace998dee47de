"""
Configuration loader for the File Indexer.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError


DEFAULT_EXTENSIONS = [
    "txt", "java", "xml", "json", "csv", "md", "properties",
    "html", "htm", "css", "js", "py", "cpp", "c", "h",
    "sql", "log", "cfg", "conf", "ini", "docx", "pdf", "rtf",
    "doc", "odt", "epub", "fb2"
]

DEFAULT_ENCODINGS = ["utf-8", "cp1251", "koi8-r", "latin-1"]

PDF_BACKENDS = frozenset({"pdfplumber", "pypdf"})


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    database_path: Path
    logs_directory: Path


@dataclass
class IndexingConfig:
    """Configuration for tree walking and tokenization limits."""
    supported_extensions: List[str]
    max_file_size_mb: int
    max_text_chars: int
    max_line_chars: int
    max_unique_words: int
    log_progress_every: int


@dataclass
class ExtractionConfig:
    """Configuration for content extraction settings."""
    text_encodings: List[str]
    pdf_primary_backend: str
    pdf_fallback_backend: str


@dataclass
class DatabaseConfig:
    """Configuration for the SQLite store."""
    content_batch_size: int
    timeout_seconds: float


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    indexing: IndexingConfig
    extraction: ExtractionConfig
    database: DatabaseConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls.from_dict(data, project_root)

    @classmethod
    def from_dict(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            database_path=cls._resolve_path(paths_data.get("database_path", "output/file_indexer.db"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        idx_data = data.get("indexing", {})
        indexing = IndexingConfig(
            supported_extensions=idx_data.get("supported_extensions", list(DEFAULT_EXTENSIONS)),
            max_file_size_mb=idx_data.get("max_file_size_mb", 50),
            max_text_chars=idx_data.get("max_text_chars", 100_000),
            max_line_chars=idx_data.get("max_line_chars", 10_000),
            max_unique_words=idx_data.get("max_unique_words", 100_000),
            log_progress_every=idx_data.get("log_progress_every", 100)
        )

        ext_data = data.get("extraction", {})
        extraction = ExtractionConfig(
            text_encodings=ext_data.get("text_encodings", list(DEFAULT_ENCODINGS)),
            pdf_primary_backend=ext_data.get("pdf_primary_backend", "pdfplumber"),
            pdf_fallback_backend=ext_data.get("pdf_fallback_backend", "pypdf")
        )

        db_data = data.get("database", {})
        database = DatabaseConfig(
            content_batch_size=db_data.get("content_batch_size", 500),
            timeout_seconds=db_data.get("timeout_seconds", 30.0)
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        cls._validate(indexing, extraction, database)

        return cls(
            paths=paths,
            indexing=indexing,
            extraction=extraction,
            database=database,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _validate(indexing: IndexingConfig, extraction: ExtractionConfig, database: DatabaseConfig) -> None:
        """
        Check value ranges and normalize the extension allow-list.

        Raises:
            ConfigurationError: On a non-positive limit or unknown PDF backend.
        """
        indexing.supported_extensions = [
            ext.lower().lstrip(".") for ext in indexing.supported_extensions if ext
        ]

        limits = {
            "indexing.max_file_size_mb": indexing.max_file_size_mb,
            "indexing.max_text_chars": indexing.max_text_chars,
            "indexing.max_line_chars": indexing.max_line_chars,
            "indexing.max_unique_words": indexing.max_unique_words,
            "database.content_batch_size": database.content_batch_size,
        }
        for key, value in limits.items():
            if value <= 0:
                raise ConfigurationError(f"{key} must be positive", {"value": value})

        if extraction.pdf_primary_backend not in PDF_BACKENDS:
            raise ConfigurationError(
                f"Unknown PDF backend: {extraction.pdf_primary_backend}",
                {"allowed": sorted(PDF_BACKENDS)}
            )

        if extraction.pdf_fallback_backend and extraction.pdf_fallback_backend not in PDF_BACKENDS:
            raise ConfigurationError(
                f"Unknown PDF backend: {extraction.pdf_fallback_backend}",
                {"allowed": sorted(PDF_BACKENDS)}
            )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)

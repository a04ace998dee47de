"""
Centralized logging setup for the File Indexer.

Console output goes to stderr so that search results printed on stdout
stay clean; a rotating file keeps the full history. The PDF libraries
log per-object parser noise, so their loggers are capped at WARNING.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

LOG_FILE_NAME = "file_indexer.log"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

NOISY_LOGGERS = ("pdfminer", "pdfplumber", "pypdf")

_logger_initialized = False
_installed_handlers: List[logging.Handler] = []


def setup_logging(
    log_level: str = "INFO",
    log_format: str = DEFAULT_FORMAT,
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    force: bool = False
) -> None:
    """
    Install the console and rotating file handlers on the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ...).
        log_format: Format string for log records.
        logs_directory: Directory for file_indexer.log. None disables file logging.
        max_file_size_mb: Size at which the log file rotates.
        backup_count: Number of rotated files kept.
        force: Replace handlers installed by an earlier call instead of
               returning early.
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    root_logger = logging.getLogger()

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    _installed_handlers.append(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILE_NAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_initialized = True


def configure_logging(config, force: bool = True) -> None:
    """Apply the logging section and logs directory of a Config."""
    setup_logging(
        log_level=config.logging.level,
        log_format=config.logging.format,
        logs_directory=config.paths.logs_directory,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        force=force
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, initializing logging from config on first use.

    Falls back to console-only logging when no config can be loaded.
    """
    if not _logger_initialized:
        try:
            from .config_loader import get_config
            configure_logging(get_config(), force=False)
        except Exception:
            setup_logging()

    return logging.getLogger(name)

"""
Application wiring for the File Indexer.

Builds every component from one Config and hands them out together, so
callers receive their collaborators explicitly instead of looking them
up globally.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .core import Config, get_config, get_logger
from .database import DatabaseManager, FileRepository, init_schema
from .extraction import ContentExtractor
from .indexer import FileWalker, IndexBuilder, Tokenizer
from .search import SearchService

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Fully wired components sharing one database connection."""
    config: Config
    db: DatabaseManager
    repository: FileRepository
    extractor: ContentExtractor
    tokenizer: Tokenizer
    walker: FileWalker
    builder: IndexBuilder
    search: SearchService

    def close(self) -> None:
        """Release the database connection."""
        self.db.close()

    def __enter__(self) -> "AppContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def build_context(config: Config = None, db_path: Union[str, Path] = None) -> AppContext:
    """
    Build the application components and initialize the schema.

    Args:
        config: Configuration to use. Defaults to get_config().
        db_path: Overrides config.paths.database_path (":memory:" allowed).

    Returns:
        AppContext ready for indexing and search.

    Raises:
        ConfigurationError: If no configuration can be loaded.
        DatabaseError: If the store cannot be opened or initialized.
    """
    if config is None:
        config = get_config()

    db = DatabaseManager(
        db_path if db_path is not None else config.paths.database_path,
        timeout=config.database.timeout_seconds
    )
    init_schema(db)

    repository = FileRepository(db, content_batch_size=config.database.content_batch_size)

    extractor = ContentExtractor.from_settings(
        encodings=config.extraction.text_encodings,
        pdf_primary_backend=config.extraction.pdf_primary_backend,
        pdf_fallback_backend=config.extraction.pdf_fallback_backend,
        max_pdf_chars=config.indexing.max_text_chars
    )

    tokenizer = Tokenizer(
        max_text_chars=config.indexing.max_text_chars,
        max_line_chars=config.indexing.max_line_chars,
        max_unique_words=config.indexing.max_unique_words
    )

    walker = FileWalker(
        extensions=config.indexing.supported_extensions,
        extractor=extractor,
        tokenizer=tokenizer,
        max_file_size_mb=config.indexing.max_file_size_mb,
        log_progress_every=config.indexing.log_progress_every
    )

    logger.debug(f"Application context built on {db.db_path}")

    return AppContext(
        config=config,
        db=db,
        repository=repository,
        extractor=extractor,
        tokenizer=tokenizer,
        walker=walker,
        builder=IndexBuilder(walker, repository),
        search=SearchService(repository)
    )

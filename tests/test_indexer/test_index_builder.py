"""
Tests for the index building pipeline.

SAFETY NOTE: All tests use the `repository` fixture backed by a
temporary database and sample trees under tempfile.mkdtemp().
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from file_indexer.core.exceptions import DatabaseError, ValidationError
from file_indexer.indexer import FileWalker, IndexBuilder, IndexingStats


@pytest.fixture
def builder(repository) -> IndexBuilder:
    walker = FileWalker(extensions=["txt", "md", "docx"])
    return IndexBuilder(walker, repository)


class TestIndexingStats:
    def test_default_values(self):
        stats = IndexingStats()

        assert stats.files_scanned == 0
        assert stats.files_saved == 0
        assert stats.errors == []


class TestIndexDirectory:
    """Tests for IndexBuilder.index_directory."""

    def test_indexes_sample_tree(self, builder: IndexBuilder, repository, sample_tree: Path):
        stats = builder.index_directory(sample_tree)

        assert stats.files_scanned == 6
        assert stats.files_indexed == 4
        assert stats.files_skipped == 2
        assert stats.files_saved == 4
        assert stats.files_failed == 0
        assert stats.total_words == 3 + 3 + 5 + 4
        assert stats.content_rows == repository.count_words()
        assert repository.count_files() == 4

    def test_reindex_is_idempotent(self, builder: IndexBuilder, repository, sample_tree: Path):
        """Test that indexing the same tree twice leaves the same rows."""
        builder.index_directory(sample_tree)
        files_before = repository.count_files()
        words_before = repository.count_words()

        builder.index_directory(sample_tree)

        assert repository.count_files() == files_before
        assert repository.count_words() == words_before

    def test_invalid_directory_leaves_store_untouched(
        self, builder: IndexBuilder, repository, sample_tree: Path, temp_dir: Path
    ):
        builder.index_directory(sample_tree)

        with pytest.raises(ValidationError):
            builder.index_directory(temp_dir / "missing")

        assert repository.count_files() == 4

    def test_empty_directory(self, builder: IndexBuilder, repository, temp_dir: Path):
        empty = temp_dir / "empty"
        empty.mkdir()

        stats = builder.index_directory(empty)

        assert stats.files_saved == 0
        assert repository.count_files() == 0

    def test_save_failure_propagates(self, sample_tree: Path):
        repository = MagicMock()
        repository.save_batch.side_effect = DatabaseError("disk full")

        builder = IndexBuilder(FileWalker(extensions=["txt"]), repository)

        with pytest.raises(DatabaseError):
            builder.index_directory(sample_tree)


class TestIndexFile:
    def test_index_single_file(self, builder: IndexBuilder, repository, temp_dir: Path):
        path = temp_dir / "single.txt"
        path.write_text("lonely words words", encoding="utf-8")

        entry = builder.index_file(path)

        assert entry.id is not None
        assert repository.find_by_path(entry.path).word_counts == {"lonely": 1, "words": 2}

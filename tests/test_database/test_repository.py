"""
Tests for the file repository.

Tests batch persistence, lookups and index maintenance.

SAFETY NOTE: All tests use the `repository` fixture, which opens a
database under tempfile.mkdtemp() and closes it after the test.
"""

import pytest

from file_indexer.core import FileEntry, DatabaseError
from file_indexer.database import repository as repository_module
from file_indexer.database.repository import FileRepository, escape_like


def make_entry(path: str, word_counts: dict = None, size: int = 100) -> FileEntry:
    name = path.rsplit("/", 1)[-1]
    return FileEntry(
        path=path,
        file_name=name,
        size=size,
        last_modified=1_700_000_000_000,
        extension=name.rsplit(".", 1)[-1] if "." in name else "",
        word_counts=dict(word_counts or {})
    )


class TestEscapeLike:
    def test_wildcards_escaped(self):
        assert escape_like("100%_a\\b") == "100\\%\\_a\\\\b"


class TestSaveBatch:
    """Tests for FileRepository.save_batch."""

    def test_round_trip(self, repository: FileRepository):
        """Test that a saved entry is found with identical metadata and counts."""
        entry = make_entry("/docs/a.txt", {"alpha": 3, "beta": 1, "gamma": 2})

        rows = repository.save_batch([entry])
        found = repository.find_by_path("/docs/a.txt")

        assert rows == 3
        assert entry.id is not None
        assert found.id == entry.id
        assert found.path == entry.path
        assert found.file_name == "a.txt"
        assert found.size == 100
        assert found.last_modified == 1_700_000_000_000
        assert found.extension == "txt"
        assert found.word_counts == {"alpha": 3, "beta": 1, "gamma": 2}

    def test_chunked_content_insert(self, repository: FileRepository):
        """Test that more rows than the batch size are all written."""
        counts = {f"word{i}": i + 1 for i in range(7)}
        entry = make_entry("/docs/many.txt", counts)

        rows = repository.save_batch([entry])

        assert rows == 7
        assert repository.count_words() == 7

    def test_empty_batch(self, repository: FileRepository):
        assert repository.save_batch([]) == 0
        assert repository.count_files() == 0

    def test_reindex_replaces_without_duplicates(self, repository: FileRepository):
        """Test that saving the same path twice keeps one row and the latest counts."""
        first = make_entry("/docs/a.txt", {"alpha": 3, "beta": 1})
        repository.save(first)

        second = make_entry("/docs/a.txt", {"alpha": 1, "delta": 4}, size=200)
        repository.save(second)

        found = repository.find_by_path("/docs/a.txt")

        assert repository.count_files() == 1
        assert second.id == first.id
        assert found.size == 200
        assert found.word_counts == {"alpha": 1, "delta": 4}

    def test_reindex_with_empty_map_clears_content(self, repository: FileRepository):
        """Test that old content rows go away when a file loses its text."""
        repository.save(make_entry("/docs/a.txt", {"alpha": 3}))
        repository.save(make_entry("/docs/a.txt", {}))

        found = repository.find_by_path("/docs/a.txt")

        assert found.word_counts == {}
        assert repository.count_words() == 0

    def test_backslash_paths_stored_with_slashes(self, repository: FileRepository):
        entry = make_entry("C:\\docs\\a.txt")
        entry.file_name = "a.txt"

        repository.save(entry)

        found = repository.find_by_path("C:\\docs\\a.txt")

        assert found is not None
        assert found.path == "C:/docs/a.txt"

    def test_failed_batch_rolls_back(self, repository: FileRepository, monkeypatch):
        """Test that a failing statement leaves the store exactly as before."""
        repository.save(make_entry("/docs/keep.txt", {"alpha": 1}))

        monkeypatch.setattr(
            repository_module,
            "INSERT_CONTENT_SQL",
            "INSERT INTO missing_table (file_id, word, count) VALUES (?, ?, ?)"
        )

        batch = [
            make_entry("/docs/keep.txt", {"beta": 2}),
            make_entry("/docs/new.txt", {"gamma": 1})
        ]

        with pytest.raises(DatabaseError):
            repository.save_batch(batch)

        assert repository.count_files() == 1
        assert repository.count_words() == 1
        assert repository.find_by_path("/docs/keep.txt").word_counts == {"alpha": 1}
        assert all(entry.id is None for entry in batch)


class TestLookups:
    """Tests for name, path and content queries."""

    @pytest.fixture
    def populated(self, repository: FileRepository) -> FileRepository:
        repository.save_batch([
            make_entry("/data/reports/2024/a.txt", {"data": 5, "revenue": 1}),
            make_entry("/data/reports/2024/b.md", {"data": 2}),
            make_entry("/data/reports/2025/jan.txt", {"january": 1}),
            make_entry("/data/archive/2023/c.txt", {"database": 1, "other": 4}),
            make_entry("/data/misc/100%_done.txt", {"done": 1}),
            make_entry("/data/misc/100xxdone.txt", {"done": 1})
        ])
        return repository

    def test_content_ranking(self, populated: FileRepository):
        """Test that results are ordered by summed matching counts."""
        results = populated.search_by_content("data")

        assert [entry.file_name for entry in results] == ["a.txt", "b.md", "c.txt"]
        assert [entry.relevance for entry in results] == [5, 2, 1]

    def test_content_search_is_metadata_only(self, populated: FileRepository):
        results = populated.search_by_content("revenue")

        assert len(results) == 1
        assert results[0].word_counts == {}

    def test_content_search_case_insensitive(self, populated: FileRepository):
        assert len(populated.search_by_content("REVENUE")) == 1

    def test_partial_path(self, populated: FileRepository):
        results = populated.search_by_partial_path("reports/2024")

        assert [entry.file_name for entry in results] == ["a.txt", "b.md"]
        assert "/data/reports/2025/jan.txt" not in [entry.path for entry in results]

    def test_partial_path_with_backslashes(self, populated: FileRepository):
        assert len(populated.search_by_partial_path("reports\\2024")) == 2

    def test_exact_path(self, populated: FileRepository):
        results = populated.search_by_exact_path("/data/archive/2023/c.txt")

        assert len(results) == 1
        assert results[0].word_counts == {}

    def test_find_by_missing_path(self, populated: FileRepository):
        assert populated.find_by_path("/nope.txt") is None

    def test_name_search_escapes_wildcards(self, populated: FileRepository):
        """Test that % and _ in a query match literally."""
        results = populated.search_by_name("100%_")

        assert [entry.file_name for entry in results] == ["100%_done.txt"]

    def test_name_partial_uses_last_component(self, populated: FileRepository):
        results = populated.search_by_name_partial("some/other/dir/c.txt")

        assert [entry.path for entry in results] == ["/data/archive/2023/c.txt"]

    def test_load_word_counts(self, populated: FileRepository):
        entry = populated.search_by_name("b.md")[0]

        populated.load_word_counts(entry)

        assert entry.word_counts == {"data": 2}

    def test_load_word_counts_unsaved_entry(self, repository: FileRepository):
        entry = make_entry("/never/saved.txt", {"x1": 1})

        repository.load_word_counts(entry)

        assert entry.word_counts == {"x1": 1}


class TestMaintenance:
    """Tests for counting and clearing."""

    def test_clear(self, repository: FileRepository):
        repository.save_batch([
            make_entry("/a.txt", {"alpha": 1}),
            make_entry("/b.txt", {"beta": 1})
        ])

        repository.clear()

        assert repository.count_files() == 0
        assert repository.count_words() == 0

    def test_statistics(self, repository: FileRepository):
        repository.save_batch([
            make_entry("/a.txt", {"alpha": 1, "beta": 2}, size=10),
            make_entry("/b.txt", {"beta": 1}, size=30)
        ])

        stats = repository.get_statistics()

        assert stats["total_files"] == 2
        assert stats["total_size_bytes"] == 40
        assert stats["content_rows"] == 3
        assert stats["distinct_words"] == 2
        assert stats["last_indexed"] is not None

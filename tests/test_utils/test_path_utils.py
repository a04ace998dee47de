"""
Tests for path normalization and validation.
"""

import os
from pathlib import Path

import pytest

from file_indexer.core.exceptions import ValidationError
from file_indexer.utils.path_utils import (
    normalize_path,
    suggest_path_correction,
    to_store_path,
    validate_directory
)


class TestNormalizePath:
    """Tests for normalize_path."""

    @pytest.mark.parametrize("raw,expected", [
        ("C:\\Users\\docs", "C:/Users/docs"),
        ("D://data///books", "D:/data/books"),
        ("/home/user/docs/", "/home/user/docs"),
        ("C:", "C:/"),
        ("C:/", "C:/"),
        ("/", "/"),
        ("  /tmp/x  ", "/tmp/x"),
        ("relative\\dir\\", "relative/dir"),
    ])
    def test_normalization(self, raw: str, expected: str):
        assert normalize_path(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_path_raises(self, raw):
        """Test that empty input is rejected with a suggestion."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_path(raw)

        assert exc_info.value.suggestion


class TestToStorePath:
    def test_backslashes_become_slashes(self):
        assert to_store_path("C:\\a\\b.txt") == "C:/a/b.txt"

    def test_accepts_path_objects(self):
        assert to_store_path(Path("/a/b.txt")) == "/a/b.txt"


class TestSuggestPathCorrection:
    """Tests for suggest_path_correction."""

    def test_backslash_hint(self):
        suggestion = suggest_path_correction("C:\\docs\\books\\")

        assert "Backslashes" in suggestion
        assert "trailing slash" in suggestion
        assert "Try: C:/docs/books" in suggestion

    def test_forbidden_characters_hint(self):
        assert "forbidden" in suggest_path_correction("/data/what?")

    def test_none_gives_empty_suggestion(self):
        assert suggest_path_correction(None) == ""


class TestValidateDirectory:
    """Tests for validate_directory."""

    def test_valid_directory(self, temp_dir: Path):
        """Test that an existing directory is returned as an absolute path."""
        raw = str(temp_dir) + "//"

        result = validate_directory(raw)

        assert result.is_absolute()
        assert result == Path(os.path.abspath(temp_dir))

    def test_missing_directory_raises(self, temp_dir: Path):
        with pytest.raises(ValidationError) as exc_info:
            validate_directory(str(temp_dir / "missing"))

        assert "does not exist" in exc_info.value.message
        assert "Try:" in exc_info.value.suggestion

    def test_file_is_not_a_directory(self, temp_dir: Path):
        path = temp_dir / "file.txt"
        path.write_text("x")

        with pytest.raises(ValidationError) as exc_info:
            validate_directory(str(path))

        assert "not a directory" in exc_info.value.message

    def test_empty_raises(self):
        with pytest.raises(ValidationError):
            validate_directory("")

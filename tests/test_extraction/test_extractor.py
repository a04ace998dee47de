"""
Tests for the format dispatcher.
"""

from pathlib import Path
from unittest.mock import MagicMock

from file_indexer.extraction import (
    ContentExtractor,
    ExtractionResult,
    ExtractionStatus,
    PDFExtractor
)


def stub(name: str) -> MagicMock:
    mock = MagicMock()
    mock.name = name
    mock.extract.return_value = ExtractionResult.from_text(f"from {name}")
    return mock


class TestContentExtractor:
    """Tests for ContentExtractor dispatch."""

    def setup_method(self):
        self.text = stub("text")
        self.docx = stub("docx")
        self.pdf = stub("pdf")
        self.extractor = ContentExtractor(self.text, self.docx, self.pdf)

    def test_docx_and_docm_routed_to_docx(self):
        assert self.extractor.extract(Path("/a/b.DOCX")).text == "from docx"
        assert self.extractor.extract(Path("/a/b.docm")).text == "from docx"

    def test_pdf_routed_to_pdf(self):
        assert self.extractor.extract(Path("/a/b.pdf")).text == "from pdf"

    def test_everything_else_is_text(self):
        assert self.extractor.extract(Path("/a/b.java")).text == "from text"
        assert self.extractor.extract(Path("/a/Makefile")).text == "from text"

    def test_explicit_extension_wins(self):
        assert self.extractor.extract(Path("/a/b.bin"), "PDF").text == "from pdf"

    def test_from_settings(self):
        extractor = ContentExtractor.from_settings(
            encodings=["cp1251"],
            pdf_primary_backend="pypdf",
            pdf_fallback_backend="pdfplumber"
        )

        assert extractor.text_reader.encodings == ["cp1251"]
        assert isinstance(extractor.pdf_extractor, PDFExtractor)
        assert extractor.pdf_extractor.primary.name == "pypdf"

    def test_real_text_file(self, temp_dir: Path):
        path = temp_dir / "notes.txt"
        path.write_text("some notes", encoding="utf-8")

        result = ContentExtractor().extract(path)

        assert result.status is ExtractionStatus.TEXT
        assert result.text == "some notes"

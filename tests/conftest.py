"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, sample documents, mock configurations
and temporary databases to ensure tests are isolated and safe.
"""

import json
import pytest
import tempfile
import shutil
import zipfile
from pathlib import Path
from typing import Callable, Generator

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


DOCX_CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Override PartName="/word/document.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    '</Types>'
)


def docx_document_xml(*paragraphs: str) -> str:
    """Build a word/document.xml body with one run per paragraph."""
    body = "".join(
        f'<w:p><w:r><w:t xml:space="preserve">{text}</w:t></w:r></w:p>'
        for text in paragraphs
    )
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
        f'<w:body>{body}</w:body></w:document>'
    )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="file_indexer_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    output_dir = temp_dir / "output"
    output_dir.mkdir()

    logs_dir = output_dir / "logs"
    logs_dir.mkdir()

    config_data = {
        "paths": {
            "database_path": str(output_dir / "test.db"),
            "logs_directory": str(logs_dir)
        },
        "indexing": {
            "supported_extensions": ["txt", "md", "docx", "pdf"],
            "max_file_size_mb": 1,
            "max_text_chars": 5000,
            "max_line_chars": 1000,
            "max_unique_words": 1000,
            "log_progress_every": 5
        },
        "extraction": {
            "text_encodings": ["utf-8", "cp1251"],
            "pdf_primary_backend": "pypdf",
            "pdf_fallback_backend": "pdfplumber"
        },
        "database": {
            "content_batch_size": 3,
            "timeout_seconds": 5.0
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def sample_pdf_content() -> bytes:
    """
    Create minimal valid PDF content for testing.

    Returns:
        Bytes representing a minimal PDF with text.
    """
    # Minimal PDF with "Hello World" text
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792]
   /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT /F1 12 Tf 100 700 Td (Hello World) Tj ET
endstream
endobj
5 0 obj
<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>
endobj
xref
0 6
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000266 00000 n
0000000359 00000 n
trailer
<< /Size 6 /Root 1 0 R >>
startxref
434
%%EOF"""
    return pdf_content


@pytest.fixture
def sample_pdf(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create a sample PDF file for testing.

    Args:
        temp_dir: Temporary directory fixture.
        sample_pdf_content: PDF content fixture.

    Returns:
        Path to the created PDF file.
    """
    pdf_path = temp_dir / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_content)
    return pdf_path


@pytest.fixture
def make_docx(temp_dir: Path) -> Callable[..., Path]:
    """
    Factory writing DOCX archives into the temp directory.

    Usage:
        make_docx("report.docx", "First paragraph", "Second paragraph")
        make_docx("odd.docx", part="Document.xml")

    Returns:
        Function(name, *paragraphs, part="word/document.xml") -> Path.
    """
    def _make(name: str, *paragraphs: str, part: str = "word/document.xml") -> Path:
        path = temp_dir / name
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("[Content_Types].xml", DOCX_CONTENT_TYPES)
            if part:
                archive.writestr(part, docx_document_xml(*paragraphs))
        return path

    return _make


@pytest.fixture
def sample_tree(temp_dir: Path, make_docx) -> Path:
    """
    Create a small directory tree with mixed file types.

    Layout:
        data/notes.txt          "alpha beta alpha"
        data/readme.md          "Gamma gamma GAMMA"
        data/image.png          unsupported extension
        data/empty.txt          zero bytes
        data/reports/2024/q1.txt
        data/reports/2024/summary.docx

    Returns:
        Path to the data directory.
    """
    data_dir = temp_dir / "data"
    reports = data_dir / "reports" / "2024"
    reports.mkdir(parents=True)

    (data_dir / "notes.txt").write_text("alpha beta alpha", encoding="utf-8")
    (data_dir / "readme.md").write_text("Gamma gamma GAMMA", encoding="utf-8")
    (data_dir / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (data_dir / "empty.txt").write_bytes(b"")
    (reports / "q1.txt").write_text("revenue data data\nprofit data", encoding="utf-8")

    docx_path = make_docx("summary.docx", "Quarterly summary", "revenue grew")
    shutil.move(str(docx_path), str(reports / "summary.docx"))

    return data_dir


@pytest.fixture
def temp_database(temp_dir: Path) -> Path:
    """
    Create path for a temporary database.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path where test database should be created.
    """
    return temp_dir / "test.db"


@pytest.fixture
def db(temp_database: Path):
    """
    DatabaseManager on a temporary file with the schema initialized.

    The connection is closed after the test.
    """
    from file_indexer.database import DatabaseManager, init_schema

    manager = DatabaseManager(temp_database, timeout=5.0)
    init_schema(manager)
    yield manager
    manager.close()


@pytest.fixture
def repository(db):
    """FileRepository with a small content batch size to exercise chunking."""
    from file_indexer.database import FileRepository
    return FileRepository(db, content_batch_size=2)


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from file_indexer.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    from file_indexer.core import logger
    logger._logger_initialized = False
    yield
    logger._logger_initialized = False

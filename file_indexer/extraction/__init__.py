"""
Content extraction module for the File Indexer.

Provides format-specific converters from file bytes to plain text:
a text reader with encoding fallback, a DOCX tag scanner and a PDF
adapter over pdfplumber and pypdf backends with automatic fallback.
"""

from .models import ExtractionResult, ExtractionStatus
from .text_reader import TextFileReader
from .docx_extractor import DocxExtractor, extract_text_from_xml
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .pdf_extractor import PDFExtractor
from .extractor import ContentExtractor

__all__ = [
    "ExtractionResult",
    "ExtractionStatus",
    "TextFileReader",
    "DocxExtractor",
    "extract_text_from_xml",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "PDFExtractor",
    "ContentExtractor"
]

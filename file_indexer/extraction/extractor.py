"""
Format dispatcher for content extraction.

Routes each file to the extractor for its extension: DOCX/DOCM to the
zip tag scanner, PDF to the PDF adapter, everything else to the plain
text reader.
"""

from pathlib import Path
from typing import Sequence, Union

from ..core import get_logger
from ..core.models import get_extension
from .models import ExtractionResult
from .text_reader import TextFileReader
from .docx_extractor import DocxExtractor
from .pdf_extractor import PDFExtractor

logger = get_logger(__name__)

DOCX_EXTENSIONS = frozenset({"docx", "docm"})
PDF_EXTENSIONS = frozenset({"pdf"})


class ContentExtractor:
    """
    Turns a file into plain text according to its format.

    Every call returns an ExtractionResult; an ExtractionError is raised
    only when the file itself cannot be read.
    """

    def __init__(
        self,
        text_reader: TextFileReader = None,
        docx_extractor: DocxExtractor = None,
        pdf_extractor: PDFExtractor = None
    ):
        self.text_reader = text_reader or TextFileReader()
        self.docx_extractor = docx_extractor or DocxExtractor()
        self.pdf_extractor = pdf_extractor or PDFExtractor()

    @classmethod
    def from_settings(
        cls,
        encodings: Sequence[str] = None,
        pdf_primary_backend: str = "pdfplumber",
        pdf_fallback_backend: str = "pypdf",
        max_pdf_chars: int = None
    ) -> "ContentExtractor":
        """Build an extractor from configuration values."""
        return cls(
            text_reader=TextFileReader(encodings),
            docx_extractor=DocxExtractor(),
            pdf_extractor=PDFExtractor(pdf_primary_backend, pdf_fallback_backend, max_pdf_chars)
        )

    def extract(self, filepath: Union[str, Path], extension: str = None) -> ExtractionResult:
        """
        Extract plain text from a file.

        Args:
            filepath: Path to the file.
            extension: Lowercase extension; derived from the name if omitted.

        Returns:
            ExtractionResult from the format-specific extractor.
        """
        filepath = Path(filepath)
        extension = get_extension(filepath.name) if extension is None else extension.lower()

        if extension in DOCX_EXTENSIONS:
            extractor = self.docx_extractor
        elif extension in PDF_EXTENSIONS:
            extractor = self.pdf_extractor
        else:
            extractor = self.text_reader

        result = extractor.extract(filepath)

        logger.debug(
            f"{extractor.name} extractor on {filepath.name}: "
            f"{result.status.value}, {len(result.text)} characters"
        )

        return result

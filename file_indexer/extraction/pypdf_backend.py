"""
pypdf-based PDF backend and encryption probe.

Uses pypdf's layout extraction mode so that text keeps its visual
reading order. Used as the fallback PDF backend, and by the PDF adapter
to detect encrypted documents before any backend runs.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from pypdf import PdfReader

from ..core import get_logger, ExtractionError, EncryptedDocumentError
from ..utils import collapse_whitespace

logger = get_logger(__name__)


class PyPDFBackend:
    """Layout-mode page text via pypdf."""

    name = "pypdf"

    def __init__(self, max_chars: Optional[int] = None):
        """
        Args:
            max_chars: Stop reading further pages once this many characters,
                       counted after whitespace collapsing, were collected.
                       None reads the whole document.
        """
        self.max_chars = max_chars

    def extract(self, filepath: Union[str, Path]) -> List[Tuple[int, str]]:
        """
        Read the text of every page that has any.

        Args:
            filepath: PDF to read.

        Returns:
            (page_number, text) pairs, 1-indexed, pages without text omitted.

        Raises:
            EncryptedDocumentError: If the PDF is encrypted.
            ExtractionError: If the document cannot be opened or parsed.
        """
        filepath = Path(filepath)
        pages: List[Tuple[int, str]] = []
        collected = 0

        try:
            reader = PdfReader(filepath)

            if reader.is_encrypted:
                raise EncryptedDocumentError("PDF is encrypted", filepath=str(filepath))

            logger.debug(f"{filepath.name}: {len(reader.pages)} pages")

            for number, page in enumerate(reader.pages, start=1):
                try:
                    text = page.extract_text(extraction_mode="layout") or ""
                except Exception as e:
                    logger.warning(f"{filepath.name}: page {number} skipped ({e})")
                    continue

                if not text.strip():
                    continue

                pages.append((number, text))
                collected += len(collapse_whitespace(text))

                if self.max_chars is not None and collected >= self.max_chars:
                    logger.debug(f"{filepath.name}: stopped after page {number}")
                    break

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"pypdf could not read the document: {e}",
                filepath=str(filepath)
            )

        return pages

    def is_encrypted(self, filepath: Union[str, Path]) -> bool:
        """
        Check whether a PDF declares encryption.

        Raises:
            ExtractionError: If the file cannot be parsed as a PDF.
        """
        try:
            return PdfReader(filepath).is_encrypted
        except Exception as e:
            raise ExtractionError(f"Cannot open PDF: {e}", filepath=str(filepath))

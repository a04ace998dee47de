"""
pdfplumber-based PDF backend.

Rebuilds page text from character positions, so words come out in
reading order even for multi-column layouts. Used as the primary PDF
backend.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import pdfplumber

from ..core import get_logger, ExtractionError
from ..utils import collapse_whitespace

logger = get_logger(__name__)

# Horizontal/vertical gap (in points) under which characters are merged
# into the same word/line.
DEFAULT_X_TOLERANCE = 3
DEFAULT_Y_TOLERANCE = 3


class PDFPlumberBackend:
    """Position-ordered page text via pdfplumber."""

    name = "pdfplumber"

    def __init__(
        self,
        x_tolerance: float = DEFAULT_X_TOLERANCE,
        y_tolerance: float = DEFAULT_Y_TOLERANCE,
        max_chars: Optional[int] = None
    ):
        """
        Args:
            x_tolerance: Character gap still treated as the same word.
            y_tolerance: Vertical gap still treated as the same line.
            max_chars: Stop reading further pages once this many characters,
                       counted after whitespace collapsing, were collected.
                       None reads the whole document.
        """
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance
        self.max_chars = max_chars

    def extract(self, filepath: Union[str, Path]) -> List[Tuple[int, str]]:
        """
        Read the text of every page that has any.

        Args:
            filepath: PDF to read.

        Returns:
            (page_number, text) pairs, 1-indexed, pages without text omitted.

        Raises:
            ExtractionError: If the document cannot be opened or parsed.
        """
        filepath = Path(filepath)
        pages: List[Tuple[int, str]] = []
        collected = 0

        try:
            with pdfplumber.open(filepath) as pdf:
                logger.debug(f"{filepath.name}: {len(pdf.pages)} pages")

                for number, page in enumerate(pdf.pages, start=1):
                    text = self._page_text(page, number, filepath)
                    if not text:
                        continue

                    pages.append((number, text))
                    collected += len(collapse_whitespace(text))

                    if self.max_chars is not None and collected >= self.max_chars:
                        logger.debug(
                            f"{filepath.name}: stopped after page {number}, "
                            f"{collected} characters collected"
                        )
                        break

        except Exception as e:
            raise ExtractionError(
                f"pdfplumber could not read the document: {e}",
                filepath=str(filepath)
            )

        return pages

    def _page_text(self, page, number: int, filepath: Path) -> str:
        """Text of one page, or "" if it has none or cannot be decoded."""
        try:
            text = page.extract_text(
                x_tolerance=self.x_tolerance,
                y_tolerance=self.y_tolerance
            ) or ""
        except Exception as e:
            logger.warning(f"{filepath.name}: page {number} skipped ({e})")
            return ""

        return text if text.strip() else ""

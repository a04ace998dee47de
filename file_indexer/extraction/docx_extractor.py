"""
DOCX text extraction by tag scanning.

A DOCX file is a zip container. After checking the zip signature, the
main document part is read and the content of every <w:t> text run is
collected in order. This is a tag-level scan, not an XML parse: broken
markup yields partial or empty text instead of an error.
"""

import zipfile
import zlib
from pathlib import Path
from typing import List, Union

from ..core import get_logger, ExtractionError
from .models import ExtractionResult

logger = get_logger(__name__)

ZIP_SIGNATURE = b"PK\x03\x04"

DOCUMENT_PARTS = ("word/document.xml", "Document.xml", "document.xml")

RUN_OPEN = "<w:t"
RUN_CLOSE = "</w:t>"


def extract_text_from_xml(xml: str) -> str:
    """
    Collect the content of <w:t> runs, separated by single spaces.

    Tags that merely start with "w:t" (w:tab, w:tbl, w:tc, ...) and
    self-closing empty runs are skipped.

    Args:
        xml: Raw document part markup.

    Returns:
        Concatenated run text, stripped.
    """
    runs: List[str] = []
    position = 0

    while True:
        tag_start = xml.find(RUN_OPEN, position)
        if tag_start == -1:
            break

        tag_end = xml.find(">", tag_start)
        if tag_end == -1:
            break

        next_char = xml[tag_start + len(RUN_OPEN)]
        if next_char not in "> \t\r\n" or xml[tag_end - 1] == "/":
            position = tag_end + 1
            continue

        text_end = xml.find(RUN_CLOSE, tag_end + 1)
        if text_end == -1:
            break

        runs.append(xml[tag_end + 1:text_end])
        position = text_end + len(RUN_CLOSE)

    return " ".join(runs).strip()


class DocxExtractor:
    """Extracts visible text from DOCX/DOCM files."""

    name = "docx"

    def extract(self, filepath: Union[str, Path]) -> ExtractionResult:
        """
        Extract text from a DOCX file.

        Args:
            filepath: Path to the document.

        Returns:
            ExtractionResult; UNSUPPORTED when the file is not a zip,
            MALFORMED when the archive or its document part is unusable.

        Raises:
            ExtractionError: If the file cannot be read at all.
        """
        filepath = Path(filepath)

        try:
            with open(filepath, "rb") as f:
                header = f.read(len(ZIP_SIGNATURE))
        except OSError as e:
            raise ExtractionError(f"Cannot read file: {e}", filepath=str(filepath))

        if header != ZIP_SIGNATURE:
            logger.warning(f"Not a DOCX file (bad signature): {filepath}")
            return ExtractionResult.unsupported("missing zip signature")

        try:
            with zipfile.ZipFile(filepath) as archive:
                names = set(archive.namelist())

                for part in DOCUMENT_PARTS:
                    if part not in names:
                        continue

                    xml = archive.read(part).decode("utf-8", errors="replace")
                    text = extract_text_from_xml(xml)

                    logger.debug(f"Extracted {len(text)} characters from {part} in {filepath.name}")
                    return ExtractionResult.from_text(text, detail=part)

        except (zipfile.BadZipFile, zipfile.LargeZipFile, RuntimeError, OSError, EOFError, zlib.error) as e:
            logger.warning(f"Cannot read DOCX archive {filepath}: {e}")
            return ExtractionResult.malformed(f"zip read error: {e}")

        logger.warning(f"No document part found in {filepath}")
        return ExtractionResult.malformed("no document part found")

"""
PDF extraction adapter with automatic backend fallback.

Probes the document for encryption, then tries the primary backend and
falls back to the secondary one when the primary fails or finds no
text. Page texts are joined in page order. Failures are reported as
tagged results, never raised.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..core import get_logger, ExtractionError, EncryptedDocumentError
from .models import ExtractionResult
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend

logger = get_logger(__name__)


BACKENDS = {
    "pypdf": PyPDFBackend,
    "pdfplumber": PDFPlumberBackend
}


class PDFExtractor:
    """
    Unified PDF extraction with automatic backend fallback.

    Tries the primary backend first, falls back to secondary
    if extraction fails or produces empty results.
    """

    name = "pdf"

    def __init__(
        self,
        primary_backend: str = "pdfplumber",
        fallback_backend: str = "pypdf",
        max_chars: Optional[int] = None
    ):
        """
        Initialize the extractor with configured backends.

        Args:
            primary_backend: Name of primary backend ("pdfplumber" or "pypdf").
            fallback_backend: Name of fallback backend, or None to disable.
            max_chars: Per-document character budget passed to the backends.

        Raises:
            ExtractionError: If the primary backend name is unknown.
        """
        if primary_backend not in BACKENDS:
            raise ExtractionError(f"Unknown backend: {primary_backend}")

        self.primary = BACKENDS[primary_backend](max_chars=max_chars)

        if fallback_backend and fallback_backend != primary_backend:
            backend_class = BACKENDS.get(fallback_backend)
            self.fallback = backend_class(max_chars=max_chars) if backend_class else None
        else:
            self.fallback = None

        self.probe = PyPDFBackend()

        logger.debug(
            f"Initialized PDF extractor: primary={primary_backend}, fallback={fallback_backend}"
        )

    def extract(self, filepath: Union[str, Path]) -> ExtractionResult:
        """
        Extract the text of a PDF.

        Args:
            filepath: Path to the PDF file.

        Returns:
            ExtractionResult: TEXT/EMPTY on success, ENCRYPTED for
            encrypted documents, MALFORMED when every backend fails.
        """
        filepath = Path(filepath)

        try:
            if self.probe.is_encrypted(filepath):
                logger.warning(f"PDF is encrypted, skipping content: {filepath}")
                return ExtractionResult.encrypted()
        except ExtractionError as e:
            logger.debug(f"Encryption probe failed for {filepath.name}: {e.message}")

        errors: List[str] = []

        for backend in (self.primary, self.fallback):
            if backend is None:
                continue

            try:
                pages = backend.extract(filepath)
            except EncryptedDocumentError:
                logger.warning(f"PDF is encrypted, skipping content: {filepath}")
                return ExtractionResult.encrypted()
            except ExtractionError as e:
                logger.debug(f"Backend {backend.name} failed: {e.message}")
                errors.append(f"{backend.name}: {e.message}")
                continue

            if pages:
                return ExtractionResult.from_text(self._join_pages(pages), detail=backend.name)

            logger.debug(f"Backend {backend.name} returned no text: {filepath.name}")

        if errors:
            logger.error(f"Cannot extract PDF {filepath}: {'; '.join(errors)}")
            return ExtractionResult.malformed("; ".join(errors))

        return ExtractionResult.from_text("", detail="no text layer")

    @staticmethod
    def _join_pages(pages: List[Tuple[int, str]]) -> str:
        """Concatenate page texts in page order."""
        return "\n".join(text for _, text in sorted(pages, key=lambda page: page[0]))

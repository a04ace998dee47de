"""
Result model shared by all content extractors.

Extractors never raise for "no usable text"; they return a tagged
ExtractionResult so callers can tell empty content apart from an
unsupported, encrypted or malformed file.
"""

from dataclasses import dataclass
from enum import Enum


class ExtractionStatus(Enum):
    """Outcome of a content extraction."""
    TEXT = "text"
    EMPTY = "empty"
    UNSUPPORTED = "unsupported"
    ENCRYPTED = "encrypted"
    MALFORMED = "malformed"


@dataclass
class ExtractionResult:
    """
    Text extracted from a file together with how the extraction went.

    Attributes:
        status: Extraction outcome.
        text: Extracted plain text ("" unless status is TEXT).
        detail: Short reason for non-TEXT outcomes, or the encoding used.
    """
    status: ExtractionStatus
    text: str = ""
    detail: str = ""

    @property
    def has_text(self) -> bool:
        return self.status is ExtractionStatus.TEXT

    @classmethod
    def from_text(cls, text: str, detail: str = "") -> "ExtractionResult":
        """TEXT result, or EMPTY when the text is blank."""
        if not text or not text.strip():
            return cls(ExtractionStatus.EMPTY, "", detail)
        return cls(ExtractionStatus.TEXT, text, detail)

    @classmethod
    def unsupported(cls, detail: str) -> "ExtractionResult":
        return cls(ExtractionStatus.UNSUPPORTED, "", detail)

    @classmethod
    def encrypted(cls, detail: str = "document is encrypted") -> "ExtractionResult":
        return cls(ExtractionStatus.ENCRYPTED, "", detail)

    @classmethod
    def malformed(cls, detail: str) -> "ExtractionResult":
        return cls(ExtractionStatus.MALFORMED, "", detail)

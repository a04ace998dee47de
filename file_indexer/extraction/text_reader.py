"""
Plain text reader with encoding fallback.

Tries a prioritized list of encodings (UTF-8, two legacy Cyrillic code
pages, then Latin-1, which decodes any byte sequence) and uses the first
one that reads the whole file without a decode error. If every attempt
fails the file is decoded as UTF-8 with replacement characters.
"""

from pathlib import Path
from typing import List, Sequence, Union

from ..core import get_logger, ExtractionError
from ..core.config_loader import DEFAULT_ENCODINGS
from .models import ExtractionResult

logger = get_logger(__name__)

REPLACEMENT_ENCODING = "utf-8"


class TextFileReader:
    """Reads text-like files, falling back across encodings."""

    name = "text"

    def __init__(self, encodings: Sequence[str] = None):
        """
        Initialize the reader.

        Args:
            encodings: Encodings to try in order. Defaults to
                       utf-8, cp1251, koi8-r, latin-1.
        """
        self.encodings: List[str] = list(encodings or DEFAULT_ENCODINGS)

    def extract(self, filepath: Union[str, Path]) -> ExtractionResult:
        """
        Read a file as text.

        Args:
            filepath: Path to the file.

        Returns:
            ExtractionResult whose detail names the encoding used.

        Raises:
            ExtractionError: If the file cannot be opened or read at all.
        """
        filepath = Path(filepath)

        for encoding in self.encodings:
            try:
                text = self._read_lines(filepath, encoding)
                logger.debug(f"Read {filepath.name} as {encoding}")
                return ExtractionResult.from_text(text, detail=encoding)

            except (UnicodeDecodeError, LookupError) as e:
                logger.debug(f"Cannot read {filepath.name} as {encoding}: {e}")

            except OSError as e:
                raise ExtractionError(
                    f"Cannot read file: {e}",
                    filepath=str(filepath)
                )

        logger.warning(
            f"No encoding of {self.encodings} fits {filepath.name}, "
            f"decoding as {REPLACEMENT_ENCODING} with replacement characters"
        )

        try:
            text = self._read_lines(filepath, REPLACEMENT_ENCODING, errors="replace")
        except OSError as e:
            raise ExtractionError(
                f"Cannot read file: {e}",
                filepath=str(filepath)
            )

        return ExtractionResult.from_text(text, detail=f"{REPLACEMENT_ENCODING} (replace)")

    @staticmethod
    def _read_lines(filepath: Path, encoding: str, errors: str = "strict") -> str:
        """Read a file line by line in the given encoding."""
        with open(filepath, "r", encoding=encoding, errors=errors) as f:
            return "".join(line for line in f)

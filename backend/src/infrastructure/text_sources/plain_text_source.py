"""Plain text source - UTF-8 text files such as saved OCR output."""

import logging

from domain.extraction.errors import TextExtractionError
from domain.extraction.models import ExtractedText
from domain.extraction.ports import TextSourcePort

logger = logging.getLogger(__name__)


class PlainTextSource(TextSourcePort):
    """Reads a text file as-is. A form feed separates pages, if present."""

    SUPPORTED_MIME_TYPES = ('text/plain',)

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    @property
    def version(self) -> str:
        return "plain_text_v1"

    def supports(self, mime_type: str) -> bool:
        return mime_type in self.SUPPORTED_MIME_TYPES

    def extract_text(self, path: str) -> ExtractedText:
        try:
            with open(path, encoding=self.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read text file {path}: {e}")
            raise TextExtractionError(f"Failed to read text file {path}: {e}") from e

        page_count = text.count("\f") + 1 if text else 0
        return ExtractedText(
            text=text,
            page_count=page_count,
            metadata={'source': self.version, 'encoding': self.encoding},
        )

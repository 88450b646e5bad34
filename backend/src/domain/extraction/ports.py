"""
Text source port (interface) following Hexagonal Architecture.
Turning a document file into plain text is an external concern; the
extraction pipeline only consumes the resulting text.
"""
from abc import ABC, abstractmethod

from .models import ExtractedText


class TextSourcePort(ABC):
    """
    Port interface for document text sources.

    Implementations:
    - PDFTextSource: text layer of PDF files (pdfplumber)
    - PlainTextSource: UTF-8 text files, e.g. OCR output saved to disk
    """

    @abstractmethod
    def extract_text(self, path: str) -> ExtractedText:
        """
        Read a document and return its flattened text.

        Args:
            path: Absolute path of the document file

        Returns:
            ExtractedText with text, page_count and source metadata

        Raises:
            TextExtractionError: If the file cannot be read or parsed
        """
        pass

    @abstractmethod
    def supports(self, mime_type: str) -> bool:
        """
        Check if this source can read the given MIME type.

        Args:
            mime_type: MIME type (e.g., 'application/pdf')
        """
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Source version identifier for tracking (e.g. 'pdf_text_v1')."""
        pass

    @property
    def priority(self) -> int:
        """Priority for source selection (lower = higher priority). Default 100."""
        return 100

"""PDF text source - reads the text layer of PDF rental agreements.

Uses pdfplumber to flatten every page into one text block that the
pattern-based extractor can search. Scanned PDFs have little or no text
layer; they are detected via text_coverage_ratio and logged. Their text is
still returned, and the orchestrator rejects it with InvalidInputError when
it is blank.
"""

import io
import logging
from typing import BinaryIO, Iterable, List, Optional, Union

import pdfplumber

from config import get_settings
from domain.extraction.errors import TextExtractionError
from domain.extraction.models import ExtractedText
from domain.extraction.ports import TextSourcePort

logger = logging.getLogger(__name__)


class PDFTextSource(TextSourcePort):
    """Text source for text-based PDF files.

    Example:
        source = PDFTextSource()
        extracted = source.extract_text('/data/agreements/RA-1234.pdf')
        print(extracted.metadata['text_coverage_ratio'])
    """

    SUPPORTED_MIME_TYPES = ('application/pdf',)

    def __init__(
        self,
        coverage_threshold: Optional[float] = None,
        chars_per_page: Optional[int] = None,
    ):
        """Initialize PDF text source.

        Args:
            coverage_threshold: Ratio below which a PDF is treated as scanned
            chars_per_page: Characters expected on a text-rich page
        """
        settings = get_settings()
        self.coverage_threshold = (
            coverage_threshold
            if coverage_threshold is not None
            else settings.PDF_TEXT_COVERAGE_THRESHOLD
        )
        self.chars_per_page = chars_per_page or settings.PDF_CHARS_PER_PAGE

    @property
    def version(self) -> str:
        return "pdf_text_v1"

    @property
    def priority(self) -> int:
        return 10

    def supports(self, mime_type: str) -> bool:
        return mime_type in self.SUPPORTED_MIME_TYPES

    def extract_text(self, path: str) -> ExtractedText:
        """Extract text from every page of a PDF file.

        Args:
            path: Path of the PDF file

        Returns:
            ExtractedText with pages joined by newlines

        Raises:
            TextExtractionError: If the file is missing or not a readable PDF
        """
        return self._extract(path, source_name=path)

    def extract_text_from_bytes(self, content: bytes) -> ExtractedText:
        """Extract text from an in-memory PDF (e.g. an upload or email attachment)."""
        return self._extract(io.BytesIO(content), source_name="<bytes>")

    def extract_pages(self, path: str, page_numbers: Iterable[int]) -> ExtractedText:
        """Extract text from selected pages only.

        Args:
            path: Path of the PDF file
            page_numbers: 1-based page numbers; out-of-range pages are skipped

        Returns:
            ExtractedText for the selected pages
        """
        return self._extract(path, source_name=path, page_numbers=list(page_numbers))

    def _extract(
        self,
        source: Union[str, BinaryIO],
        source_name: str,
        page_numbers: Optional[List[int]] = None,
    ) -> ExtractedText:
        try:
            with pdfplumber.open(source) as pdf:
                total_pages = len(pdf.pages)
                if page_numbers is None:
                    pages = list(pdf.pages)
                else:
                    pages = [
                        pdf.pages[number - 1]
                        for number in page_numbers
                        if 1 <= number <= total_pages
                    ]

                all_text = ""
                for page in pages:
                    page_text = page.extract_text() or ""
                    all_text += page_text + "\n"

        except Exception as e:
            logger.error(f"PDF text extraction failed for {source_name}: {e}")
            raise TextExtractionError(f"Failed to read PDF {source_name}: {e}") from e

        page_count = len(pages)
        text_chars_total = len(all_text.strip())
        coverage_ratio = self.calculate_text_coverage(text_chars_total, page_count)

        logger.info(
            f"PDF text stats: {page_count} pages, {text_chars_total} chars, "
            f"coverage_ratio={coverage_ratio:.3f}",
            extra={"file_path": source_name},
        )

        if coverage_ratio < self.coverage_threshold:
            logger.warning(
                f"PDF appears to be scanned (coverage={coverage_ratio:.3f} "
                f"< {self.coverage_threshold}). Pattern extraction may find nothing.",
                extra={"file_path": source_name},
            )

        return ExtractedText(
            text=all_text,
            page_count=page_count,
            metadata={
                'source': self.version,
                'total_pages': total_pages,
                'text_chars_total': text_chars_total,
                'text_coverage_ratio': coverage_ratio,
                'is_scanned': coverage_ratio < self.coverage_threshold,
            },
        )

    def calculate_text_coverage(self, text_chars_total: int, page_count: int) -> float:
        """Calculate text coverage ratio.

        text_coverage_ratio = min(1, text_chars_total / (page_count * chars_per_page))

        Args:
            text_chars_total: Total extractable characters
            page_count: Number of pages

        Returns:
            Coverage ratio (0.0-1.0)
        """
        if page_count == 0:
            return 0.0

        expected_chars = page_count * self.chars_per_page
        ratio = text_chars_total / expected_chars if expected_chars > 0 else 0.0
        return min(1.0, ratio)

"""Unit tests for text sources and the text source registry

pdfplumber is mocked; no PDF files are read.
"""

from unittest.mock import MagicMock, Mock, patch

import pytest

from domain.extraction.errors import TextExtractionError
from infrastructure.text_sources import (
    PDFTextSource,
    PlainTextSource,
    TextSourceRegistry,
    get_text_source_registry,
    guess_mime_type,
    reset_text_source_registry,
)


def _mock_pdf(page_texts):
    pdf = MagicMock()
    pdf.pages = [Mock(**{"extract_text.return_value": text}) for text in page_texts]
    pdf.__enter__.return_value = pdf
    return pdf


class TestPDFTextSource:
    """Test PDFTextSource"""

    @pytest.fixture
    def source(self):
        return PDFTextSource(coverage_threshold=0.15, chars_per_page=100)

    def test_supports_pdf_only(self, source):
        assert source.supports("application/pdf") is True
        assert source.supports("text/plain") is False
        assert source.version == "pdf_text_v1"

    @patch("infrastructure.text_sources.pdf_text_source.pdfplumber.open")
    def test_extract_text_joins_pages(self, mock_open, source):
        mock_open.return_value = _mock_pdf(["RENTAL AGREEMENT NUMBER 12345678", None, "Customer Name : JOHN DOE"])

        extracted = source.extract_text("/tmp/agreement.pdf")

        assert extracted.text == "RENTAL AGREEMENT NUMBER 12345678\n\nCustomer Name : JOHN DOE\n"
        assert extracted.page_count == 3
        assert extracted.metadata["source"] == "pdf_text_v1"
        mock_open.assert_called_once_with("/tmp/agreement.pdf")

    @patch("infrastructure.text_sources.pdf_text_source.pdfplumber.open")
    def test_scanned_pdf_flagged(self, mock_open, source):
        mock_open.return_value = _mock_pdf(["", "x"])

        extracted = source.extract_text("/tmp/scan.pdf")

        assert extracted.metadata["text_coverage_ratio"] == pytest.approx(0.005)
        assert extracted.metadata["is_scanned"] is True

    @patch("infrastructure.text_sources.pdf_text_source.pdfplumber.open")
    def test_text_rich_pdf_not_flagged(self, mock_open, source):
        mock_open.return_value = _mock_pdf(["a" * 250])

        extracted = source.extract_text("/tmp/agreement.pdf")

        assert extracted.metadata["text_coverage_ratio"] == 1.0
        assert extracted.metadata["is_scanned"] is False

    @patch("infrastructure.text_sources.pdf_text_source.pdfplumber.open")
    def test_extract_pages(self, mock_open, source):
        mock_open.return_value = _mock_pdf(["page one", "page two", "page three"])

        extracted = source.extract_pages("/tmp/agreement.pdf", [1, 3, 7])

        assert extracted.text == "page one\npage three\n"
        assert extracted.page_count == 2
        assert extracted.metadata["total_pages"] == 3

    @patch("infrastructure.text_sources.pdf_text_source.pdfplumber.open")
    def test_extract_from_bytes(self, mock_open, source):
        mock_open.return_value = _mock_pdf(["in memory"])

        extracted = source.extract_text_from_bytes(b"%PDF-1.7")

        assert extracted.text == "in memory\n"

    @patch("infrastructure.text_sources.pdf_text_source.pdfplumber.open")
    def test_unreadable_pdf_raises(self, mock_open, source):
        mock_open.side_effect = ValueError("not a PDF")

        with pytest.raises(TextExtractionError, match="not a PDF"):
            source.extract_text("/tmp/broken.pdf")

    def test_coverage_ratio(self, source):
        assert source.calculate_text_coverage(50, 1) == 0.5
        assert source.calculate_text_coverage(500, 1) == 1.0
        assert source.calculate_text_coverage(10, 0) == 0.0


class TestPlainTextSource:
    """Test PlainTextSource"""

    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "agreement.txt"
        path.write_text("Customer Name : JOSÉ\fpage two", encoding="utf-8")

        extracted = PlainTextSource().extract_text(str(path))

        assert "JOSÉ" in extracted.text
        assert extracted.page_count == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(TextExtractionError):
            PlainTextSource().extract_text(str(tmp_path / "missing.txt"))


class TestTextSourceRegistry:
    """Test source selection"""

    def test_priority_selection(self):
        low = Mock(version="low", priority=50, **{"supports.return_value": True})
        high = Mock(version="high", priority=10, **{"supports.return_value": True})
        registry = TextSourceRegistry()
        registry.register(low)
        registry.register(high)

        assert registry.get_source("application/pdf") is high

    def test_no_source(self):
        registry = TextSourceRegistry()
        assert registry.get_source("application/pdf") is None
        assert registry.get_source("") is None

    def test_register_none_rejected(self):
        with pytest.raises(ValueError):
            TextSourceRegistry().register(None)

    @pytest.mark.parametrize("path,mime_type", [
        ("/data/RA.PDF", "application/pdf"),
        ("/data/ra.txt", "text/plain"),
        ("/data/ra.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("/data/ra.png", None),
    ])
    def test_guess_mime_type(self, path, mime_type):
        assert guess_mime_type(path) == mime_type

    @pytest.mark.parametrize("path,label", [("/data/ra.doc", "DOC"), ("/data/ra.docx", "DOCX")])
    def test_word_documents_unsupported(self, path, label):
        with pytest.raises(TextExtractionError, match=f"{label} processing is not supported"):
            get_text_source_registry().get_source_for_path(path)

    def test_unknown_suffix(self):
        with pytest.raises(TextExtractionError, match="Unsupported document type"):
            get_text_source_registry().get_source_for_path("/data/ra.png")

    def test_global_registry(self):
        reset_text_source_registry()
        registry = get_text_source_registry()

        assert registry is get_text_source_registry()
        assert isinstance(registry.get_source_for_path("/data/ra.pdf"), PDFTextSource)
        assert isinstance(registry.get_source_for_path("/data/ra.txt"), PlainTextSource)
        assert len(registry) == 2

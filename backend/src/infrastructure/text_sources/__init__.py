"""Text sources - adapters that turn document files into plain text."""

from .pdf_text_source import PDFTextSource
from .plain_text_source import PlainTextSource
from .registry import (
    TextSourceRegistry,
    get_text_source_registry,
    guess_mime_type,
    reset_text_source_registry,
)

__all__ = [
    "PDFTextSource",
    "PlainTextSource",
    "TextSourceRegistry",
    "get_text_source_registry",
    "guess_mime_type",
    "reset_text_source_registry",
]

"""Text Source Registry - selects the reader for a document file.

Sources register themselves with the MIME types they support; selection
prefers the lowest priority value among the sources that support a type.
"""

import logging
import os
from typing import List, Optional

from domain.extraction.errors import TextExtractionError
from domain.extraction.ports import TextSourcePort

logger = logging.getLogger(__name__)

# Suffix lookup is explicit so results don't depend on the host's mime.types
MIME_TYPES_BY_SUFFIX = {
    '.pdf': 'application/pdf',
    '.txt': 'text/plain',
    '.text': 'text/plain',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}

UNSUPPORTED_MIME_TYPES = {
    'application/msword': 'DOC',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': 'DOCX',
}


def guess_mime_type(path: str) -> Optional[str]:
    """Guess a document's MIME type from its file suffix."""
    _, suffix = os.path.splitext(path)
    return MIME_TYPES_BY_SUFFIX.get(suffix.lower())


class TextSourceRegistry:
    """Registry of available text sources.

    Example:
        registry = TextSourceRegistry()
        registry.register(PDFTextSource())
        registry.register(PlainTextSource())

        source = registry.get_source_for_path('/data/RA-1234.pdf')
        extracted = source.extract_text('/data/RA-1234.pdf')
    """

    def __init__(self):
        self._sources: List[TextSourcePort] = []

    def register(self, source: TextSourcePort) -> None:
        """Register a text source.

        Raises:
            ValueError: If source is None
        """
        if source is None:
            raise ValueError("Cannot register None as text source")

        self._sources.append(source)
        logger.info(f"Registered text source: {source.version}")

    def get_source(self, mime_type: str) -> Optional[TextSourcePort]:
        """Get the text source for a MIME type.

        Args:
            mime_type: MIME type of the document (e.g. 'application/pdf')

        Returns:
            Highest priority supporting source, or None if nothing supports it
        """
        if not mime_type:
            logger.warning("get_source called with empty mime_type")
            return None

        compatible = [source for source in self._sources if source.supports(mime_type)]
        if not compatible:
            logger.warning(f"No text source found for MIME type: {mime_type}")
            return None

        compatible.sort(key=lambda s: s.priority)
        selected = compatible[0]
        logger.debug(
            f"Selected text source {selected.version} for MIME type {mime_type} "
            f"(priority={selected.priority})"
        )
        return selected

    def get_source_for_path(self, path: str) -> TextSourcePort:
        """Get the text source for a file, based on its suffix.

        Raises:
            TextExtractionError: If the format is unsupported (DOC/DOCX, unknown suffix)
        """
        mime_type = guess_mime_type(path)

        if mime_type in UNSUPPORTED_MIME_TYPES:
            raise TextExtractionError(
                f"{UNSUPPORTED_MIME_TYPES[mime_type]} processing is not supported: {path}"
            )

        source = self.get_source(mime_type) if mime_type else None
        if source is None:
            raise TextExtractionError(f"Unsupported document type: {path}")
        return source

    def list_sources(self) -> List[TextSourcePort]:
        return list(self._sources)

    def clear(self) -> None:
        count = len(self._sources)
        self._sources.clear()
        logger.info(f"Cleared {count} text sources from registry")

    def __len__(self) -> int:
        return len(self._sources)


_global_registry: Optional[TextSourceRegistry] = None


def get_text_source_registry() -> TextSourceRegistry:
    """Get the process-wide text source registry, populated on first use."""
    global _global_registry

    if _global_registry is None:
        from .pdf_text_source import PDFTextSource
        from .plain_text_source import PlainTextSource

        registry = TextSourceRegistry()
        registry.register(PDFTextSource())
        registry.register(PlainTextSource())
        _global_registry = registry
        logger.debug("Initialized global text source registry")

    return _global_registry


def reset_text_source_registry() -> None:
    """Reset the global registry (primarily for testing)."""
    global _global_registry
    _global_registry = None

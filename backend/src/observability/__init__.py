"""Observability module for rental agreement extraction.

Provides structured logging, metrics and correlation IDs.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    documents_processed_total,
    extraction_duration_seconds,
    extraction_confidence_histogram,
    version_confidence_histogram,
    fields_extracted_total,
    low_confidence_total,
)
from .correlation import (
    correlation_id_var,
    get_correlation_id,
    set_correlation_id,
    reset_correlation_id,
    generate_correlation_id,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "documents_processed_total",
    "extraction_duration_seconds",
    "extraction_confidence_histogram",
    "version_confidence_histogram",
    "fields_extracted_total",
    "low_confidence_total",
    # Correlation ID
    "correlation_id_var",
    "get_correlation_id",
    "set_correlation_id",
    "reset_correlation_id",
    "generate_correlation_id",
]

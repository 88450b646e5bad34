"""Rental agreement extraction pipeline.

Field extraction, the per-document orchestrator and batch processing.
"""

from .batch import BatchItemFailure, extract_batch
from .field_extractor import extract_field
from .orchestrator import ExtractionOrchestrator, calculate_overall_confidence

__all__ = [
    "BatchItemFailure",
    "ExtractionOrchestrator",
    "calculate_overall_confidence",
    "extract_batch",
    "extract_field",
]

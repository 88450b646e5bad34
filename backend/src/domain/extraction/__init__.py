"""Domain layer for rental agreement extraction.

Defines result models, the transformation and validation libraries, the
confidence scorer, error types and the text source port.
"""

from .confidence import calculate_field_confidence
from .errors import (
    DocumentProcessingError,
    FieldProcessingError,
    InvalidInputError,
    RentalAgreementExtractionError,
    TemplateNotFoundError,
    TextExtractionError,
)
from .models import (
    DocumentExtraction,
    ExtractedText,
    FieldError,
    FieldExtractionResult,
    VersionMatch,
)
from .transformations import TRANSFORMATIONS, apply_transformations
from .validations import VALIDATIONS

__all__ = [
    "calculate_field_confidence",
    "DocumentProcessingError",
    "FieldProcessingError",
    "InvalidInputError",
    "RentalAgreementExtractionError",
    "TemplateNotFoundError",
    "TextExtractionError",
    "DocumentExtraction",
    "ExtractedText",
    "FieldError",
    "FieldExtractionResult",
    "VersionMatch",
    "TRANSFORMATIONS",
    "apply_transformations",
    "VALIDATIONS",
]

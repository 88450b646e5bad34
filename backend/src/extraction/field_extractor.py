"""Field extraction: ordered pattern matching for a single field.

Strategy is greedy first-match-wins: patterns are tried in declaration order
and the first one whose capture group is non-empty decides the value. Later
patterns are never evaluated, even if they would score higher, so template
authors order patterns most specific first.
"""

import logging
from typing import Optional

from domain.extraction.confidence import calculate_field_confidence
from domain.extraction.models import FieldExtractionResult
from domain.extraction.transformations import apply_transformations
from domain.templates.definitions import FieldDefinition

logger = logging.getLogger(__name__)


def extract_field(text: str, field: FieldDefinition) -> FieldExtractionResult:
    """Extract one field from document text.

    A pattern that raises (while matching, transforming or scoring) is
    logged, its error is kept on the result, and the next pattern is tried.

    Args:
        text: Full document text
        field: Field definition with ordered patterns

    Returns:
        FieldExtractionResult; unmatched fields have no value and confidence 0

    Example:
        >>> result = extract_field("RENTAL AGREEMENT NUMBER 12345678", ra_number_field)
        >>> result.matched, result.extracted_value, result.confidence
        (True, '12345678', 1.0)
    """
    error: Optional[str] = None

    for pattern in field.patterns:
        try:
            match = pattern.search(text)
            if not match or not match.group(1):
                continue

            extracted_value = match.group(1).strip()
            transformed_value = apply_transformations(extracted_value, field.transformations)
            confidence = calculate_field_confidence(transformed_value, field)
        except Exception as e:
            logger.warning(
                f"Error with pattern {pattern.pattern!r} for field {field.display_name}: {e}",
                extra={"field_name": field.display_name},
            )
            error = str(e)
            continue

        return FieldExtractionResult(
            matched=True,
            extracted_value=extracted_value,
            transformed_value=transformed_value,
            confidence=confidence,
            error=error,
        )

    return FieldExtractionResult.unmatched(error=error)

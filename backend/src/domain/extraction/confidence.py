"""Confidence calculation for extracted field values.

Confidence is a deterministic heuristic trust estimate between 0 and 1, used
by claim intake to route uncertain extractions to manual review.

Formula for value v of field f:
- v is None -> 0
- base 0.5
- validations: + 0.3 * (passed / total), or + 0.15 when f has none
- + 0.2 when f is required and v is truthy
- type adjustments:
    str: len < 2 -> x0.5, len > 100 -> x0.8,
         ID-like (^[A-Z0-9-]+$) -> x1.1, Proper Name-like -> x1.1
    bool: forced to 1.0
    int/float: 0 <= v < 1,000,000 -> x1.1
- x1.1 when one of f's own patterns contains f's display name
- clamped to [0, 1]
"""

import re
from typing import TYPE_CHECKING, Any

from .validations import get_validation

if TYPE_CHECKING:
    from domain.templates.definitions import FieldDefinition


BASE_SCORE = 0.5
VALIDATION_WEIGHT = 0.3
NO_VALIDATION_BONUS = 0.15
REQUIRED_BONUS = 0.2

SHORT_VALUE_LENGTH = 2
SHORT_VALUE_FACTOR = 0.5
LONG_VALUE_LENGTH = 100
LONG_VALUE_FACTOR = 0.8
FORMAT_BOOST = 1.1
NUMBER_RANGE_LIMIT = 1_000_000
CONTEXT_BOOST = 1.1

ID_FORMAT = re.compile(r'^[A-Z0-9-]+$')
NAME_FORMAT = re.compile(r'^[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*$')


def calculate_validation_score(value: Any, field: "FieldDefinition") -> float:
    """Additive score from the field's validations.

    Returns:
        0.3 * fraction passed, or 0.15 when the field has no validations
    """
    if not field.validations:
        return NO_VALIDATION_BONUS

    passed = sum(1 for name in field.validations if get_validation(name)(value))
    return (passed / len(field.validations)) * VALIDATION_WEIGHT


def apply_type_adjustments(score: float, value: Any) -> float:
    """Apply the type-specific multipliers to an additive score."""
    if isinstance(value, bool):
        # Clear checkbox/acceptance markers are fully trusted
        return 1.0

    if isinstance(value, str):
        if len(value) < SHORT_VALUE_LENGTH:
            score *= SHORT_VALUE_FACTOR
        if len(value) > LONG_VALUE_LENGTH:
            score *= LONG_VALUE_FACTOR
        if ID_FORMAT.fullmatch(value):
            score *= FORMAT_BOOST
        if NAME_FORMAT.fullmatch(value):
            score *= FORMAT_BOOST
    elif isinstance(value, (int, float)):
        if 0 <= value < NUMBER_RANGE_LIMIT:
            score *= FORMAT_BOOST

    return score


def has_display_name_in_patterns(field: "FieldDefinition") -> bool:
    """Check whether any of the field's own patterns mentions its display name."""
    if not field.display_name or not field.patterns:
        return False
    display_name = field.display_name.lower()
    return any(display_name in pattern.pattern.lower() for pattern in field.patterns)


def calculate_field_confidence(value: Any, field: "FieldDefinition") -> float:
    """Calculate the confidence score for one extracted value.

    Args:
        value: Transformed field value (str, bool, int, float or None)
        field: Definition the value was extracted with

    Returns:
        Score between 0.0 and 1.0

    Example:
        >>> calculate_field_confidence('12345678', ra_number_field)
        1.0
        >>> calculate_field_confidence(None, ra_number_field)
        0.0
    """
    if value is None:
        return 0.0

    score = BASE_SCORE
    score += calculate_validation_score(value, field)

    if field.required and value:
        score += REQUIRED_BONUS

    score = apply_type_adjustments(score, value)

    if has_display_name_in_patterns(field):
        score *= CONTEXT_BOOST

    return min(1.0, max(0.0, score))

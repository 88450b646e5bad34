"""Validation predicates for extracted values.

Validations never gate a match. The confidence scorer counts how many of a
field's validations pass and adds a proportional bonus.
"""

import re
from typing import Any, Callable, Dict

from .date_parser import is_valid_date

Validation = Callable[[Any], bool]

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
NUMERIC_PATTERN = re.compile(r'^\d+$', re.ASCII)
# 17 characters, never I, O or Q
VIN_PATTERN = re.compile(r'^[A-HJ-NPR-Z0-9]{17}$', re.IGNORECASE)


def is_not_empty(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def is_email(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_phone_number(value: Any) -> bool:
    """Check that the value carries between 10 and 15 digits."""
    if not value or not isinstance(value, str):
        return False
    digits = re.sub(r'\D', '', value, flags=re.ASCII)
    return 10 <= len(digits) <= 15


def is_date(value: Any) -> bool:
    if not value:
        return False
    return is_valid_date(value)


def is_numeric(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return NUMERIC_PATTERN.fullmatch(value) is not None


def is_valid_vin(value: Any) -> bool:
    """Check a Vehicle Identification Number.

    Examples:
        >>> is_valid_vin('1HGCM82633A004352')
        True
        >>> is_valid_vin('1HGCM82633A00435')   # 16 characters
        False
    """
    if not value or not isinstance(value, str):
        return False
    return VIN_PATTERN.fullmatch(value) is not None


VALIDATIONS: Dict[str, Validation] = {
    'is_not_empty': is_not_empty,
    'is_email': is_email,
    'is_phone_number': is_phone_number,
    'is_date': is_date,
    'is_numeric': is_numeric,
    'is_valid_vin': is_valid_vin,
}


def get_validation(name: str) -> Validation:
    """Look up a registered validation.

    Raises:
        KeyError: If no validation is registered under ``name``
    """
    try:
        return VALIDATIONS[name]
    except KeyError:
        raise KeyError(f"Unknown validation: {name}") from None

"""Transformation functions applied to extracted values.

Each transformation is a pure function registered under a name in
``TRANSFORMATIONS``. Field definitions reference transformations by name and
the field extractor folds them left to right over the raw capture.

All functions pass falsy input through unchanged, except ``parse_boolean``
which maps it to False.
"""

import re
from typing import Any, Callable, Dict

from .date_parser import format_date_iso

Transformation = Callable[[Any], Any]

# Branch address appended to Las Vegas pickup/return locations, which the
# agreement prints without city, state and zip.
LAS_VEGAS_BRANCH_SUFFIX = "LAS VEGAS, NV 89103"

TRUTHY_VALUES = frozenset([
    'yes', 'y', 'true', 'accepted', 'accept', 'selected', 'x', 'checked',
])

_NON_DIGITS = re.compile(r'\D', re.ASCII)
_WHITESPACE = re.compile(r'\s+')


def to_upper_case(value: Any) -> Any:
    return value.upper() if value else value


def to_lower_case(value: Any) -> Any:
    return value.lower() if value else value


def format_phone_number(value: Any) -> Any:
    """Format as XXX-XXX-XXXX when 10 digits remain, else return the digits.

    Examples:
        >>> format_phone_number('(702) 555-0199')
        '702-555-0199'
        >>> format_phone_number('+44 20 7946 0958')
        '442079460958'
    """
    if not value:
        return value

    digits = _NON_DIGITS.sub('', value)
    if len(digits) == 10:
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"

    return digits


def format_date(value: Any) -> Any:
    """Format a date string as YYYY-MM-DD, returning the input if unparseable."""
    if not value:
        return value

    formatted = format_date_iso(value)
    return formatted if formatted is not None else value


def extract_digits(value: Any) -> Any:
    if not value:
        return value
    return _NON_DIGITS.sub('', value)


def clean_text(value: Any) -> Any:
    """Trim and collapse internal whitespace runs to a single space."""
    if not value:
        return value
    return _WHITESPACE.sub(' ', value.strip())


def parse_boolean(value: Any) -> bool:
    """Normalize checkbox/acceptance markers to a boolean.

    Examples:
        >>> parse_boolean('Accepted')
        True
        >>> parse_boolean('Declined')
        False
    """
    if not value:
        return False
    return value.strip().lower() in TRUTHY_VALUES


def append_las_vegas_branch(value: Any) -> Any:
    if not value:
        return value
    return f"{value.strip()}, {LAS_VEGAS_BRANCH_SUFFIX}"


TRANSFORMATIONS: Dict[str, Transformation] = {
    'to_upper_case': to_upper_case,
    'to_lower_case': to_lower_case,
    'format_phone_number': format_phone_number,
    'format_date': format_date,
    'extract_digits': extract_digits,
    'clean_text': clean_text,
    'parse_boolean': parse_boolean,
    'append_las_vegas_branch': append_las_vegas_branch,
}


def get_transformation(name: str) -> Transformation:
    """Look up a registered transformation.

    Raises:
        KeyError: If no transformation is registered under ``name``
    """
    try:
        return TRANSFORMATIONS[name]
    except KeyError:
        raise KeyError(f"Unknown transformation: {name}") from None


def apply_transformations(value: Any, names) -> Any:
    """Fold the named transformations left to right over ``value``."""
    for name in names:
        value = get_transformation(name)(value)
    return value

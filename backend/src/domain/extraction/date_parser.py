"""Date parsing utilities for extraction module.

Parses dates from the formats printed on US rental agreements, including the
``NOV 14,2023@10:00 AM`` style used by pickup and return timestamps.
"""

import logging
import re
from datetime import datetime, date
from typing import Any, Optional

logger = logging.getLogger(__name__)


# Common date format patterns (order matters - most specific first)
DATE_FORMATS = [
    # ISO format
    '%Y-%m-%d',          # 2024-01-15
    '%Y-%m-%dT%H:%M:%S', # 2024-01-15T14:30:00
    '%Y-%m-%d %H:%M:%S', # 2024-01-15 14:30:00

    # US formats (MM/DD/YYYY)
    '%m/%d/%Y',          # 01/15/2024
    '%m/%d/%y',          # 01/15/24
    '%m-%d-%Y',          # 01-15-2024
    '%m/%d/%Y %I:%M %p', # 01/15/2024 10:00 AM
    '%m/%d/%Y %H:%M',    # 01/15/2024 14:30

    # Month names
    '%b %d,%Y',          # NOV 14,2023
    '%b %d, %Y',         # Nov 14, 2023
    '%B %d, %Y',         # November 14, 2023
    '%b %d,%Y %I:%M %p', # NOV 14,2023 10:00 AM
    '%b %d, %Y %I:%M %p',
    '%d %B %Y',          # 14 November 2023
    '%d %b %Y',          # 14 Nov 2023
]

# Rental agreements print "date@time"
_AT_SEPARATOR = re.compile(r'\s*@\s*')


def _normalize(value: str) -> str:
    value = _AT_SEPARATOR.sub(' ', value.strip())
    return re.sub(r'\s+', ' ', value)


def parse_date(value: Any) -> Optional[date]:
    """Parse date from various string formats.

    Args:
        value: Date value to parse (str, date, datetime, or None)

    Returns:
        date object or None if parsing fails

    Examples:
        >>> parse_date('2024-01-15')
        date(2024, 1, 15)
        >>> parse_date('01/15/2024')
        date(2024, 1, 15)
        >>> parse_date('NOV 14,2023@10:00 AM')
        date(2023, 11, 14)
        >>> parse_date('invalid')
        None
    """
    if value is None or isinstance(value, bool):
        return None

    # datetime is a subclass of date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        value = str(value)

    value = _normalize(value)
    if not value:
        return None

    for fmt in DATE_FORMATS:
        try:
            dt = datetime.strptime(value, fmt)
            return dt.date()
        except ValueError:
            continue

    logger.debug(f"Failed to parse date: {value}")
    return None


def format_date_iso(value: Any) -> Optional[str]:
    """Format date as ISO string (YYYY-MM-DD), or None if unparseable."""
    parsed = parse_date(value)
    if parsed is None:
        return None

    return parsed.isoformat()


def is_valid_date(value: Any) -> bool:
    """Check if value can be parsed as a valid date."""
    return parse_date(value) is not None

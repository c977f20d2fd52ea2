"""
Input validation helper functions.
Provides validation for emails, dates, room capacity and free text.
"""

import re
from datetime import date, datetime

ROOM_CAPACITY = {
    'single': 2,
    'double': 4,
}


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    return bool(re.match(r'^[^\s@]+@[^\s@]+\.[^\s@]+$', email))


def validate_rfc(rfc: str) -> bool:
    """
    Validate Mexican RFC (tax id) format.
    Companies use 12 characters, individuals 13.

    Args:
        rfc: RFC to validate

    Returns:
        True if valid RFC format
    """
    if not rfc:
        return False

    return bool(re.match(r'^[A-ZÑ&]{3,4}\d{6}[A-Z0-9]{3}$', rfc.strip().upper()))


def parse_iso_date(date_str: str) -> date | None:
    """
    Parse a YYYY-MM-DD string (a trailing time part is ignored).

    Args:
        date_str: Date string

    Returns:
        date or None if missing/invalid
    """
    if not date_str:
        return None
    if isinstance(date_str, date):
        return date_str
    try:
        return datetime.strptime(str(date_str)[:10], '%Y-%m-%d').date()
    except ValueError:
        return None


def validate_date_range(start_date: str, end_date: str) -> bool:
    """
    Validate that the end date is strictly after the start date (at least one night).

    Args:
        start_date: Check-in date (YYYY-MM-DD)
        end_date: Check-out date (YYYY-MM-DD)

    Returns:
        True if valid date range
    """
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if start is None or end is None:
        return False
    return end > start


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return True
    except (TypeError, ValueError):
        return False


def validate_guest_count(room_type: str, guests: int) -> bool:
    """
    Validate the number of people against the room capacity.

    Args:
        room_type: 'single' or 'double'
        guests: Number of people

    Returns:
        True if at least one person and within capacity
    """
    capacity = ROOM_CAPACITY.get(room_type)
    if capacity is None or guests is None:
        return False
    return 1 <= guests <= capacity


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized

"""
Miscellaneous utility helper functions.
Provides formatting and code generation used across the application.
"""

import random
import string
import time
from datetime import datetime

from utils.validators import parse_iso_date

WEEKDAYS_ES = {
    0: 'lunes',
    1: 'martes',
    2: 'miércoles',
    3: 'jueves',
    4: 'viernes',
    5: 'sábado',
    6: 'domingo'
}

MONTHS_ES = {
    1: 'enero', 2: 'febrero', 3: 'marzo', 4: 'abril',
    5: 'mayo', 6: 'junio', 7: 'julio', 8: 'agosto',
    9: 'septiembre', 10: 'octubre', 11: 'noviembre', 12: 'diciembre'
}

ROOM_TYPE_LABELS = {
    'single': 'Sencilla',
    'double': 'Doble',
}


def format_date(date_str: str, format_str: str = '%d/%m/%Y') -> str:
    """
    Format date string to numeric Mexican format.

    Args:
        date_str: Date string (YYYY-MM-DD, optionally with time)
        format_str: Output format (default: DD/MM/YYYY)

    Returns:
        Formatted date string or original if invalid
    """
    date_obj = parse_iso_date(date_str)
    if date_obj is None:
        return date_str or ''
    return date_obj.strftime(format_str)


def format_long_date(date_str: str) -> str:
    """
    Format date as '15 de enero de 2025'.

    Args:
        date_str: Date string (YYYY-MM-DD, optionally with time)

    Returns:
        Long Spanish date or original if invalid
    """
    date_obj = parse_iso_date(date_str)
    if date_obj is None:
        return date_str or ''
    return f'{date_obj.day} de {MONTHS_ES[date_obj.month]} de {date_obj.year}'


def split_date_es(date_str: str) -> dict | None:
    """
    Break a date into the parts shown on the reservation panel.

    Args:
        date_str: Date string (YYYY-MM-DD)

    Returns:
        Dict with weekday, day, month, year or None if missing/invalid
    """
    date_obj = parse_iso_date(date_str)
    if date_obj is None:
        return None
    return {
        'weekday': WEEKDAYS_ES[date_obj.weekday()],
        'day': date_obj.day,
        'month': MONTHS_ES[date_obj.month],
        'year': date_obj.year,
    }


def format_currency(amount) -> str:
    """
    Format amount as Mexican pesos, e.g. '$1,250.00'.

    Args:
        amount: Number (None is treated as 0)

    Returns:
        Formatted currency string
    """
    try:
        value = float(amount or 0)
    except (TypeError, ValueError):
        value = 0.0
    sign = '-' if value < 0 else ''
    return f'{sign}${abs(value):,.2f}'


def nights_label(nights: int) -> str:
    """'1 noche' / 'N noches'."""
    return f'{nights} noche' if nights == 1 else f'{nights} noches'


def room_type_label(room_type: str) -> str:
    """Spanish room type label; anything but 'single' is a double room."""
    return ROOM_TYPE_LABELS['single'] if room_type == 'single' else ROOM_TYPE_LABELS['double']


def generate_confirmation_code(prefix: str = 'RES') -> str:
    """
    Generate a booking confirmation code from the current epoch milliseconds.

    Args:
        prefix: Code prefix

    Returns:
        Code like 'RES123456'
    """
    millis = str(int(time.time() * 1000))
    return f'{prefix}{millis[-6:]}'


def generate_unique_code(prefix: str = '', length: int = 8) -> str:
    """
    Generate random alphanumeric code (chat session ids, etc.).

    Args:
        prefix: Optional prefix
        length: Length of random part

    Returns:
        Unique code string
    """
    random_part = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))

    if prefix:
        return f'{prefix}-{random_part}'

    return random_part


def format_datetime(value, format_str: str = '%d/%m/%Y %H:%M') -> str:
    """
    Format an ISO timestamp (as returned by the backend) for display.

    Args:
        value: ISO 8601 string or datetime
        format_str: Output format

    Returns:
        Formatted string or original if invalid
    """
    if not value:
        return ''
    if isinstance(value, datetime):
        return value.strftime(format_str)
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00')).strftime(format_str)
    except ValueError:
        return str(value)


def initial(name: str) -> str:
    """First letter of a name, uppercased, for avatar badges."""
    return (name or '?').strip()[:1].upper() or '?'

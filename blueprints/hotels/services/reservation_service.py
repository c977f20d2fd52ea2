"""
Manual reservation rules.
Validates the reservation form for a catalogue hotel and stores the
resulting booking before the visitor is sent to checkout.
"""

from models.booking import create_booking
from models.hotel import calculate_total_price
from utils.datetime_helpers import get_today
from utils.helpers import generate_confirmation_code
from utils.messages import MESSAGES
from utils.validators import (ROOM_CAPACITY, parse_iso_date, validate_date_range,
                              validate_guest_count)


def parse_reservation_form(form, default_guest: str = '') -> dict:
    """
    Read the manual reservation form.

    Args:
        form: request.form
        default_guest: Main guest used when the field is left empty

    Returns:
        Dict with check_in, check_out, room_type, people, main_guest,
        additional_guests
    """
    try:
        people = int(form.get('people', 1))
    except (TypeError, ValueError):
        people = 0

    room_type = form.get('room_type', 'single')
    additional = [name.strip() for name in form.getlist('additional_guests')]

    return {
        'check_in': form.get('check_in', '').strip(),
        'check_out': form.get('check_out', '').strip(),
        'room_type': room_type if room_type in ROOM_CAPACITY else 'single',
        'people': people,
        'main_guest': form.get('main_guest', '').strip() or default_guest,
        # One name per person besides the main guest
        'additional_guests': additional[:max(people - 1, 0)],
    }


def validate_manual_reservation(data: dict, today=None) -> tuple:
    """
    Validate a manual reservation.

    Args:
        data: Parsed form (see parse_reservation_form)
        today: Reference date (defaults to today in the configured timezone)

    Returns:
        Tuple of (is_valid, error_message)
    """
    today = today or get_today()

    check_in = parse_iso_date(data.get('check_in'))
    if check_in is None or parse_iso_date(data.get('check_out')) is None:
        return False, 'Selecciona las fechas de entrada y salida'

    if check_in < today:
        return False, MESSAGES['past_check_in']

    if not validate_date_range(data['check_in'], data['check_out']):
        return False, MESSAGES['invalid_date_range']

    if not validate_guest_count(data.get('room_type'), data.get('people')):
        return False, MESSAGES['invalid_capacity']

    if not data.get('main_guest'):
        return False, 'El nombre del huésped principal es requerido'

    return True, ''


def create_manual_booking(hotel: dict, data: dict, user_id: str) -> dict:
    """
    Store a pending booking for a validated manual reservation.

    Args:
        hotel: Normalised hotel dict
        data: Validated form data
        user_id: Owner user ID

    Returns:
        Inserted booking dict
    """
    quote = calculate_total_price(hotel, data['check_in'], data['check_out'], data['room_type'])
    return create_booking(
        confirmation_code=generate_confirmation_code(),
        user_id=user_id,
        hotel_name=hotel['brand'],
        check_in=data['check_in'],
        check_out=data['check_out'],
        room_type=data['room_type'],
        total_price=quote['total'],
        status='pending',
        image_url=hotel.get('image') or None,
    )

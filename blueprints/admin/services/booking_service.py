"""
Business logic for admin booking management.
"""

from models.booking import create_booking
from models.user import get_user_by_email
from utils.helpers import generate_confirmation_code
from utils.messages import MESSAGES
from utils.validators import ROOM_CAPACITY, validate_date_range, validate_email


def validate_admin_booking(form) -> tuple:
    """
    Validate the admin "new booking" form.

    Args:
        form: request.form

    Returns:
        Tuple of (is_valid, error_message, cleaned_data)
    """
    data = {
        'email': form.get('email', '').strip().lower(),
        'hotel_name': form.get('hotel_name', '').strip(),
        'check_in': form.get('check_in', '').strip(),
        'check_out': form.get('check_out', '').strip(),
        'room_type': form.get('room_type', 'single'),
        'total_price': form.get('total_price', '').strip(),
    }

    if not validate_email(data['email']):
        return False, MESSAGES['invalid_email'], data

    if not data['hotel_name']:
        return False, 'El nombre del hotel es requerido', data

    if not validate_date_range(data['check_in'], data['check_out']):
        return False, MESSAGES['invalid_date_range'], data

    if data['room_type'] not in ROOM_CAPACITY:
        return False, 'Tipo de habitación no válido', data

    try:
        data['total_price'] = float(data['total_price'])
    except ValueError:
        return False, 'El precio total debe ser un número', data
    if data['total_price'] < 0:
        return False, 'El precio total no puede ser negativo', data

    return True, '', data


def create_booking_for_email(data: dict) -> dict:
    """
    Create a pending booking for the user registered with data['email'].

    Args:
        data: Cleaned data from validate_admin_booking

    Returns:
        Inserted booking dict, or None if no user has that email
    """
    user = get_user_by_email(data['email'])
    if not user:
        return None

    return create_booking(
        confirmation_code=generate_confirmation_code('RES'),
        user_id=user['id'],
        hotel_name=data['hotel_name'],
        check_in=data['check_in'],
        check_out=data['check_out'],
        room_type=data['room_type'],
        total_price=data['total_price'],
        status='pending',
    )

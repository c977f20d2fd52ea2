"""
Chat assistant webhook client.
Sends the visitor's message to the assistant and normalises the reservation
details it returns (camelCase JSON) into the snake_case dict the templates use.
"""

import logging

import requests
from flask import current_app

from models.booking import calculate_nights

logger = logging.getLogger(__name__)


class ChatWebhookError(Exception):
    """Chat webhook failure carrying a user-facing (Spanish) message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def empty_booking_data() -> dict:
    """Booking details before the assistant has collected anything."""
    return {
        'confirmation_code': None,
        'hotel': {'name': None, 'location': None, 'image': None, 'additional_images': []},
        'dates': {'check_in': None, 'check_out': None},
        'room': {'type': None, 'price_per_night': None, 'total_price': None},
        'guests': [],
        'total_nights': None,
    }


def parse_booking_data(raw: dict) -> dict:
    """
    Normalise the assistant's bookingData.

    Args:
        raw: bookingData object as sent by the webhook (may be None)

    Returns:
        Booking data dict (see empty_booking_data)
    """
    data = empty_booking_data()
    if not isinstance(raw, dict):
        return data

    hotel = raw.get('hotel') or {}
    dates = raw.get('dates') or {}
    room = raw.get('room') or {}

    data['confirmation_code'] = raw.get('confirmationCode')
    data['hotel'] = {
        'name': hotel.get('name'),
        'location': hotel.get('location'),
        'image': hotel.get('image'),
        'additional_images': list(hotel.get('additionalImages') or []),
    }
    data['dates'] = {
        'check_in': dates.get('checkIn'),
        'check_out': dates.get('checkOut'),
    }
    room_type = room.get('type')
    data['room'] = {
        'type': room_type if room_type in ('single', 'double') else None,
        'price_per_night': room.get('pricePerNight'),
        'total_price': room.get('totalPrice'),
    }
    data['guests'] = [g for g in (raw.get('guests') or []) if g]

    total_nights = raw.get('totalNights')
    if total_nights is None and data['dates']['check_in'] and data['dates']['check_out']:
        total_nights = calculate_nights(data['dates']['check_in'], data['dates']['check_out']) or None
    data['total_nights'] = total_nights
    return data


def merge_booking_data(current: dict, update: dict) -> dict:
    """
    Overlay newly reported details on what the panel already shows.
    Fields the assistant left empty keep their previous value.
    """
    merged = empty_booking_data()
    current = current or empty_booking_data()
    for key in ('confirmation_code', 'total_nights'):
        merged[key] = update.get(key) if update.get(key) is not None else current.get(key)
    for section in ('hotel', 'dates', 'room'):
        for field, value in merged[section].items():
            new_value = (update.get(section) or {}).get(field)
            old_value = (current.get(section) or {}).get(field, value)
            merged[section][field] = new_value if new_value not in (None, []) else old_value
    if update.get('total_nights') is None and merged['dates']['check_in'] and merged['dates']['check_out']:
        # Dates may have changed one at a time
        merged['total_nights'] = calculate_nights(merged['dates']['check_in'],
                                                  merged['dates']['check_out']) or None
    merged['guests'] = update.get('guests') or current.get('guests') or []
    return merged


def has_booking_details(booking_data: dict) -> bool:
    """True once any of hotel, check-in, room type or confirmation code is known."""
    if not booking_data:
        return False
    return bool(
        (booking_data.get('hotel') or {}).get('name') or
        (booking_data.get('dates') or {}).get('check_in') or
        (booking_data.get('room') or {}).get('type') or
        booking_data.get('confirmation_code')
    )


def send_chat_message(message: str, session_id: str, user_id: str = None) -> dict:
    """
    Send one visitor message to the assistant.

    Args:
        message: Visitor text
        session_id: Conversation id kept in the Flask session
        user_id: Authenticated user ID (optional)

    Returns:
        Dict with output (markdown reply), type and booking_data (None when
        the reply carries no reservation details)

    Raises:
        ChatWebhookError: On transport errors, non-2xx answers or bad JSON
    """
    endpoint = current_app.config.get('CHAT_WEBHOOK_URL')
    if not endpoint:
        raise ChatWebhookError('El asistente no está disponible en este momento')

    try:
        response = requests.post(
            endpoint,
            json={'sessionId': session_id, 'chatInput': message, 'userId': user_id},
            timeout=current_app.config.get('REQUEST_TIMEOUT', 15),
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f'Chat webhook call failed: {e}')
        raise ChatWebhookError(
            'Lo siento, ocurrió un error al procesar tu mensaje. Por favor intenta de nuevo.'
        ) from e

    # The workflow engine answers with a one-element list
    if isinstance(payload, list):
        payload = payload[0] if payload else {}
    if not isinstance(payload, dict):
        payload = {}

    raw_booking = (payload.get('data') or {}).get('bookingData')
    return {
        'output': payload.get('output') or '',
        'type': payload.get('type'),
        'booking_data': parse_booking_data(raw_booking) if raw_booking else None,
    }

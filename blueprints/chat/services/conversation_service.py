"""
Chat conversation state.
The conversation id, the reservation details collected so far, the prompt
counter for anonymous visitors and the confirmation codes already saved
live in the Flask session. The message history itself is kept by the
browser.
"""

import logging

from flask import current_app, session

from blueprints.chat.services.webhook_service import empty_booking_data
from models.booking import create_booking, select_booking_image
from utils.helpers import generate_unique_code
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)

CONVERSATION_KEY = 'chat_session_id'
BOOKING_DATA_KEY = 'chat_booking'
PROMPT_COUNT_KEY = 'chat_prompt_count'
SAVED_CODES_KEY = 'chat_saved_codes'


def get_conversation_id() -> str:
    """Conversation id sent to the assistant; created on first use."""
    conversation_id = session.get(CONVERSATION_KEY)
    if not conversation_id:
        conversation_id = generate_unique_code('CHAT', 12)
        session[CONVERSATION_KEY] = conversation_id
    return conversation_id


def get_booking_data() -> dict:
    """Reservation details shown on the panel."""
    return session.get(BOOKING_DATA_KEY) or empty_booking_data()


def store_booking_data(booking_data: dict) -> None:
    session[BOOKING_DATA_KEY] = booking_data


def get_prompt_count() -> int:
    return int(session.get(PROMPT_COUNT_KEY, 0))


def prompt_limit_reached(is_authenticated: bool) -> bool:
    """
    Anonymous visitors may only send a limited number of messages.

    Args:
        is_authenticated: Whether the visitor is logged in

    Returns:
        True if the visitor must log in before sending another message
    """
    if is_authenticated:
        return False
    limit = current_app.config.get('CHAT_ANONYMOUS_PROMPT_LIMIT', 3)
    return get_prompt_count() >= limit


def register_prompt() -> int:
    """Count one sent message and return the new total."""
    count = get_prompt_count() + 1
    session[PROMPT_COUNT_KEY] = count
    return count


def save_confirmed_booking(booking_data: dict, user) -> dict:
    """
    Save the booking once the assistant reports a confirmation code.

    Each confirmation code is saved at most once per conversation.

    Args:
        booking_data: Merged reservation details
        user: current_user

    Returns:
        Dict with saved (bool), error (message or None) and booking (row or None)
    """
    code = booking_data.get('confirmation_code')
    saved_codes = session.get(SAVED_CODES_KEY, [])
    if not code or code in saved_codes:
        return {'saved': False, 'error': None, 'booking': None}

    if not getattr(user, 'is_authenticated', False):
        return {'saved': False, 'error': MESSAGES['not_authenticated'], 'booking': None}

    hotel = booking_data.get('hotel') or {}
    dates = booking_data.get('dates') or {}
    room = booking_data.get('room') or {}

    try:
        booking = create_booking(
            confirmation_code=code,
            user_id=user.id,
            hotel_name=hotel.get('name'),
            check_in=dates.get('check_in'),
            check_out=dates.get('check_out'),
            room_type=room.get('type'),
            total_price=room.get('total_price'),
            status='pending',
            image_url=select_booking_image(hotel, current_app.config['DEFAULT_HOTEL_IMAGE']),
        )
    except Exception as e:
        logger.error(f'Error saving chat booking {code}: {e}', exc_info=True)
        return {'saved': False, 'error': MESSAGES['booking_save_error'], 'booking': None}

    session[SAVED_CODES_KEY] = saved_codes + [code]
    logger.info(f'Chat booking {code} saved for user {user.id}')
    return {'saved': True, 'error': None, 'booking': booking}


def reset_conversation() -> None:
    """Start a new conversation. The anonymous prompt counter is kept."""
    for key in (CONVERSATION_KEY, BOOKING_DATA_KEY, SAVED_CODES_KEY):
        session.pop(key, None)

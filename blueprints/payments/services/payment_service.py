"""
Recording of completed checkouts.
A paid checkout session produces one payments row and completes its booking.
"""

import logging

from models.booking import get_booking_by_id, get_booking_by_code, update_booking_status
from models.payment import get_payment_by_checkout_session, create_payment

logger = logging.getLogger(__name__)


def resolve_booking(metadata: dict, checkout_session: dict) -> dict:
    """
    Find the booking a checkout session paid for.

    The success URL metadata is tried first, then the metadata stored on
    the session itself; booking_id wins over confirmation_code.

    Returns:
        Booking dict or None
    """
    for source in (metadata or {}, (checkout_session or {}).get('metadata') or {}):
        if source.get('booking_id'):
            booking = get_booking_by_id(source['booking_id'])
            if booking:
                return booking
        if source.get('confirmation_code'):
            booking = get_booking_by_code(source['confirmation_code'])
            if booking:
                return booking
    return None


def record_checkout_payment(checkout_session: dict, booking: dict, user_id: str,
                            checkout_session_id: str = None) -> tuple:
    """
    Store the payment of a paid checkout session and complete the booking.

    Args:
        checkout_session: Session dict returned by the checkout API
        booking: Paid booking
        user_id: Payer user ID
        checkout_session_id: Session ID from the success URL, used when the
            session body carries no id

    Returns:
        Tuple of (payment dict, created) where created is False when the
        session had already been recorded
    """
    session_id = checkout_session.get('id') or checkout_session_id
    existing = get_payment_by_checkout_session(session_id) if session_id else None
    if existing:
        return existing, False

    amount_total = checkout_session.get('amount_total')
    amount = amount_total / 100 if amount_total is not None else booking.get('total_price')

    payment = create_payment(
        user_id=user_id or booking.get('user_id'),
        booking_id=booking['id'],
        amount=amount,
        currency=checkout_session.get('currency') or 'mxn',
        status='completed',
        checkout_session_id=session_id,
    )
    update_booking_status(booking['id'], 'completed')
    logger.info(f"Payment recorded for booking {booking.get('confirmation_code')} (session {session_id})")
    return payment, True

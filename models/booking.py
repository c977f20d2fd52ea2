"""
Booking model.
Data access for the bookings table plus the night-count arithmetic and
in-memory filtering used by the booking pages.
"""

from database import get_db, tables
from utils.validators import parse_iso_date

BOOKING_STATUSES = ('pending', 'completed', 'cancelled')


def calculate_nights(check_in: str, check_out: str) -> int:
    """
    Number of nights between two dates (calendar-day difference).

    Args:
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)

    Returns:
        Day difference, 0 if either date is missing or invalid
    """
    start = parse_iso_date(check_in)
    end = parse_iso_date(check_out)
    if start is None or end is None:
        return 0
    return (end - start).days


def get_user_bookings(user_id: str) -> list:
    """
    Get a user's bookings, newest first.

    Args:
        user_id: Owner user ID

    Returns:
        List of booking dicts
    """
    response = (
        get_db().table(tables.BOOKINGS)
        .select('*')
        .eq('user_id', user_id)
        .order('created_at', desc=True)
        .execute()
    )
    return response.data or []


def get_all_bookings() -> list:
    """
    Get every booking with its user's email and metadata, newest first.

    Returns:
        List of booking dicts with a nested 'user' dict
    """
    response = (
        get_db().table(tables.BOOKINGS)
        .select('*, user:user_id(email, user_metadata)')
        .order('created_at', desc=True)
        .execute()
    )
    return response.data or []


def get_recent_bookings(limit: int = 5) -> list:
    """Most recently created bookings."""
    response = (
        get_db().table(tables.BOOKINGS)
        .select('*')
        .order('created_at', desc=True)
        .limit(limit)
        .execute()
    )
    return response.data or []


def get_booking_by_id(booking_id: str, user_id: str = None) -> dict:
    """
    Get a single booking.

    Args:
        booking_id: Booking ID
        user_id: Restrict to this owner (optional)

    Returns:
        Booking dict or None if not found
    """
    query = get_db().table(tables.BOOKINGS).select('*').eq('id', booking_id)
    if user_id:
        query = query.eq('user_id', user_id)
    rows = query.limit(1).execute().data or []
    return rows[0] if rows else None


def get_booking_by_code(confirmation_code: str) -> dict:
    """
    Get a booking by confirmation code.

    Args:
        confirmation_code: Application-generated code

    Returns:
        Booking dict or None if not found
    """
    rows = (
        get_db().table(tables.BOOKINGS)
        .select('*')
        .eq('confirmation_code', confirmation_code)
        .limit(1)
        .execute()
        .data
    ) or []
    return rows[0] if rows else None


def create_booking(confirmation_code: str, user_id: str, hotel_name: str,
                   check_in: str, check_out: str, room_type: str,
                   total_price: float, status: str = 'pending',
                   image_url: str = None) -> dict:
    """
    Insert a booking row.

    Args:
        confirmation_code: Code identifying the booking
        user_id: Owner user ID
        hotel_name: Hotel name
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)
        room_type: 'single' or 'double'
        total_price: Total price in MXN
        status: Initial status (default 'pending')
        image_url: Hotel image shown on cards and checkout

    Returns:
        Inserted booking dict
    """
    payload = {
        'confirmation_code': confirmation_code,
        'user_id': user_id,
        'hotel_name': hotel_name,
        'check_in': check_in,
        'check_out': check_out,
        'room_type': room_type,
        'total_price': total_price,
        'status': status,
    }
    if image_url:
        payload['image_url'] = image_url

    response = get_db().table(tables.BOOKINGS).insert(payload).execute()
    rows = response.data or []
    return rows[0] if rows else payload


def update_booking_status(booking_id: str, status: str) -> bool:
    """
    Change a booking's status.

    Args:
        booking_id: Booking ID
        status: One of BOOKING_STATUSES

    Returns:
        True if a row was updated

    Raises:
        ValueError: If status is not a known booking status
    """
    if status not in BOOKING_STATUSES:
        raise ValueError(f'Unknown booking status: {status}')

    response = (
        get_db().table(tables.BOOKINGS)
        .update({'status': status})
        .eq('id', booking_id)
        .execute()
    )
    return bool(response.data)


def delete_booking(booking_id: str, user_id: str = None) -> bool:
    """
    Delete a booking.

    Args:
        booking_id: Booking ID
        user_id: Restrict to this owner (optional)

    Returns:
        True if a row was deleted
    """
    query = get_db().table(tables.BOOKINGS).delete().eq('id', booking_id)
    if user_id:
        query = query.eq('user_id', user_id)
    response = query.execute()
    return bool(response.data)


def filter_bookings(bookings: list, search: str = None, status: str = 'all') -> list:
    """
    Filter pre-loaded bookings by free text and status.

    The search matches hotel name, confirmation code and, when the row
    carries user info, the user's email (case-insensitive substring).

    Args:
        bookings: Booking dicts
        search: Search term (optional)
        status: Status to keep, or 'all'

    Returns:
        Filtered list (original order)
    """
    filtered = list(bookings)

    if search:
        search_lower = search.lower()

        def matches(booking):
            user = booking.get('user') or {}
            return (
                search_lower in (booking.get('hotel_name') or '').lower() or
                search_lower in (booking.get('confirmation_code') or '').lower() or
                search_lower in (user.get('email') or '').lower()
            )

        filtered = [b for b in filtered if matches(b)]

    if status and status != 'all':
        filtered = [b for b in filtered if b.get('status') == status]

    return filtered


def count_by_status(bookings: list) -> dict:
    """
    Count bookings per status.

    Returns:
        Dict with pending, completed, cancelled counts
    """
    counts = {status: 0 for status in BOOKING_STATUSES}
    for booking in bookings:
        status = booking.get('status')
        if status in counts:
            counts[status] += 1
    return counts


def select_booking_image(hotel: dict, default_image: str) -> str:
    """
    Pick the image stored with a chat booking: first additional image,
    else the hotel image, else the default.
    """
    additional = hotel.get('additional_images') or []
    return (additional[0] if additional else None) or hotel.get('image') or default_image

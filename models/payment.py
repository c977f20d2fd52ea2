"""
Payment model.
Payment rows are written when a hosted checkout session comes back paid.
"""

from database import get_db, tables


def get_user_payments(user_id: str) -> list:
    """
    Get a user's payment history with booking details, newest first.

    Args:
        user_id: Owner user ID

    Returns:
        List of payment dicts with a nested 'bookings' dict
    """
    response = (
        get_db().table(tables.PAYMENTS)
        .select(
            'id, amount, currency, status, created_at, booking_id, '
            'bookings(confirmation_code, hotel_name, check_in, check_out)'
        )
        .eq('user_id', user_id)
        .order('created_at', desc=True)
        .execute()
    )
    return response.data or []


def get_recent_payments(limit: int = None) -> list:
    """
    Payments with hotel name and confirmation code, newest first.

    Args:
        limit: Maximum rows (None for all)

    Returns:
        List of payment dicts
    """
    query = (
        get_db().table(tables.PAYMENTS)
        .select('*, bookings(hotel_name, confirmation_code)')
        .order('created_at', desc=True)
    )
    if limit:
        query = query.limit(limit)
    return query.execute().data or []


def get_total_revenue() -> float:
    """Sum of all recorded payment amounts."""
    response = get_db().table(tables.PAYMENTS).select('amount').execute()
    return sum_amounts(response.data or [])


def sum_amounts(payments: list) -> float:
    """Add up the 'amount' of payment dicts (missing amounts count as 0)."""
    return float(sum(float(p.get('amount') or 0) for p in payments))


def get_payment_by_checkout_session(checkout_session_id: str) -> dict:
    """
    Find the payment recorded for a checkout session.

    Args:
        checkout_session_id: Hosted checkout session id

    Returns:
        Payment dict or None if not recorded yet
    """
    rows = (
        get_db().table(tables.PAYMENTS)
        .select('*')
        .eq('checkout_session_id', checkout_session_id)
        .limit(1)
        .execute()
        .data
    ) or []
    return rows[0] if rows else None


def create_payment(user_id: str, booking_id, amount: float, currency: str,
                   status: str, checkout_session_id: str = None) -> dict:
    """
    Insert a payment row.

    Args:
        user_id: Payer user ID
        booking_id: Paid booking ID
        amount: Amount in currency units (not cents)
        currency: ISO currency code (lowercase)
        status: Payment status ('completed', 'pending', ...)
        checkout_session_id: Hosted checkout session id

    Returns:
        Inserted payment dict
    """
    payload = {
        'user_id': user_id,
        'booking_id': booking_id,
        'amount': amount,
        'currency': currency,
        'status': status,
        'checkout_session_id': checkout_session_id,
    }
    response = get_db().table(tables.PAYMENTS).insert(payload).execute()
    rows = response.data or []
    return rows[0] if rows else payload

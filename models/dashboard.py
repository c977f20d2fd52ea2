"""Admin dashboard statistics."""

from flask import current_app

from models.booking import get_all_bookings, get_recent_bookings, count_by_status
from models.company_profile import count_company_profiles, get_recent_company_profiles
from models.payment import get_recent_payments, get_total_revenue


def get_dashboard_stats() -> dict:
    """
    Collect the overview numbers and recent activity.

    Returns:
        Dict with total_users, total_bookings, total_revenue,
        active_bookings, completed_bookings, cancelled_bookings,
        recent_users, recent_bookings, recent_payments
    """
    limit = current_app.config.get('DASHBOARD_RECENT_LIMIT', 5)

    bookings = get_all_bookings()
    by_status = count_by_status(bookings)

    return {
        'total_users': count_company_profiles(),
        'total_bookings': len(bookings),
        'total_revenue': get_total_revenue(),
        'active_bookings': by_status['pending'],
        'completed_bookings': by_status['completed'],
        'cancelled_bookings': by_status['cancelled'],
        'recent_users': get_recent_company_profiles(limit),
        'recent_bookings': get_recent_bookings(limit),
        'recent_payments': get_recent_payments(limit),
    }

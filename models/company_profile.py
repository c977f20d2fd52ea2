"""
Company profile model.
Business-account record associated with an authenticated user.
"""

from database import get_db, tables


def get_company_profile(user_id: str) -> dict:
    """
    Get the company profile of a user.

    Args:
        user_id: Owner user ID

    Returns:
        Company profile dict or None if not found
    """
    rows = (
        get_db().table(tables.COMPANY_PROFILES)
        .select('*')
        .eq('user_id', user_id)
        .limit(1)
        .execute()
        .data
    ) or []
    return rows[0] if rows else None


def count_company_profiles() -> int:
    """Number of registered business accounts."""
    response = get_db().table(tables.COMPANY_PROFILES).select('*', count='exact').execute()
    if response.count is not None:
        return response.count
    return len(response.data or [])


def get_recent_company_profiles(limit: int = 5) -> list:
    """
    Most recently registered accounts with the user's email.

    Args:
        limit: Maximum rows

    Returns:
        List of company profile dicts with a nested 'user' dict
    """
    response = (
        get_db().table(tables.COMPANY_PROFILES)
        .select('*, user:user_id(email, created_at)')
        .order('created_at', desc=True)
        .limit(limit)
        .execute()
    )
    return response.data or []


def get_all_company_profiles() -> list:
    """All business accounts with user email, newest first."""
    response = (
        get_db().table(tables.COMPANY_PROFILES)
        .select('*, user:user_id(email, created_at)')
        .order('created_at', desc=True)
        .execute()
    )
    return response.data or []

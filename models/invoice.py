"""Invoice history model."""

from database import get_db, tables


def get_user_invoices(user_id: str) -> list:
    """
    Get a user's invoices, newest first.

    Args:
        user_id: Owner user ID

    Returns:
        List of invoice dicts
    """
    response = (
        get_db().table(tables.INVOICES)
        .select('*')
        .eq('user_id', user_id)
        .order('created_at', desc=True)
        .execute()
    )
    return response.data or []

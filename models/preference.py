"""
Travel preferences model.
One optional row per user in user_preferences.
"""

from database import get_db, tables

PREFERENCE_FIELDS = ('preferred_hotel', 'frequent_changes', 'avoid_locations')


def get_user_preferences(user_id: str) -> dict:
    """
    Get a user's travel preferences.

    Args:
        user_id: Owner user ID

    Returns:
        Preferences dict or None when the user has none yet
    """
    rows = (
        get_db().table(tables.USER_PREFERENCES)
        .select('*')
        .eq('user_id', user_id)
        .limit(1)
        .execute()
        .data
    ) or []
    return rows[0] if rows else None


def save_user_preferences(user_id: str, data: dict, existing_id=None) -> dict:
    """
    Update the user's preferences row, or insert one if none exists.

    Args:
        user_id: Owner user ID
        data: preferred_hotel, frequent_changes (bool), avoid_locations
        existing_id: ID of the current preferences row (None to insert)

    Returns:
        Saved preferences dict
    """
    payload = {'user_id': user_id}
    for field in PREFERENCE_FIELDS:
        payload[field] = data.get(field)
    payload['frequent_changes'] = bool(payload['frequent_changes'])

    table = get_db().table(tables.USER_PREFERENCES)
    if existing_id:
        response = table.update(payload).eq('id', existing_id).execute()
    else:
        response = table.insert([payload]).execute()

    rows = response.data or []
    saved = dict(rows[0]) if rows else dict(payload)
    if existing_id:
        saved.setdefault('id', existing_id)
    return saved

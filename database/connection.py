"""
Backend connection management.
Creates the Supabase client for the current request and attaches the
signed-in user's session so row-level security applies to every query.
"""

from flask import g, current_app, session
from supabase import AuthError, Client, create_client

SESSION_TOKENS_KEY = 'sb_tokens'


def create_db_client() -> Client:
    """
    Create a new Supabase client from the application configuration.

    Returns:
        supabase.Client: Unauthenticated client (anon key)

    Raises:
        RuntimeError: If Supabase credentials are not configured
    """
    url = current_app.config.get('SUPABASE_URL')
    key = current_app.config.get('SUPABASE_ANON_KEY')
    if not url or not key:
        raise RuntimeError('Supabase not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY')
    return create_client(url, key)


def get_db() -> Client:
    """
    Get the request-scoped Supabase client.

    If the Flask session holds auth tokens they are applied to the client;
    refreshed tokens are written back to the session.

    Returns:
        supabase.Client: Client bound to the current user (if any)
    """
    if 'db' not in g:
        client = create_db_client()
        tokens = session.get(SESSION_TOKENS_KEY)
        if tokens:
            try:
                response = client.auth.set_session(
                    tokens['access_token'], tokens['refresh_token']
                )
                if response and response.session:
                    store_tokens(response.session)
            except AuthError as e:
                current_app.logger.warning(f'Stored session rejected by auth backend: {e}')
                session.pop(SESSION_TOKENS_KEY, None)
        g.db = client
    return g.db


def store_tokens(auth_session) -> None:
    """
    Persist access/refresh tokens of an auth session in the Flask session.

    Args:
        auth_session: Session object returned by the auth backend
    """
    session[SESSION_TOKENS_KEY] = {
        'access_token': auth_session.access_token,
        'refresh_token': auth_session.refresh_token,
    }


def clear_tokens() -> None:
    """Forget the stored auth tokens."""
    session.pop(SESSION_TOKENS_KEY, None)


def close_db(e=None):
    """
    Release the request-scoped client.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    g.pop('db', None)

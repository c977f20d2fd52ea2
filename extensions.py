"""
Flask extensions initialization.
Extensions are initialized here and then initialized with the app in app.py.
"""

from flask import session
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

# Initialize Flask-Login
login_manager = LoginManager()

# Initialize CSRF Protection
csrf = CSRFProtect()

# Configure Login Manager
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Por favor inicia sesión para acceder a esta página'
login_manager.login_message_category = 'warning'


@login_manager.user_loader
def load_user(user_id):
    """
    Load user by ID for Flask-Login.

    The authenticated user's profile is kept in the session at sign-in, so
    no round trip to the auth backend is needed on every request. When only
    the auth tokens are left the profile is fetched again from the backend.

    Args:
        user_id: The user ID as a string

    Returns:
        User object or None if not found
    """
    from database import SESSION_TOKENS_KEY
    from models.user import get_session_profile, restore_session_profile, User

    user_dict = get_session_profile()
    if user_dict is None and session.get(SESSION_TOKENS_KEY):
        user_dict = restore_session_profile()
    if user_dict and user_dict.get('id') == user_id:
        return User(user_dict)
    return None

"""
User model and authentication functions.
Handles sign-up, password sign-in, session retrieval and Flask-Login integration
on top of the hosted auth backend.
"""

from flask import current_app, session
from supabase import AuthError

from database import get_db, store_tokens, clear_tokens, tables
from utils.validators import validate_email

SESSION_PROFILE_KEY = 'auth_user'


class AuthServiceError(Exception):
    """Authentication failure carrying a user-facing (Spanish) message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class User:
    """
    User class for Flask-Login integration.
    Wraps the profile dictionary built at sign-in.
    """

    def __init__(self, user_dict):
        """
        Initialize User from profile dictionary.

        Args:
            user_dict: Dictionary with id, email, name, phone, is_admin
        """
        self.id = user_dict['id']
        self.email = user_dict['email']
        self.name = user_dict.get('name') or self.email.split('@')[0]
        self.phone = user_dict.get('phone')
        self.is_admin = bool(user_dict.get('is_admin'))
        self.created_at = user_dict.get('created_at')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login. Returns user ID as string."""
        return str(self.id)


def is_admin_email(email: str) -> bool:
    """Check whether an email belongs to a configured administrator."""
    return (email or '').lower() in current_app.config.get('ADMIN_EMAILS', [])


def build_profile(auth_user) -> dict:
    """
    Build the session profile from an auth backend user object.

    Args:
        auth_user: User object returned by the auth backend

    Returns:
        Profile dict (id, email, name, phone, is_admin, created_at)
    """
    metadata = auth_user.user_metadata or {}
    email = auth_user.email or ''
    created_at = auth_user.created_at
    return {
        'id': str(auth_user.id),
        'email': email,
        'name': metadata.get('full_name') or email.split('@')[0],
        'phone': metadata.get('phone'),
        'is_admin': is_admin_email(email),
        'created_at': created_at.isoformat() if hasattr(created_at, 'isoformat') else created_at,
    }


def login_user(email: str, password: str) -> dict:
    """
    Sign in with email and password.

    Args:
        email: Account email
        password: Plain text password

    Returns:
        Dict with 'user' (profile) and 'session' (auth session)

    Raises:
        AuthServiceError: On invalid format, invalid credentials or backend failure
    """
    if not validate_email(email):
        raise AuthServiceError('El formato del correo electrónico no es válido')

    db = get_db()
    try:
        response = db.auth.sign_in_with_password({'email': email, 'password': password})
    except AuthError as e:
        current_app.logger.error(f'Login error: {e}')
        if 'Invalid login credentials' in str(e):
            raise AuthServiceError('Correo electrónico o contraseña incorrectos') from e
        raise AuthServiceError('No se pudo iniciar sesión') from e

    if not response or not response.user:
        raise AuthServiceError('No se pudo iniciar sesión')

    return {'user': build_profile(response.user), 'session': response.session}


def register_user(form_data: dict, questionnaire: dict) -> dict:
    """
    Register a new account with its company profile and travel preferences.

    Args:
        form_data: email, password, full_name, phone, company_name, rfc, industry, city
        questionnaire: preferred_hotel, frequent_changes ('yes'/'no'), avoid_locations

    Returns:
        Dict with 'user' (profile) and 'session' (auth session or None)

    Raises:
        AuthServiceError: With the user-facing reason
    """
    email = form_data['email']
    password = form_data['password']

    if not validate_email(email):
        raise AuthServiceError('El formato del correo electrónico no es válido')

    db = get_db()

    # An account that can already sign in is registered
    try:
        existing = db.auth.sign_in_with_password({'email': email, 'password': password})
    except AuthError:
        existing = None
    if existing and existing.user:
        raise AuthServiceError('Este correo electrónico ya está registrado')

    try:
        auth_response = db.auth.sign_up({
            'email': email,
            'password': password,
            'options': {
                'data': {
                    'full_name': form_data.get('full_name'),
                    'phone': form_data.get('phone'),
                }
            }
        })
    except AuthError as e:
        current_app.logger.error(f'Supabase sign-up failed: {e}')
        raise AuthServiceError(_registration_error_message(str(e))) from e

    if not auth_response or not auth_response.user:
        raise AuthServiceError('No se pudo crear el usuario')

    user_id = str(auth_response.user.id)

    try:
        db.table(tables.COMPANY_PROFILES).insert({
            'user_id': user_id,
            'company_name': form_data.get('company_name'),
            'rfc': form_data.get('rfc') or None,
            'industry': form_data.get('industry'),
            'city': form_data.get('city'),
        }).execute()
    except Exception as e:
        current_app.logger.error(f'Company profile creation error: {e}', exc_info=True)
        raise AuthServiceError(_registration_error_message(str(e), 'Error al crear el perfil de la empresa')) from e

    try:
        db.table(tables.USER_PREFERENCES).insert({
            'user_id': user_id,
            'preferred_hotel': questionnaire.get('preferred_hotel'),
            'frequent_changes': questionnaire.get('frequent_changes') == 'yes',
            'avoid_locations': questionnaire.get('avoid_locations'),
        }).execute()
    except Exception as e:
        current_app.logger.error(f'User preferences creation error: {e}', exc_info=True)
        raise AuthServiceError('Error al guardar las preferencias') from e

    # Sign in immediately when sign-up did not open a session
    auth_session = auth_response.session
    if auth_session is None:
        try:
            signed_in = db.auth.sign_in_with_password({'email': email, 'password': password})
            auth_session = signed_in.session
        except AuthError as e:
            current_app.logger.error(f'Sign in error: {e}')
            raise AuthServiceError('Error al iniciar sesión automáticamente') from e

    return {'user': build_profile(auth_response.user), 'session': auth_session}


def _registration_error_message(raw: str, default: str = None) -> str:
    """Map a backend registration error to a user-facing message."""
    if 'User already registered' in raw or 'duplicate key value' in raw:
        return 'Este correo electrónico ya está registrado'
    if 'Password should be at least 6 characters' in raw:
        return 'La contraseña debe tener al menos 6 caracteres'
    return default or 'Error al registrar usuario. Por favor intenta de nuevo.'


def get_session_user():
    """
    Retrieve the user of the current auth session from the backend.

    Returns:
        Auth user object or None when there is no valid session
    """
    try:
        response = get_db().auth.get_user()
    except AuthError as e:
        current_app.logger.warning(f'Session retrieval failed: {e}')
        return None
    return response.user if response else None


def restore_session_profile() -> dict:
    """
    Rebuild the session profile from the backend when only the auth tokens
    survived in the Flask session.

    Returns:
        Profile dict or None when the tokens are no longer valid
    """
    auth_user = get_session_user()
    if auth_user is None:
        clear_tokens()
        return None
    profile = build_profile(auth_user)
    session[SESSION_PROFILE_KEY] = profile
    return profile


def start_session(profile: dict, auth_session) -> None:
    """
    Remember the signed-in user and tokens in the Flask session.

    Args:
        profile: Profile dict from build_profile
        auth_session: Auth session (may be None)
    """
    session[SESSION_PROFILE_KEY] = profile
    if auth_session is not None:
        store_tokens(auth_session)


def get_session_profile() -> dict:
    """Get the profile stored at sign-in, or None."""
    return session.get(SESSION_PROFILE_KEY)


def end_session() -> None:
    """Sign out of the backend and clear all auth state in the Flask session."""
    try:
        get_db().auth.sign_out()
    except AuthError as e:
        current_app.logger.warning(f'Sign out error: {e}')
    session.pop(SESSION_PROFILE_KEY, None)
    clear_tokens()


def get_user_by_email(email: str) -> dict:
    """
    Look up a user row in the public users view by email.

    Args:
        email: Email to search for

    Returns:
        User dict or None if not found
    """
    response = get_db().table(tables.USERS).select('*').eq('email', email).limit(1).execute()
    rows = response.data or []
    return rows[0] if rows else None

"""
Route decorators for authentication and authorization.
Provides admin-only access control for routes.
"""

from functools import wraps
from flask import flash, abort
from flask_login import login_required, current_user

from utils.messages import MESSAGES


def admin_required(func):
    """
    Decorator to restrict a route to administrators.

    Usage:
        @admin_bp.route('/')
        @login_required
        @admin_required
        def dashboard():
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not getattr(current_user, 'is_admin', False):
            flash(MESSAGES['permission_denied'], 'error')
            abort(403)

        return func(*args, **kwargs)
    return wrapper


# Re-export login_required for convenience
__all__ = ['login_required', 'admin_required']

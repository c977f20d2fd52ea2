"""
Authentication routes: login, registration, logout.
Sessions are opened against the hosted auth backend and mirrored into
Flask-Login.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint
from flask_login import login_user as login_session_user, logout_user, login_required, current_user
from urllib.parse import urlparse

from blueprints.auth.forms import LoginForm, RegistrationForm
from models.user import (User, AuthServiceError, login_user, register_user,
                         start_session, end_session)
from utils.messages import MESSAGES, get_message

auth_bp = Blueprint('auth', __name__)


def _open_session(result: dict) -> User:
    """Store the backend session and log the user into Flask-Login."""
    start_session(result['user'], result['session'])
    user = User(result['user'])
    login_session_user(user)
    return user


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """
    Login route with form handling.

    GET: Display login form
    POST: Process login credentials
    """
    if current_user.is_authenticated:
        return redirect(url_for('chat.index'))

    form = LoginForm()

    if form.validate_on_submit():
        try:
            result = login_user(form.email.data.strip().lower(), form.password.data)
        except AuthServiceError as e:
            flash(e.message, 'error')
            return render_template('auth/login.html', form=form)

        user = _open_session(result)
        flash(get_message('login_success', name=user.name), 'success')

        # Redirect to next page or default
        next_page = request.args.get('next')
        if not next_page or urlparse(next_page).netloc != '':
            next_page = url_for('admin.dashboard') if user.is_admin else url_for('chat.index')

        return redirect(next_page)

    return render_template('auth/login.html', form=form)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """
    Registration route.

    GET: Display registration form and questionnaire
    POST: Create account, company profile and preferences, then sign in
    """
    if current_user.is_authenticated:
        return redirect(url_for('chat.index'))

    form = RegistrationForm()

    if form.validate_on_submit():
        try:
            result = register_user(form.account_data(), form.questionnaire_data())
        except AuthServiceError as e:
            flash(e.message, 'error')
            return render_template('auth/register.html', form=form)

        user = _open_session(result)
        flash(get_message('register_success', name=user.name), 'success')
        return redirect(url_for('chat.index'))

    return render_template('auth/register.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    """Logout current user."""
    end_session()
    logout_user()
    flash(MESSAGES['logout_success'], 'success')
    return redirect(url_for('auth.login'))

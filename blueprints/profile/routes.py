"""
Profile routes: personal and company information, travel preferences and
payment history.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint, current_app
from flask_login import login_required, current_user

from blueprints.profile.forms import PreferencesForm
from models.company_profile import get_company_profile
from models.payment import get_user_payments
from models.preference import get_user_preferences, save_user_preferences
from utils.messages import MESSAGES

profile_bp = Blueprint('profile', __name__)

TABS = ('profile', 'preferences', 'payments')


@profile_bp.route('/')
@login_required
def index():
    """Profile page; the tab query parameter selects the section."""
    tab = request.args.get('tab', 'profile')
    if tab not in TABS:
        tab = 'profile'

    company = None
    preferences = None
    payments = []
    try:
        company = get_company_profile(current_user.id)
        # Users without a preferences row simply get an empty form
        preferences = get_user_preferences(current_user.id)
        if tab == 'payments':
            payments = get_user_payments(current_user.id)
    except Exception as e:
        current_app.logger.error(f'Error loading profile: {e}', exc_info=True)
        flash(MESSAGES['profile_load_error'], 'error')

    form = PreferencesForm(data=preferences or {})

    return render_template(
        'profile/profile.html',
        tab=tab,
        company=company,
        preferences=preferences,
        payments=payments,
        form=form,
        editing=request.args.get('edit') == '1'
    )


@profile_bp.route('/preferences', methods=['POST'])
@login_required
def save_preferences():
    """Save the travel preferences (update the row or create it)."""
    form = PreferencesForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(url_for('profile.index', tab='preferences', edit=1))

    try:
        existing = get_user_preferences(current_user.id)
        save_user_preferences(
            current_user.id,
            {
                'preferred_hotel': (form.preferred_hotel.data or '').strip(),
                'frequent_changes': form.frequent_changes.data,
                'avoid_locations': (form.avoid_locations.data or '').strip(),
            },
            existing_id=existing['id'] if existing else None
        )
        flash(MESSAGES['preferences_saved'], 'success')
    except Exception as e:
        current_app.logger.error(f'Error saving preferences: {e}', exc_info=True)
        flash(MESSAGES['preferences_save_error'], 'error')

    return redirect(url_for('profile.index', tab='preferences'))

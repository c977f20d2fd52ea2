"""
Admin dashboard routes.
Overview statistics, users, bookings (status changes, manual creation,
Excel export) and payments. Restricted to configured administrators.
"""

from flask import (render_template, redirect, url_for, flash, request, Blueprint,
                   current_app, Response)
from flask_login import login_required, current_user

from blueprints.admin.services import (validate_admin_booking, create_booking_for_email,
                                       build_bookings_workbook)
from models.booking import (get_all_bookings, filter_bookings, update_booking_status,
                            BOOKING_STATUSES)
from models.company_profile import get_all_company_profiles
from models.dashboard import get_dashboard_stats
from models.payment import get_recent_payments
from utils.datetime_helpers import get_today
from utils.decorators import admin_required
from utils.messages import MESSAGES

admin_bp = Blueprint('admin', __name__)

VIEWS = ('overview', 'users', 'bookings', 'payments')


@admin_bp.route('/')
@login_required
@admin_required
def dashboard():
    """Admin dashboard; the view query parameter selects the tab."""
    view = request.args.get('view', 'overview')
    if view not in VIEWS:
        view = 'overview'

    search = request.args.get('search', '').strip()
    status = request.args.get('status', 'all')

    context = {'view': view, 'search': search, 'status': status, 'statuses': BOOKING_STATUSES}
    try:
        if view == 'overview':
            context['stats'] = get_dashboard_stats()
        elif view == 'users':
            context['users'] = get_all_company_profiles()
        elif view == 'bookings':
            context['bookings'] = filter_bookings(get_all_bookings(), search, status)
        else:
            context['payments'] = get_recent_payments()
    except Exception as e:
        current_app.logger.error(f'Error loading admin dashboard ({view}): {e}', exc_info=True)
        flash(MESSAGES['dashboard_load_error'], 'error')

    return render_template('admin/dashboard.html', **context)


@admin_bp.route('/bookings/<booking_id>/status', methods=['POST'])
@login_required
@admin_required
def booking_status(booking_id):
    """Change a booking's status."""
    status = request.form.get('status', '')
    try:
        update_booking_status(booking_id, status)
    except ValueError:
        flash(MESSAGES['invalid_status'], 'error')
    except Exception as e:
        current_app.logger.error(f'Error updating booking {booking_id}: {e}', exc_info=True)
        flash(MESSAGES['generic_error'], 'error')
    else:
        current_app.logger.info(f'Booking {booking_id} set to {status} by {current_user.email}')
        flash(MESSAGES['booking_status_updated'], 'success')

    return redirect(url_for('admin.dashboard', view='bookings'))


@admin_bp.route('/bookings/create', methods=['POST'])
@login_required
@admin_required
def booking_create():
    """Create a booking for the user registered with the given email."""
    is_valid, error_msg, data = validate_admin_booking(request.form)
    if not is_valid:
        flash(error_msg, 'error')
        return redirect(url_for('admin.dashboard', view='bookings'))

    try:
        booking = create_booking_for_email(data)
    except Exception as e:
        current_app.logger.error(f'Error creating admin booking: {e}', exc_info=True)
        flash(MESSAGES['booking_save_error'], 'error')
        return redirect(url_for('admin.dashboard', view='bookings'))

    if booking is None:
        flash(MESSAGES['user_not_found'], 'error')
    else:
        current_app.logger.info(
            f"Booking {booking.get('confirmation_code')} created for {data['email']} by {current_user.email}"
        )
        flash(MESSAGES['booking_created'], 'success')

    return redirect(url_for('admin.dashboard', view='bookings'))


@admin_bp.route('/bookings/export')
@login_required
@admin_required
def bookings_export():
    """Export the filtered bookings to Excel."""
    search = request.args.get('search', '').strip()
    status = request.args.get('status', 'all')

    try:
        bookings = filter_bookings(get_all_bookings(), search, status)
        content = build_bookings_workbook(bookings, search, status)
    except Exception as e:
        current_app.logger.error(f'Error exporting bookings: {e}', exc_info=True)
        flash(MESSAGES['generic_error'], 'error')
        return redirect(url_for('admin.dashboard', view='bookings'))

    filename = f"reservaciones_{get_today().strftime('%Y-%m-%d')}.xlsx"
    return Response(
        content,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={
            "Content-Disposition": f"attachment; filename={filename}"
        }
    )

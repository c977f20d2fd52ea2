"""
User bookings report routes.
Lists the current user's bookings and invoices, deletes bookings, starts
payment of pending bookings and exports the report as PDF.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint, current_app
from flask_login import login_required, current_user

from blueprints.payments.services import (CheckoutError, payment_data_for_booking,
                                          create_checkout_session)
from models.booking import (get_user_bookings, get_booking_by_id, delete_booking,
                            filter_bookings, count_by_status)
from models.invoice import get_user_invoices
from utils.messages import MESSAGES, get_message
from utils.pdf import render_pdf, PdfRenderError

bookings_bp = Blueprint('bookings', __name__)

BILLING_OPTIONS = {
    'immediate': 'Facturar ahora',
    'monthly': 'Factura mensual consolidada',
    'later': 'Facturar más tarde',
}


def _load_filtered_bookings():
    search = request.args.get('search', '').strip()
    status = request.args.get('status', 'all')
    bookings = get_user_bookings(current_user.id)
    return bookings, filter_bookings(bookings, search, status), search, status


@bookings_bp.route('/')
@login_required
def report():
    """Bookings report with search and status filter."""
    try:
        bookings, filtered, search, status = _load_filtered_bookings()
    except Exception as e:
        current_app.logger.error(f'Error loading bookings: {e}', exc_info=True)
        flash(MESSAGES['bookings_load_error'], 'error')
        bookings, filtered = [], []
        search, status = request.args.get('search', ''), request.args.get('status', 'all')

    try:
        invoices = get_user_invoices(current_user.id)
    except Exception as e:
        current_app.logger.error(f'Error loading invoices: {e}', exc_info=True)
        invoices = []

    return render_template(
        'bookings/report.html',
        bookings=filtered,
        counts=count_by_status(bookings),
        invoices=invoices,
        search=search,
        status=status,
        billing_options=BILLING_OPTIONS
    )


@bookings_bp.route('/<booking_id>/delete', methods=['POST'])
@login_required
def delete(booking_id):
    """Delete one of the current user's bookings."""
    try:
        if delete_booking(booking_id, user_id=current_user.id):
            current_app.logger.info(f'Booking {booking_id} deleted by user {current_user.id}')
            flash(MESSAGES['booking_deleted'], 'success')
        else:
            flash(MESSAGES['booking_not_found'], 'error')
    except Exception as e:
        current_app.logger.error(f'Error deleting booking {booking_id}: {e}', exc_info=True)
        flash(MESSAGES['booking_delete_error'], 'error')

    return redirect(url_for('bookings.report'))


@bookings_bp.route('/<booking_id>/pay', methods=['POST'])
@login_required
def pay(booking_id):
    """Start the hosted checkout for a pending booking."""
    booking = get_booking_by_id(booking_id, user_id=current_user.id)
    if not booking:
        flash(MESSAGES['booking_not_found'], 'error')
        return redirect(url_for('bookings.report'))

    if booking.get('status') != 'pending':
        flash('Solo se pueden pagar reservaciones pendientes', 'warning')
        return redirect(url_for('bookings.report'))

    cancel_url = current_app.config['APP_DOMAIN'].rstrip('/') + url_for('bookings.report')
    try:
        checkout_url = create_checkout_session(payment_data_for_booking(booking, cancel_url))
    except CheckoutError as e:
        flash(e.message, 'error')
        return redirect(url_for('bookings.report'))

    return redirect(checkout_url, code=303)


@bookings_bp.route('/<booking_id>/billing', methods=['POST'])
@login_required
def billing(booking_id):
    """Record the billing option chosen for a booking."""
    option = request.form.get('option', '')
    if option not in BILLING_OPTIONS:
        flash('Opción de facturación no válida', 'error')
        return redirect(url_for('bookings.report'))

    current_app.logger.info(
        f'Billing option {option} selected for booking {booking_id} by user {current_user.id}'
    )
    flash(get_message('billing_option_selected', option=BILLING_OPTIONS[option]), 'success')
    return redirect(url_for('bookings.report'))


@bookings_bp.route('/report.pdf')
@login_required
def report_pdf():
    """Download the (filtered) bookings report as PDF."""
    try:
        _, filtered, search, status = _load_filtered_bookings()
        return render_pdf('pdf/bookings_report.html', 'reporte-reservas.pdf',
                          bookings=filtered, search=search, status=status)
    except PdfRenderError as e:
        current_app.logger.error(f'Error generating bookings report PDF: {e}')
    except Exception as e:
        current_app.logger.error(f'Error building bookings report: {e}', exc_info=True)

    flash(MESSAGES['pdf_error'], 'error')
    return redirect(url_for('bookings.report'))

"""
Checkout return routes.
"""

from flask import render_template, request, Blueprint, current_app
from flask_login import login_required, current_user

from blueprints.payments.services import (CheckoutError, retrieve_checkout_session,
                                          is_session_paid, parse_success_metadata,
                                          resolve_booking, record_checkout_payment)
from utils.messages import MESSAGES

payments_bp = Blueprint('payments', __name__)


@payments_bp.route('/success')
@login_required
def success():
    """
    Landing page after the hosted checkout.

    Reads the session back from the checkout API; a paid session is
    recorded once and completes its booking.
    """
    session_id = request.args.get('session', '')
    metadata = parse_success_metadata(request.args.get('metadata'))

    checkout_session = None
    booking = None
    error = None

    if not session_id:
        error = MESSAGES['checkout_retrieve_error']
    else:
        try:
            checkout_session = retrieve_checkout_session(session_id)
        except CheckoutError as e:
            error = e.message

    paid = is_session_paid(checkout_session)
    if checkout_session and paid:
        try:
            booking = resolve_booking(metadata, checkout_session)
            if booking:
                record_checkout_payment(checkout_session, booking, current_user.id,
                                        checkout_session_id=session_id)
                booking['status'] = 'completed'
            else:
                current_app.logger.warning(f'Paid checkout session {session_id} without a booking')
        except Exception as e:
            current_app.logger.error(f'Error recording payment for session {session_id}: {e}',
                                     exc_info=True)
            error = MESSAGES['generic_error']

    amount_total = (checkout_session or {}).get('amount_total')

    return render_template(
        'payments/success.html',
        checkout_session=checkout_session,
        amount=amount_total / 100 if amount_total is not None else None,
        booking=booking,
        metadata=metadata,
        paid=paid,
        error=error
    )

"""
Hotel search and manual reservation routes.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint, current_app
from flask_login import login_required, current_user

from blueprints.hotels.services import (parse_reservation_form, validate_manual_reservation,
                                        create_manual_booking)
from blueprints.payments.services import (CheckoutError, payment_data_for_booking,
                                          create_checkout_session)
from models.hotel import (get_all_hotels, get_hotel_by_id, filter_hotels,
                          get_filter_options, sample_hotels, calculate_total_price)
from utils.datetime_helpers import get_today_iso
from utils.messages import MESSAGES
from utils.validators import ROOM_CAPACITY

hotels_bp = Blueprint('hotels', __name__)


@hotels_bp.route('/')
@login_required
def search():
    """
    Hotel search.

    Before the first search a small random selection is shown; once the
    form is submitted every hotel matching the filters is listed.
    """
    search_term = request.args.get('search', '').strip()
    state = request.args.get('state', '')
    city = request.args.get('city', '')
    brand = request.args.get('brand', '')
    searched = request.args.get('searched') == '1'

    try:
        all_hotels = get_all_hotels()
    except Exception as e:
        current_app.logger.error(f'Error loading hotels: {e}', exc_info=True)
        flash(MESSAGES['hotels_load_error'], 'error')
        all_hotels = []

    if searched:
        hotels = filter_hotels(all_hotels, search_term, state, city, brand)
    else:
        hotels = sample_hotels(all_hotels, current_app.config.get('INITIAL_HOTEL_SAMPLE', 3))

    return render_template(
        'hotels/search.html',
        hotels=hotels,
        options=get_filter_options(all_hotels),
        search=search_term, state=state, city=city, brand=brand,
        searched=searched
    )


@hotels_bp.route('/<int:hotel_id>/reserve', methods=['GET', 'POST'])
@login_required
def reserve(hotel_id):
    """
    Manual reservation for one hotel.

    GET: Show the form with a live quote
    POST: Validate, store a pending booking and go to checkout
    """
    try:
        hotel = get_hotel_by_id(hotel_id)
    except Exception as e:
        current_app.logger.error(f'Error loading hotel {hotel_id}: {e}', exc_info=True)
        hotel = None

    if not hotel:
        flash(MESSAGES['hotel_not_found'], 'error')
        return redirect(url_for('hotels.search'))

    data = parse_reservation_form(request.form, default_guest=current_user.name)

    if request.method == 'POST':
        is_valid, error_msg = validate_manual_reservation(data)
        if not is_valid:
            flash(error_msg, 'error')
        else:
            try:
                booking = create_manual_booking(hotel, data, current_user.id)
            except Exception as e:
                current_app.logger.error(f'Error creating manual booking: {e}', exc_info=True)
                flash(MESSAGES['booking_save_error'], 'error')
                booking = None

            if booking:
                cancel_url = (current_app.config['APP_DOMAIN'].rstrip('/')
                              + url_for('bookings.report'))
                try:
                    checkout_url = create_checkout_session(
                        payment_data_for_booking(booking, cancel_url))
                except CheckoutError as e:
                    # The booking stays pending and can be paid from the report
                    flash(e.message, 'error')
                    return redirect(url_for('bookings.report'))
                return redirect(checkout_url, code=303)

    quote = calculate_total_price(hotel, data['check_in'], data['check_out'], data['room_type'])
    return render_template(
        'hotels/manual_reservation.html',
        hotel=hotel,
        form_data=data,
        quote=quote,
        capacity=ROOM_CAPACITY,
        min_check_in=get_today_iso()
    )

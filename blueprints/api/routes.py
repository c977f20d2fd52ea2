"""
API routes for JSON endpoints.
Provides hotel listing, the current user's bookings and stay quotes.
"""

from flask import jsonify, request, Blueprint, current_app
from flask_login import login_required, current_user

from models.booking import get_user_bookings, filter_bookings
from models.hotel import get_all_hotels, get_hotel_by_id, filter_hotels, calculate_total_price
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES
from utils.validators import ROOM_CAPACITY, validate_date_range, validate_date_format

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status and version
    """
    return jsonify({
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': f"{current_app.config.get('APP_NAME', 'Noktos')} Reservaciones"
    })


@api_bp.route('/hotels')
@login_required
def api_hotels():
    """
    Get hotels as JSON.

    Query params:
        search: Free text over brand, city and state (optional)
        state, city, brand: Exact filters (optional)

    Returns:
        JSON list of hotels
    """
    try:
        hotels = filter_hotels(
            get_all_hotels(),
            search=request.args.get('search', '').strip(),
            state=request.args.get('state', ''),
            city=request.args.get('city', ''),
            brand=request.args.get('brand', '')
        )
    except Exception as e:
        current_app.logger.error(f'Error loading hotels: {e}', exc_info=True)
        return api_error(MESSAGES['hotels_load_error'], 500)

    return api_success(data=hotels, count=len(hotels))


@api_bp.route('/bookings')
@login_required
def api_bookings():
    """
    Get the current user's bookings as JSON.

    Query params:
        search: Hotel name or confirmation code (optional)
        status: pending, completed, cancelled or all (default: all)

    Returns:
        JSON list of bookings
    """
    try:
        bookings = filter_bookings(
            get_user_bookings(current_user.id),
            search=request.args.get('search', '').strip(),
            status=request.args.get('status', 'all')
        )
    except Exception as e:
        current_app.logger.error(f'Error loading bookings: {e}', exc_info=True)
        return api_error(MESSAGES['bookings_load_error'], 500)

    return api_success(data=bookings, count=len(bookings))


@api_bp.route('/quote')
@login_required
def api_quote():
    """
    Quote a stay at a catalogue hotel.

    Query params:
        hotel_id: Hotel internal id
        check_in, check_out: Dates (YYYY-MM-DD)
        room_type: single or double (default: single)

    Returns:
        JSON with nights, price_per_night and total
    """
    hotel_id = request.args.get('hotel_id', type=int)
    check_in = request.args.get('check_in', '')
    check_out = request.args.get('check_out', '')
    room_type = request.args.get('room_type', 'single')

    if room_type not in ROOM_CAPACITY:
        return api_error('Tipo de habitación no válido', 400)

    for value in (check_in, check_out):
        if value and not validate_date_format(value):
            return api_error('Formato de fecha inválido (YYYY-MM-DD)', 400)

    if check_in and check_out and not validate_date_range(check_in, check_out):
        return api_error(MESSAGES['invalid_date_range'], 400)

    try:
        hotel = get_hotel_by_id(hotel_id) if hotel_id is not None else None
    except Exception as e:
        current_app.logger.error(f'Error loading hotel {hotel_id} for quote: {e}', exc_info=True)
        return api_error(MESSAGES['hotels_load_error'], 500)

    if not hotel:
        return api_error(MESSAGES['hotel_not_found'], 404)

    return api_success(data=calculate_total_price(hotel, check_in, check_out, room_type))

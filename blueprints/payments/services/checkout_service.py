"""
Hosted checkout API client.
Creates checkout sessions (the browser is redirected to the returned URL)
and reads sessions back when the payment page redirects to the app.
"""

import json
import logging
from urllib.parse import quote

import requests
from flask import current_app, url_for

logger = logging.getLogger(__name__)

STRIPE_ROUTE = '/v1/stripe'
CREATE_ENDPOINT = '/create-checkout-session'
RETRIEVE_ENDPOINT = '/get-checkout-session'

SESSION_ID_PLACEHOLDER = '{CHECKOUT_SESSION_ID}'


class CheckoutError(Exception):
    """Checkout API failure carrying a user-facing (Spanish) message."""

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _base_url() -> str:
    return current_app.config['CHECKOUT_API_URL'].rstrip('/') + STRIPE_ROUTE


def _auth_headers() -> dict:
    return {'x-api-key': current_app.config['CHECKOUT_API_KEY']}


def build_success_url(metadata: dict) -> str:
    """
    Return URL for a paid session. The session id placeholder is filled in
    by the payment provider.
    """
    domain = current_app.config['APP_DOMAIN'].rstrip('/')
    path = url_for('payments.success')
    encoded = quote(json.dumps(metadata, separators=(',', ':')))
    return f'{domain}{path}?success=true&session={SESSION_ID_PLACEHOLDER}&metadata={encoded}'


def build_payment_data(hotel_name: str, room_type: str, total_price: float,
                       image_url: str, metadata: dict, cancel_url: str) -> dict:
    """
    Build the checkout payload: a single line item for the whole stay.

    Args:
        hotel_name: Product name
        room_type: 'single' or 'double'
        total_price: Total in MXN (converted to cents)
        image_url: Product image (falls back to the default hotel image)
        metadata: Data echoed back through the success URL
        cancel_url: Where the payment page returns on cancel

    Returns:
        Payment data dict
    """
    room_label = 'Habitación Sencilla' if room_type == 'single' else 'Habitación Doble'
    return {
        'line_items': [
            {
                'price_data': {
                    'currency': current_app.config.get('CURRENCY', 'mxn'),
                    'product_data': {
                        'name': hotel_name,
                        'description': f'Reservación en {hotel_name} - {room_label}',
                        'images': [image_url or current_app.config['DEFAULT_HOTEL_IMAGE']],
                    },
                    'unit_amount': int(round((total_price or 0) * 100)),
                },
                'quantity': 1,
            }
        ],
        'mode': 'payment',
        'success_url': build_success_url(metadata),
        'cancel_url': cancel_url,
    }


def payment_data_for_booking(booking: dict, cancel_url: str) -> dict:
    """Checkout payload for a saved booking row."""
    metadata = {
        'booking_id': booking.get('id'),
        'confirmation_code': booking.get('confirmation_code'),
    }
    return build_payment_data(
        hotel_name=booking.get('hotel_name'),
        room_type=booking.get('room_type'),
        total_price=booking.get('total_price'),
        image_url=booking.get('image_url'),
        metadata=metadata,
        cancel_url=cancel_url,
    )


def create_checkout_session(payment_data: dict) -> str:
    """
    Create a hosted checkout session.

    Args:
        payment_data: Payload from build_payment_data

    Returns:
        URL of the hosted payment page

    Raises:
        CheckoutError: On transport errors, non-2xx answers or a missing URL
    """
    endpoint = f'{_base_url()}{CREATE_ENDPOINT}'
    try:
        response = requests.post(
            endpoint,
            json={'payment_data': payment_data},
            headers=_auth_headers(),
            timeout=current_app.config.get('REQUEST_TIMEOUT', 15),
        )
    except requests.RequestException as e:
        logger.error(f'Checkout session creation failed: {e}')
        raise CheckoutError('No se pudo iniciar el pago. Por favor intenta de nuevo.') from e

    if not response.ok:
        logger.error(f'Checkout API error {response.status_code}: {response.text}')
        raise CheckoutError('No se pudo iniciar el pago. Por favor intenta de nuevo.', response.status_code)

    try:
        url = response.json().get('url')
    except ValueError:
        url = None
    if not url:
        logger.error('Checkout API answered without a redirect URL')
        raise CheckoutError('No se pudo iniciar el pago. Por favor intenta de nuevo.', response.status_code)

    logger.info('Checkout session created')
    return url


def retrieve_checkout_session(checkout_session_id: str) -> dict:
    """
    Read back a checkout session.

    Args:
        checkout_session_id: Session id from the success URL

    Returns:
        Session dict (id, status, payment_status, amount_total, currency, metadata, ...)

    Raises:
        CheckoutError: On transport errors or non-2xx answers
    """
    endpoint = f'{_base_url()}{RETRIEVE_ENDPOINT}'
    try:
        response = requests.get(
            endpoint,
            params={'id_checkout': checkout_session_id},
            headers=_auth_headers(),
            timeout=current_app.config.get('REQUEST_TIMEOUT', 15),
        )
    except requests.RequestException as e:
        logger.error(f'Checkout session retrieval failed: {e}')
        raise CheckoutError('No se pudo verificar el estado del pago') from e

    if not response.ok:
        logger.error(f'Checkout API error {response.status_code}: {response.text}')
        raise CheckoutError('No se pudo verificar el estado del pago', response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        raise CheckoutError('No se pudo verificar el estado del pago', response.status_code) from e

    # Some deployments wrap the session object
    if isinstance(payload, dict) and isinstance(payload.get('session'), dict):
        payload = payload['session']
    logger.debug(f'Checkout session {checkout_session_id}: {payload.get("payment_status")}')
    return payload


def is_session_paid(checkout_session: dict) -> bool:
    """A session counts as paid once the provider reports payment_status 'paid'."""
    return (checkout_session or {}).get('payment_status') == 'paid'


def parse_success_metadata(raw: str) -> dict:
    """
    Decode the metadata echoed back on the success URL.

    Args:
        raw: JSON text (already URL-decoded by Flask)

    Returns:
        Metadata dict (empty if missing or malformed)
    """
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}

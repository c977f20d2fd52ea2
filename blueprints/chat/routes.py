"""
Chat-assisted reservation routes.
The page talks to the JSON endpoint below; the assistant's reply is rendered
server-side and the reservation panel is re-rendered with every answer.
"""

from flask import (render_template, redirect, url_for, flash, request, Blueprint,
                   current_app)
from flask_login import current_user, login_required

from blueprints.chat.services import (
    ChatWebhookError, send_chat_message, merge_booking_data, has_booking_details,
    get_conversation_id, get_booking_data, store_booking_data,
    prompt_limit_reached, register_prompt, save_confirmed_booking, reset_conversation
)
from blueprints.payments.services import (
    CheckoutError, build_payment_data, payment_data_for_booking, create_checkout_session
)
from models.booking import get_booking_by_code, select_booking_image
from utils.api_response import api_success, api_error
from utils.markdown_render import render_markdown
from utils.messages import MESSAGES
from utils.pdf import render_pdf, PdfRenderError
from utils.validators import sanitize_input

chat_bp = Blueprint('chat', __name__)

MAX_MESSAGE_LENGTH = 2000


def _render_panel(booking_data: dict) -> str:
    return render_template('chat/_reservation_panel.html', booking=booking_data,
                           has_details=has_booking_details(booking_data))


@chat_bp.route('/')
def index():
    """Chat page with the reservation panel."""
    booking_data = get_booking_data()
    return render_template(
        'chat/chat.html',
        booking=booking_data,
        has_details=has_booking_details(booking_data),
        limit_reached=prompt_limit_reached(current_user.is_authenticated)
    )


@chat_bp.route('/messages', methods=['POST'])
def send_message():
    """
    Forward one message to the assistant.

    Request body: {"message": "..."}
    Response data: reply (markdown), reply_html, panel_html, booking_saved,
    save_error
    """
    payload = request.get_json(silent=True) or {}
    message = sanitize_input(str(payload.get('message') or ''), MAX_MESSAGE_LENGTH)
    if not message:
        return api_error('El mensaje no puede estar vacío', 400)

    if prompt_limit_reached(current_user.is_authenticated):
        return api_error(MESSAGES['chat_prompt_limit'], 403, login_required=True)

    user_id = current_user.id if current_user.is_authenticated else None
    try:
        result = send_chat_message(message, get_conversation_id(), user_id)
    except ChatWebhookError as e:
        return api_error(e.message, 502)

    if not current_user.is_authenticated:
        register_prompt()

    booking_data = get_booking_data()
    save_result = {'saved': False, 'error': None, 'booking': None}
    if result['booking_data']:
        booking_data = merge_booking_data(booking_data, result['booking_data'])
        store_booking_data(booking_data)
        save_result = save_confirmed_booking(booking_data, current_user)

    return api_success(data={
        'reply': result['output'],
        'reply_html': str(render_markdown(result['output'])),
        'panel_html': _render_panel(booking_data),
        'booking_saved': save_result['saved'],
        'save_error': save_result['error'],
        'limit_reached': prompt_limit_reached(current_user.is_authenticated),
    })


@chat_bp.route('/reset', methods=['POST'])
def reset():
    """Start a new conversation."""
    reset_conversation()
    return redirect(url_for('chat.index'))


@chat_bp.route('/checkout', methods=['POST'])
@login_required
def checkout():
    """Pay the booking collected in the chat through the hosted checkout."""
    booking_data = get_booking_data()
    code = booking_data.get('confirmation_code')
    if not code:
        flash(MESSAGES['no_booking_details'], 'warning')
        return redirect(url_for('chat.index'))

    cancel_url = current_app.config['APP_DOMAIN'].rstrip('/') + url_for('chat.index')
    try:
        booking = get_booking_by_code(code)
        if booking:
            payment_data = payment_data_for_booking(booking, cancel_url)
        else:
            hotel = booking_data['hotel']
            payment_data = build_payment_data(
                hotel_name=hotel.get('name'),
                room_type=booking_data['room'].get('type'),
                total_price=booking_data['room'].get('total_price'),
                image_url=select_booking_image(hotel, current_app.config['DEFAULT_HOTEL_IMAGE']),
                metadata={'confirmation_code': code},
                cancel_url=cancel_url,
            )
        checkout_url = create_checkout_session(payment_data)
    except CheckoutError as e:
        flash(e.message, 'error')
        return redirect(url_for('chat.index'))
    except Exception as e:
        current_app.logger.error(f'Error starting chat checkout: {e}', exc_info=True)
        flash(MESSAGES['checkout_error'], 'error')
        return redirect(url_for('chat.index'))

    return redirect(checkout_url, code=303)


@chat_bp.route('/transfer')
def transfer():
    """Bank transfer instructions for the booking collected in the chat."""
    booking_data = get_booking_data()
    return render_template('payments/transfer.html', booking=booking_data)


@chat_bp.route('/reservation.pdf')
def reservation_pdf():
    """Download the reservation panel as PDF."""
    booking_data = get_booking_data()
    filename = f"reservacion-{booking_data.get('confirmation_code') or 'borrador'}.pdf"
    try:
        return render_pdf('pdf/reservation.html', filename, booking=booking_data)
    except PdfRenderError as e:
        current_app.logger.error(f'Error generating reservation PDF: {e}')
        flash(MESSAGES['pdf_error'], 'error')
        return redirect(url_for('chat.index'))

"""Chat services package."""

from blueprints.chat.services.webhook_service import (  # noqa: F401
    ChatWebhookError,
    empty_booking_data,
    parse_booking_data,
    merge_booking_data,
    has_booking_details,
    send_chat_message,
)
from blueprints.chat.services.conversation_service import (  # noqa: F401
    get_conversation_id,
    get_booking_data,
    store_booking_data,
    prompt_limit_reached,
    register_prompt,
    save_confirmed_booking,
    reset_conversation,
)

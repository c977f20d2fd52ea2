"""Payment services package."""

from blueprints.payments.services.checkout_service import (  # noqa: F401
    CheckoutError,
    build_payment_data,
    payment_data_for_booking,
    create_checkout_session,
    retrieve_checkout_session,
    is_session_paid,
    parse_success_metadata,
)
from blueprints.payments.services.payment_service import (  # noqa: F401
    resolve_booking,
    record_checkout_payment,
)

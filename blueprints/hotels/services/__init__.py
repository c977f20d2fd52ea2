"""Hotel services package."""

from blueprints.hotels.services.reservation_service import (  # noqa: F401
    parse_reservation_form,
    validate_manual_reservation,
    create_manual_booking,
)

"""Admin services package."""

from blueprints.admin.services.booking_service import (  # noqa: F401
    validate_admin_booking,
    create_booking_for_email,
)
from blueprints.admin.services.export_service import build_bookings_workbook  # noqa: F401

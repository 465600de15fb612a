"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from eventora.service.booking.app.command import (
    authenticate_use_case,
    cancel_booking_use_case,
    general_admission_checkout_use_case,
    manage_account_use_case,
    reserve_booking_use_case,
)
from eventora.service.booking.app.query import (
    get_event_use_case,
    list_bookings_use_case,
    load_seat_map_use_case,
)
from eventora.service.booking.driving_adapter.view import (
    dashboard_controller,
    event_detail_controller,
)


WIRE_MODULES: list[ModuleType] = [
    authenticate_use_case,
    cancel_booking_use_case,
    general_admission_checkout_use_case,
    manage_account_use_case,
    reserve_booking_use_case,
    get_event_use_case,
    list_bookings_use_case,
    load_seat_map_use_case,
    dashboard_controller,
    event_detail_controller,
]

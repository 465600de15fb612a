"""Booking Enums"""

from eventora.service.booking.domain.enum.booking_filter import BookingFilter
from eventora.service.booking.domain.enum.booking_status import BookingStatus
from eventora.service.booking.domain.enum.display_status import DisplayStatus
from eventora.service.booking.domain.enum.payment_status import PaymentStatus
from eventora.service.booking.domain.enum.seat_status import SeatStatus
from eventora.service.booking.domain.enum.selection_state import SelectionState


__all__ = [
    'BookingFilter',
    'BookingStatus',
    'DisplayStatus',
    'PaymentStatus',
    'SeatStatus',
    'SelectionState',
]

"""Booking Value Objects"""

from eventora.service.booking.domain.value_object.payment_details import PaymentDetails
from eventora.service.booking.domain.value_object.pending_intent import PendingIntent
from eventora.service.booking.domain.value_object.seat_layout import SeatCell, SeatLayout
from eventora.service.booking.domain.value_object.seat_ref import SeatRef, parse_seat_refs


__all__ = [
    'PaymentDetails',
    'PendingIntent',
    'SeatCell',
    'SeatLayout',
    'SeatRef',
    'parse_seat_refs',
]

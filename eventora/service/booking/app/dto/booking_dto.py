"""Booking request/response DTOs."""

from typing import Any

import attrs

from eventora.platform.config.core_setting import settings
from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.value_object.payment_details import PaymentDetails
from eventora.service.booking.domain.value_object.seat_ref import SeatRef


@attrs.define(frozen=True)
class CreateBookingCommand:
    event_id: str
    number_of_tickets: int
    selected_seats: tuple[SeatRef, ...] = ()
    payment_details: PaymentDetails | None = None
    payment_method: str = attrs.field(factory=lambda: settings.PAYMENT_METHOD)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            'eventId': self.event_id,
            'numberOfTickets': self.number_of_tickets,
            'paymentMethod': self.payment_method,
        }
        if self.selected_seats:
            payload['selectedSeats'] = [seat.to_payload() for seat in self.selected_seats]
        if self.payment_details is not None:
            payload['paymentDetails'] = self.payment_details.to_payload()
        return payload


@attrs.define(frozen=True)
class BookingCreateResponse:
    """`createBooking` answer. success=False carries the backend's reason in `message`."""

    success: bool
    booking: Booking | None = None
    message: str | None = None

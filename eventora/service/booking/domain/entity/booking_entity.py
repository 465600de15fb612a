from datetime import datetime

import attrs

from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.domain.booking_errors import NotCancelableError
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.enum import BookingStatus, PaymentStatus
from eventora.service.booking.domain.value_object.amount import normalize_amount


REFERENCE_FALLBACK_LENGTH = 8


@attrs.define
class Booking:
    id: str
    event_id: str
    event: Event | None = None
    number_of_tickets: int = 0
    selected_seats: tuple[str, ...] = attrs.field(factory=tuple, converter=tuple)
    total_price: int | float | None = None
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_status: PaymentStatus = PaymentStatus.PENDING
    booking_reference: str | None = None
    created_at: datetime | None = None

    def __attrs_post_init__(self) -> None:
        if self.total_price is None and self.event is not None:
            self.total_price = self.computed_total_price()

    @property
    def ticket_count(self) -> int:
        """Seats win over numberOfTickets; general-admission bookings carry no seats."""
        return len(self.selected_seats) or self.number_of_tickets

    @property
    def event_date(self) -> datetime | None:
        return self.event.date if self.event else None

    @property
    def display_reference(self) -> str:
        return self.booking_reference or self.id[-REFERENCE_FALLBACK_LENGTH:]

    @property
    def is_paid(self) -> bool:
        return self.payment_status is PaymentStatus.PAID

    def computed_total_price(self) -> int | float:
        if self.event is None:
            return 0
        return normalize_amount(self.event.price_for(self.ticket_count))

    def with_event(self, event: Event) -> 'Booking':
        """Attach the event the backend left out; a missing total is then derived from it."""
        return attrs.evolve(self, event=event)

    @Logger.io
    def cancel(self) -> 'Booking':
        if self.status is BookingStatus.CANCELLED:
            raise NotCancelableError('This booking has already been cancelled.')
        self.status = BookingStatus.CANCELLED
        return self

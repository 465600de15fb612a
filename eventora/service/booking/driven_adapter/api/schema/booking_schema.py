from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.enum import BookingStatus, PaymentStatus
from eventora.service.booking.domain.value_object.amount import normalize_amount
from eventora.service.booking.driven_adapter.api.schema.event_schema import (
    EventResponse,
    parse_backend_datetime,
)


def _seat_label(raw: Any) -> str:
    if isinstance(raw, dict):
        row = raw.get('row', '')
        number = raw.get('seatNumber', raw.get('seat_number', ''))
        return f'{row}{number}'
    return str(raw)


class BookingResponse(BaseModel):
    """
    Backend booking document.

    `event` may be populated (a nested event document) or just an id, under either
    `event` or `eventId`.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str = Field(validation_alias=AliasChoices('_id', 'id'))
    event: Any = None
    event_id: Any = Field(default=None, validation_alias=AliasChoices('eventId', 'event_id'))
    number_of_tickets: int = Field(
        default=0, validation_alias=AliasChoices('numberOfTickets', 'number_of_tickets')
    )
    selected_seats: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices('selectedSeats', 'selected_seats')
    )
    total_price: int | float | None = Field(
        default=None, validation_alias=AliasChoices('totalPrice', 'totalAmount', 'total_price')
    )
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_status: PaymentStatus = Field(
        default=PaymentStatus.PENDING,
        validation_alias=AliasChoices('paymentStatus', 'payment_status'),
    )
    booking_reference: str | None = Field(
        default=None, validation_alias=AliasChoices('bookingReference', 'booking_reference')
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices('createdAt', 'created_at')
    )

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)

    @field_validator('selected_seats', mode='before')
    @classmethod
    def coerce_seats(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        return [_seat_label(seat) for seat in v]

    @field_validator('total_price', mode='before')
    @classmethod
    def coerce_total(cls, v: Any) -> int | float | None:
        return None if v is None else normalize_amount(v)

    @field_validator('status', mode='before')
    @classmethod
    def coerce_status(cls, v: Any) -> BookingStatus:
        return BookingStatus.CANCELLED if str(v).lower() == 'cancelled' else BookingStatus.CONFIRMED

    @field_validator('payment_status', mode='before')
    @classmethod
    def coerce_payment_status(cls, v: Any) -> PaymentStatus:
        return PaymentStatus.PAID if str(v).lower() == 'paid' else PaymentStatus.PENDING

    @field_validator('created_at', mode='before')
    @classmethod
    def coerce_created_at(cls, v: Any) -> datetime | None:
        return parse_backend_datetime(v)

    def _event_document(self) -> dict[str, Any] | None:
        for candidate in (self.event, self.event_id):
            if isinstance(candidate, dict) and ('_id' in candidate or 'id' in candidate):
                return candidate
        return None

    def resolved_event_id(self) -> str:
        if (document := self._event_document()) is not None:
            return str(document.get('_id', document.get('id')))
        for candidate in (self.event_id, self.event):
            if isinstance(candidate, str | int) and candidate != '':
                return str(candidate)
        return ''

    def to_entity(self, *, event: Event | None = None) -> Booking:
        if event is None and (document := self._event_document()) is not None:
            event = EventResponse.model_validate(document).to_entity()
        return Booking(
            id=self.id,
            event_id=event.id if event is not None else self.resolved_event_id(),
            event=event,
            number_of_tickets=self.number_of_tickets,
            selected_seats=tuple(self.selected_seats),
            total_price=self.total_price,
            status=self.status,
            payment_status=self.payment_status,
            booking_reference=self.booking_reference,
            created_at=self.created_at,
        )

"""Outcomes of the reservation flow, as handed to the booking view."""

from enum import StrEnum

import attrs

from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.value_object.seat_ref import SeatRef


class ReservationStatus(StrEnum):
    CONFIRMED = 'confirmed'
    BOOKING_CREATE_FAILED = 'booking_create_failed'
    NETWORK_FAILURE = 'network_failure'
    UNKNOWN_FAILURE = 'unknown_failure'


@attrs.define(frozen=True)
class ReservationOutcome:
    status: ReservationStatus
    booking: Booking | None = None
    reason: str | None = None
    released_seats: tuple[SeatRef, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status is ReservationStatus.CONFIRMED

    @property
    def retryable(self) -> bool:
        return not self.succeeded

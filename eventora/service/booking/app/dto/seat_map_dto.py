import attrs

from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.value_object.seat_layout import SeatLayout
from eventora.service.booking.domain.value_object.seat_ref import SeatRef


@attrs.define(frozen=True)
class SeatAvailability:
    """`GET /events/{id}/seats` payload"""

    layout: SeatLayout
    available_seats: int
    total_seats: int


@attrs.define(frozen=True)
class SeatMap:
    event: Event
    layout: SeatLayout
    locked_seats: tuple[SeatRef, ...] = ()

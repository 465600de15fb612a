"""Dashboard read models."""

import attrs

from eventora.service.booking.domain.booking_status_domain import BookingStatusView
from eventora.service.booking.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BookingListItem:
    booking: Booking
    status: BookingStatusView

    @property
    def is_upcoming(self) -> bool:
        return self.status.is_upcoming

    @property
    def is_cancelable(self) -> bool:
        return self.status.is_cancelable


@attrs.define(frozen=True)
class DashboardSummary:
    total_bookings: int
    upcoming_bookings: int
    total_spent: int | float

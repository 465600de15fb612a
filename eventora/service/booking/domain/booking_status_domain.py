"""
Booking status derivation.

One pure function decides how a booking is shown; the dashboard rows, the filters and the
cancel guard all go through it, so they can never disagree.

Filters follow the dashboard tabs literally:
    upcoming  = confirmed and event date >= now
    past      = event date < now (whatever the status)
    cancelled = status cancelled
A cancelled booking of a past event therefore shows up under both `past` and `cancelled`.
Its display status is `cancelled` (cancelled > upcoming > completed).
A booking whose event has no date is neither upcoming nor past.
"""

from datetime import datetime, timezone

import attrs

from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.enum import BookingFilter, BookingStatus, DisplayStatus


@attrs.define(frozen=True)
class BookingStatusView:
    display_status: DisplayStatus
    is_upcoming: bool
    is_past: bool
    is_cancelable: bool


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def derive_booking_status(booking: Booking, now: datetime) -> BookingStatusView:
    event_date = booking.event_date
    is_cancelled = booking.status is BookingStatus.CANCELLED

    if event_date is None:
        is_past = False
        in_future = False
    else:
        is_past = _as_aware(event_date) < _as_aware(now)
        in_future = not is_past

    is_upcoming = booking.status is BookingStatus.CONFIRMED and in_future

    if is_cancelled:
        display_status = DisplayStatus.CANCELLED
    elif is_upcoming:
        display_status = DisplayStatus.UPCOMING
    else:
        display_status = DisplayStatus.COMPLETED

    return BookingStatusView(
        display_status=display_status,
        is_upcoming=is_upcoming,
        is_past=is_past,
        is_cancelable=is_upcoming,
    )


def matches_filter(booking: Booking, booking_filter: BookingFilter, now: datetime) -> bool:
    if booking_filter is BookingFilter.ALL:
        return True
    view = derive_booking_status(booking, now)
    if booking_filter is BookingFilter.UPCOMING:
        return view.is_upcoming
    if booking_filter is BookingFilter.PAST:
        return view.is_past
    return booking.status is BookingStatus.CANCELLED


def filter_bookings(
    bookings: list[Booking], booking_filter: BookingFilter, now: datetime
) -> list[Booking]:
    return [b for b in bookings if matches_filter(b, booking_filter, now)]

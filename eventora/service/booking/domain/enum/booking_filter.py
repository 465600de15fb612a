"""Booking Filter Enum"""

from enum import StrEnum


class BookingFilter(StrEnum):
    """Dashboard tabs over the user's bookings"""

    ALL = 'all'
    UPCOMING = 'upcoming'
    PAST = 'past'
    CANCELLED = 'cancelled'

"""Seat Status Enum"""

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    SELECTED = 'selected'
    LOCKED = 'locked'  # held by this client's advisory lock set
    BOOKED = 'booked'

    @classmethod
    def from_backend(cls, value: object) -> 'SeatStatus':
        """Backend layouts also say 'reserved'/'sold'/'unavailable'; all of them mean booked."""
        text = str(value or '').lower()
        if text in ('', 'available', 'free', 'open'):
            return cls.AVAILABLE
        if text == 'locked':
            return cls.LOCKED
        return cls.BOOKED

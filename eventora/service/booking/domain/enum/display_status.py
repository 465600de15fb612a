"""Display Status Enum"""

from enum import StrEnum


class DisplayStatus(StrEnum):
    UPCOMING = 'upcoming'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

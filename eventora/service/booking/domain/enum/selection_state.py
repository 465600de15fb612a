"""Selection State Enum"""

from enum import StrEnum


class SelectionState(StrEnum):
    LOADING = 'loading'
    READY = 'ready'
    SELECTING = 'selecting'
    SUBMITTED = 'submitted'
    ERROR = 'error'
    CANCELLED = 'cancelled'

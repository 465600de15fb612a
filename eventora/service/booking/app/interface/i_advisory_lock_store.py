from abc import ABC, abstractmethod

import attrs

from eventora.service.booking.domain.value_object.seat_ref import SeatRef


@attrs.define(frozen=True)
class AdvisoryLockRecord:
    """Seats this client believes are taken for one event. Not authoritative."""

    event_id: str
    version: int = 0
    seats: tuple[SeatRef, ...] = ()


class IAdvisoryLockStore(ABC):
    """
    Per-event advisory seat set in local state.

    Only deters the same client from re-offering seats it just submitted. It gives no
    exclusion across clients; the backend decides who gets a seat.
    """

    @abstractmethod
    def read(self, *, event_id: str) -> AdvisoryLockRecord:
        """Unreadable or corrupt data reads as an empty record (version 0)."""
        pass

    @abstractmethod
    def compare_and_swap(
        self, *, event_id: str, expected_version: int, seats: tuple[SeatRef, ...]
    ) -> AdvisoryLockRecord | None:
        """
        Write `seats` if the stored version still equals `expected_version`.

        Returns the new record, or None on a version conflict.
        Raises AdvisoryLockWriteFailedError when the write itself fails.
        """
        pass

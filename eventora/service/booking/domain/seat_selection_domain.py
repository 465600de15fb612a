"""
Seat Selection Domain

The seat map as a small state machine, with no I/O:

    loading -> ready -> selecting -> submitted
    loading -> error -> (retry) loading
    any     -> cancelled

Seats that are locked or booked, or that are not on the map at all, can not be toggled.
"""

from eventora.platform.exception.exceptions import DomainError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.domain.booking_errors import (
    EmptySelectionError,
    SelectionLimitExceededError,
)
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.enum import SeatStatus, SelectionState
from eventora.service.booking.domain.value_object.amount import normalize_amount
from eventora.service.booking.domain.value_object.seat_layout import SeatLayout
from eventora.service.booking.domain.value_object.seat_ref import SeatRef


_TOGGLEABLE_STATES = (SelectionState.READY, SelectionState.SELECTING)


class SeatSelection:
    def __init__(self, *, max_seats_per_booking: int) -> None:
        self.max_seats_per_booking = max_seats_per_booking
        self.state: SelectionState = SelectionState.LOADING
        self.event: Event | None = None
        self.layout: SeatLayout = SeatLayout()
        self.error_message: str | None = None
        self._selected: list[SeatRef] = []

    @property
    def selected_seats(self) -> tuple[SeatRef, ...]:
        return tuple(self._selected)

    @property
    def limit(self) -> int:
        if self.event is None:
            return 0
        return max(0, min(self.event.available_seats, self.max_seats_per_booking))

    @property
    def total_amount(self) -> int | float:
        if self.event is None:
            return 0
        return normalize_amount(self.event.price_for(len(self._selected)))

    def begin_loading(self) -> None:
        self.state = SelectionState.LOADING
        self.error_message = None

    def mark_ready(self, event: Event, layout: SeatLayout) -> None:
        self.event = event
        self.layout = layout
        self._selected = []
        self.error_message = None
        self.state = SelectionState.READY

    def mark_error(self, message: str) -> None:
        self.error_message = message
        self.state = SelectionState.ERROR

    def retry(self) -> None:
        if self.state is not SelectionState.ERROR:
            raise DomainError(f'Cannot retry seat map from state {self.state}', 400)
        self.begin_loading()

    def reopen(self, layout: SeatLayout, error_message: str | None = None) -> None:
        """Back to the map after a failed booking, with a fresh layout and an empty selection."""
        self.layout = layout
        self._selected = []
        self.error_message = error_message
        self.state = SelectionState.READY

    def status_of(self, seat: SeatRef) -> SeatStatus | None:
        if seat in self._selected:
            return SeatStatus.SELECTED
        return self.layout.status_of(seat)

    @Logger.io
    def toggle_seat(self, seat: SeatRef) -> bool:
        """Returns True when the selection changed."""
        if self.state not in _TOGGLEABLE_STATES:
            raise DomainError(f'Seat map is not ready (state: {self.state})', 400)

        if self.layout.status_of(seat) is not SeatStatus.AVAILABLE:
            return False

        if seat in self._selected:
            self._selected.remove(seat)
        else:
            if len(self._selected) + 1 > self.limit:
                raise SelectionLimitExceededError(self.limit)
            self._selected.append(seat)

        self.state = SelectionState.SELECTING if self._selected else SelectionState.READY
        return True

    @Logger.io
    def confirm_selection(self) -> tuple[SeatRef, ...]:
        if self.state not in _TOGGLEABLE_STATES:
            raise DomainError(f'Nothing to confirm (state: {self.state})', 400)
        if not self._selected:
            raise EmptySelectionError()
        if len(self._selected) > self.limit:
            raise SelectionLimitExceededError(self.limit)
        self.state = SelectionState.SUBMITTED
        return self.selected_seats

    def cancel(self) -> None:
        self._selected = []
        self.state = SelectionState.CANCELLED

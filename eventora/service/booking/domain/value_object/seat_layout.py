"""Seat Layout Value Object"""

from collections.abc import Iterable, Iterator
from string import ascii_uppercase
from typing import Any

import attrs

from eventora.platform.exception.exceptions import DomainError
from eventora.service.booking.domain.enum import SeatStatus
from eventora.service.booking.domain.value_object.seat_ref import SeatRef, parse_seat_refs


@attrs.define(frozen=True)
class SeatCell:
    seat: SeatRef
    status: SeatStatus = SeatStatus.AVAILABLE


def row_letter(index: int) -> str:
    """0 -> 'A', 25 -> 'Z', 26 -> 'AA'"""
    letters = ''
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        letters = ascii_uppercase[rem] + letters
    return letters


@attrs.define(frozen=True)
class SeatLayout:
    rows: tuple[tuple[SeatCell, ...], ...] = ()

    def __iter__(self) -> Iterator[SeatCell]:
        for row in self.rows:
            yield from row

    def status_of(self, seat: SeatRef) -> SeatStatus | None:
        for cell in self:
            if cell.seat == seat:
                return cell.status
        return None

    @property
    def available_count(self) -> int:
        return sum(1 for cell in self if cell.status is SeatStatus.AVAILABLE)

    def with_locked(self, locked: Iterable[SeatRef]) -> 'SeatLayout':
        """Overlay the local advisory set: available seats in it are shown as locked."""
        locked_set = set(locked)
        if not locked_set:
            return self
        return SeatLayout(
            rows=tuple(
                tuple(
                    attrs.evolve(cell, status=SeatStatus.LOCKED)
                    if cell.seat in locked_set and cell.status is SeatStatus.AVAILABLE
                    else cell
                    for cell in row
                )
                for row in self.rows
            )
        )

    @classmethod
    def generate(
        cls, total_seats: int, seats_per_row: int, booked: Iterable[SeatRef] = ()
    ) -> 'SeatLayout':
        if seats_per_row <= 0:
            raise DomainError('seats_per_row must be positive', 400)
        booked_set = set(booked)
        rows: list[tuple[SeatCell, ...]] = []
        for start in range(0, max(total_seats, 0), seats_per_row):
            letter = row_letter(len(rows))
            count = min(seats_per_row, total_seats - start)
            rows.append(
                tuple(
                    SeatCell(
                        seat=(seat := SeatRef(row=letter, seat_number=n)),
                        status=SeatStatus.BOOKED if seat in booked_set else SeatStatus.AVAILABLE,
                    )
                    for n in range(1, count + 1)
                )
            )
        return cls(rows=tuple(rows))

    @classmethod
    def from_api(cls, payload: Any, *, total_seats: int, seats_per_row: int) -> 'SeatLayout':
        """
        Build the layout from a seat-availability payload.

        Accepted shapes for `seatLayout`:
            {'rows': [{'row': 'A', 'seats': [{'seatNumber': 1, 'status': 'available'}]}]}
            {'seats': [{'row': 'A', 'seatNumber': 1, 'status': 'booked'}, ...]}
            [{'row': 'A', 'seatNumber': 1, ...}, ...]
        Without one, a grid is generated from totalSeats and any `bookedSeats` list is marked.
        """
        payload = payload if isinstance(payload, dict) else {}
        seat_layout = payload.get('seatLayout')

        if isinstance(seat_layout, dict) and isinstance(seat_layout.get('rows'), list):
            return cls._from_rows(seat_layout['rows'])

        flat = seat_layout.get('seats') if isinstance(seat_layout, dict) else seat_layout
        if isinstance(flat, list) and flat:
            return cls._from_flat(flat)

        total = payload.get('totalSeats', total_seats)
        try:
            total = int(total)
        except (TypeError, ValueError):
            total = total_seats
        return cls.generate(total, seats_per_row, parse_seat_refs(payload.get('bookedSeats')))

    @classmethod
    def _from_rows(cls, raw_rows: list[Any]) -> 'SeatLayout':
        rows: list[tuple[SeatCell, ...]] = []
        for index, raw_row in enumerate(raw_rows):
            if not isinstance(raw_row, dict):
                continue
            letter = str(raw_row.get('row') or row_letter(index))
            cells = []
            for position, raw_seat in enumerate(raw_row.get('seats') or [], start=1):
                raw_seat = raw_seat if isinstance(raw_seat, dict) else {'seatNumber': raw_seat}
                number = raw_seat.get('seatNumber', raw_seat.get('number', position))
                cells.append(
                    SeatCell(
                        seat=SeatRef(row=letter, seat_number=int(number)),
                        status=SeatStatus.from_backend(raw_seat.get('status')),
                    )
                )
            rows.append(tuple(cells))
        return cls(rows=tuple(rows))

    @classmethod
    def _from_flat(cls, raw_seats: list[Any]) -> 'SeatLayout':
        by_row: dict[str, list[SeatCell]] = {}
        for raw_seat in raw_seats:
            seat = SeatRef.parse(raw_seat)
            status = (
                SeatStatus.from_backend(raw_seat.get('status'))
                if isinstance(raw_seat, dict)
                else SeatStatus.AVAILABLE
            )
            by_row.setdefault(seat.row, []).append(SeatCell(seat=seat, status=status))
        return cls(
            rows=tuple(
                tuple(sorted(cells, key=lambda c: c.seat.seat_number))
                for _, cells in sorted(by_row.items(), key=lambda item: (len(item[0]), item[0]))
            )
        )

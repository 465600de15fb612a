"""Seat Reference Value Object"""

import re
from typing import Any

import attrs

from eventora.platform.exception.exceptions import DomainError


_SEAT_LABEL_PATTERN = re.compile(r'^\s*([A-Za-z]+)\s*-?\s*(\d+)\s*$')


@attrs.define(frozen=True, order=True)
class SeatRef:
    """Seat reference (Value Object), rendered as 'A1'"""

    row: str = attrs.field(converter=str.upper)
    seat_number: int

    @property
    def label(self) -> str:
        return f'{self.row}{self.seat_number}'

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, raw: Any) -> 'SeatRef':
        """Accept 'A1', 'A-1', a SeatRef, or {'row': 'A', 'seatNumber': 1}."""
        if isinstance(raw, SeatRef):
            return raw
        if isinstance(raw, dict):
            row = raw.get('row')
            number = raw.get('seatNumber', raw.get('seat_number', raw.get('number')))
            if row is not None and number is not None:
                try:
                    return cls(row=str(row), seat_number=int(number))
                except (TypeError, ValueError):
                    pass
            label = raw.get('label') or raw.get('seatId') or raw.get('id')
            if isinstance(label, str):
                return cls.parse(label)
        if isinstance(raw, str):
            match = _SEAT_LABEL_PATTERN.match(raw)
            if match:
                return cls(row=match.group(1), seat_number=int(match.group(2)))
        raise DomainError(f'Invalid seat reference: {raw!r}. Expected: row+number (e.g. A1)', 400)

    def to_payload(self) -> dict[str, Any]:
        return {'row': self.row, 'seatNumber': self.seat_number}


def parse_seat_refs(raw_seats: Any) -> tuple[SeatRef, ...]:
    """Parse a list of seat references, dropping duplicates and keeping the first occurrence."""
    if not isinstance(raw_seats, list | tuple):
        return ()
    seen: dict[SeatRef, None] = {}
    for raw in raw_seats:
        seen.setdefault(SeatRef.parse(raw), None)
    return tuple(seen)

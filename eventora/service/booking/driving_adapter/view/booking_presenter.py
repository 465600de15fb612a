"""Plain-text renderings of the booking views."""

from datetime import datetime

from eventora.platform.exception.exception_handlers import ErrorNotice
from eventora.service.booking.app.dto import BookingListItem, DashboardSummary
from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.enum import SeatStatus
from eventora.service.booking.domain.seat_selection_domain import SeatSelection
from eventora.service.booking.domain.value_object.amount import format_amount


SEAT_SYMBOLS = {
    SeatStatus.AVAILABLE: '[ ]',
    SeatStatus.SELECTED: '[x]',
    SeatStatus.LOCKED: '[~]',
    SeatStatus.BOOKED: '[#]',
}


def format_event_date(value: datetime | None) -> str:
    return value.strftime('%B %d, %Y') if value else 'TBA'


def seats_label(booking: Booking) -> str:
    return ', '.join(booking.selected_seats) if booking.selected_seats else 'General Admission'


def render_event(event: Event) -> str:
    lines = [
        event.title,
        f'{format_event_date(event.date)} {event.time}'.rstrip(),
        ' · '.join(part for part in (event.venue, event.location) if part),
        f'Price: {format_amount(event.price)}',
        f'Available Seats: {event.available_seats}',
    ]
    if event.is_external:
        lines.append(f'Listed via {event.source}')
    return '\n'.join(line for line in lines if line)


def render_seat_map(selection: SeatSelection) -> str:
    lines = []
    for row in selection.layout.rows:
        if not row:
            continue
        cells = ''.join(
            SEAT_SYMBOLS[selection.status_of(cell.seat) or SeatStatus.BOOKED] for cell in row
        )
        lines.append(f'{row[0].seat.row:>2} {cells}')
    selected = ', '.join(seat.label for seat in selection.selected_seats) or '-'
    lines.append(f'Selected: {selected} ({len(selection.selected_seats)}/{selection.limit})')
    lines.append(f'Total: {format_amount(selection.total_amount)}')
    return '\n'.join(lines)


def render_confirmation(booking: Booking) -> str:
    event_title = booking.event.title if booking.event else booking.event_id
    return '\n'.join(
        [
            'Booking Confirmed!',
            f'Booking Reference: {booking.display_reference}',
            f'Event: {event_title}',
            f'Seats: {seats_label(booking)}',
            f'Total Paid: {format_amount(booking.total_price)}',
        ]
    )


def render_ticket(booking: Booking) -> str:
    event = booking.event
    return '\n'.join(
        [
            'EVENTORA TICKET',
            f'Reference: {booking.display_reference}',
            f'Event: {event.title if event else booking.event_id}',
            f'Date: {format_event_date(booking.event_date)}',
            f'Venue: {event.venue or event.location if event else "TBA"}',
            f'Seats: {seats_label(booking)}',
            f'Tickets: {booking.ticket_count}',
            f'Total: {format_amount(booking.total_price)}',
            f'Status: {booking.status} / {booking.payment_status}',
        ]
    )


def render_booking_row(item: BookingListItem) -> str:
    booking = item.booking
    title = booking.event.title if booking.event else booking.event_id
    action = ' [cancel]' if item.is_cancelable else ''
    return (
        f'{booking.display_reference:<10} {title:<30} {format_event_date(booking.event_date):<20} '
        f'{item.status.display_status:<10} {format_amount(booking.total_price)}{action}'
    )


def render_stats(summary: DashboardSummary) -> str:
    return (
        f'Total Bookings: {summary.total_bookings} | '
        f'Upcoming: {summary.upcoming_bookings} | '
        f'Total Spent: {format_amount(summary.total_spent)}'
    )


def render_notice(notice: ErrorNotice) -> str:
    suffix = ' (retry)' if notice.retryable else ''
    return f'! {notice.message}{suffix}'

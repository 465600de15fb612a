"""Application layer DTOs"""

from eventora.service.booking.app.dto.api_result import ApiResult, AuthResult
from eventora.service.booking.app.dto.booking_dto import BookingCreateResponse, CreateBookingCommand
from eventora.service.booking.app.dto.booking_list_dto import BookingListItem, DashboardSummary
from eventora.service.booking.app.dto.reservation_dto import ReservationOutcome, ReservationStatus
from eventora.service.booking.app.dto.seat_map_dto import SeatAvailability, SeatMap


__all__ = [
    'ApiResult',
    'AuthResult',
    'BookingCreateResponse',
    'BookingListItem',
    'CreateBookingCommand',
    'DashboardSummary',
    'ReservationOutcome',
    'ReservationStatus',
    'SeatAvailability',
    'SeatMap',
]

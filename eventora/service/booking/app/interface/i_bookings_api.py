from abc import ABC, abstractmethod

from eventora.service.booking.app.dto import ApiResult, BookingCreateResponse, CreateBookingCommand
from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.enum import PaymentStatus


class IBookingsApi(ABC):
    """Booking endpoints. The backend is the only authority on seat ownership."""

    @abstractmethod
    async def create_booking(self, *, command: CreateBookingCommand) -> BookingCreateResponse:
        """A rejected booking (success=False / 4xx with a message) is returned, not raised"""
        pass

    @abstractmethod
    async def process_payment(
        self, *, booking_id: str, payment_status: PaymentStatus
    ) -> ApiResult:
        pass

    @abstractmethod
    async def get_my_bookings(self) -> list[Booking]:
        pass

    @abstractmethod
    async def get_booking_by_id(self, *, booking_id: str) -> Booking:
        pass

    @abstractmethod
    async def cancel_booking(self, *, booking_id: str) -> ApiResult:
        pass

from datetime import datetime, timezone
from inspect import isawaitable
from typing import Awaitable, Callable, Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.exception.exceptions import ConflictError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.interface.i_bookings_api import IBookingsApi
from eventora.service.booking.domain.booking_errors import NotCancelableError
from eventora.service.booking.domain.booking_status_domain import derive_booking_status
from eventora.service.booking.domain.entity.booking_entity import Booking


ConfirmCallback = Callable[[Booking], bool | Awaitable[bool]]


class CancelBookingUseCase:
    """
    Cancel one of the user's bookings.

    Flow:
    1. Ask the user (confirm callback); a "no" changes nothing
    2. Only upcoming, confirmed bookings are cancelable
    3. PUT /bookings/{id}/cancel, then flip the local copy to cancelled
    """

    def __init__(self, *, bookings_api: IBookingsApi) -> None:
        self.bookings_api = bookings_api
        self._in_flight: set[str] = set()

    @classmethod
    @inject
    def build(cls, bookings_api: IBookingsApi = Provide[Container.bookings_api]) -> Self:
        return cls(bookings_api=bookings_api)

    @Logger.io
    async def execute(
        self, *, booking: Booking, confirm: ConfirmCallback, now: datetime | None = None
    ) -> bool:
        now = now or datetime.now(timezone.utc)

        if not derive_booking_status(booking, now).is_cancelable:
            raise NotCancelableError()

        if booking.id in self._in_flight:
            raise ConflictError('Cancellation already in progress')

        answer = confirm(booking)
        if isawaitable(answer):
            answer = await answer
        if not answer:
            return False

        self._in_flight.add(booking.id)
        try:
            result = await self.bookings_api.cancel_booking(booking_id=booking.id)
            if not result.success:
                raise NotCancelableError(result.message or 'Failed to cancel booking.')
            booking.cancel()
        finally:
            self._in_flight.discard(booking.id)

        Logger.base.info(f'🗑️ [CANCEL] Booking {booking.display_reference} cancelled')
        return True

from pydantic import ValidationError

from eventora.platform.constant import route_constant as route
from eventora.platform.exception.exceptions import ApiRequestError
from eventora.platform.http.api_client import ApiClient, unwrap_data
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import ApiResult, BookingCreateResponse, CreateBookingCommand
from eventora.service.booking.app.interface.i_bookings_api import IBookingsApi
from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.enum import PaymentStatus
from eventora.service.booking.driven_adapter.api.schema.booking_schema import BookingResponse


class BookingsApiImpl(IBookingsApi):
    def __init__(self, *, api_client: ApiClient) -> None:
        self.api_client = api_client

    @Logger.io
    async def create_booking(self, *, command: CreateBookingCommand) -> BookingCreateResponse:
        try:
            body = await self.api_client.post(route.BOOKING_BASE, json=command.to_payload())
        except ApiRequestError as e:
            # 4xx/5xx with a reason (e.g. seats already booked) is a rejected booking, not a crash
            return BookingCreateResponse(success=False, message=e.message)

        if isinstance(body, dict) and body.get('success') is False:
            return BookingCreateResponse(success=False, message=body.get('message'))

        data = unwrap_data(body)
        booking = None
        if isinstance(data, dict):
            try:
                booking = BookingResponse.model_validate(data).to_entity()
            except ValidationError as e:
                # Still a confirmed booking; the use case falls back to the submitted seats
                Logger.base.warning(f'⚠️ [BOOKINGS-API] Unreadable booking on success: {e}')
        message = body.get('message') if isinstance(body, dict) else None
        return BookingCreateResponse(success=True, booking=booking, message=message)

    @Logger.io
    async def process_payment(
        self, *, booking_id: str, payment_status: PaymentStatus
    ) -> ApiResult:
        body = await self.api_client.post(
            route.BOOKING_PAYMENT,
            json={
                'bookingId': booking_id,
                'paymentDetails': {'paymentStatus': str(payment_status)},
            },
        )
        return ApiResult.from_body(body)

    @Logger.io
    async def get_my_bookings(self) -> list[Booking]:
        data = unwrap_data(await self.api_client.get(route.BOOKING_MY_BOOKINGS))
        if isinstance(data, dict):
            data = data.get('bookings', [])
        if not isinstance(data, list):
            return []
        return [BookingResponse.model_validate(item).to_entity() for item in data]

    @Logger.io
    async def get_booking_by_id(self, *, booking_id: str) -> Booking:
        body = await self.api_client.get(route.BOOKING_GET.format(booking_id=booking_id))
        return BookingResponse.model_validate(unwrap_data(body)).to_entity()

    @Logger.io
    async def cancel_booking(self, *, booking_id: str) -> ApiResult:
        body = await self.api_client.put(route.BOOKING_CANCEL.format(booking_id=booking_id))
        return ApiResult.from_body(body)

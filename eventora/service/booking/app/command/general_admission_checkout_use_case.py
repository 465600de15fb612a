from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.exception.exceptions import ApiRequestError, ConflictError, DomainError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import CreateBookingCommand
from eventora.service.booking.app.interface.i_bookings_api import IBookingsApi
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.booking_errors import (
    BookingCreateFailedError,
    PaymentFailedError,
)
from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.enum import PaymentStatus
from eventora.service.booking.domain.payment_form_domain import PaymentForm
from eventora.service.booking.domain.value_object.pending_intent import PendingIntent


class GeneralAdmissionCheckoutUseCase:
    """
    Ticket-count checkout without a seat map.

    Flow:
    1. Validate the card form
    2. createBooking with numberOfTickets only
    3. processPayment(bookingId, paid)
    """

    def __init__(self, *, session_context: SessionContext, bookings_api: IBookingsApi) -> None:
        self.session_context = session_context
        self.bookings_api = bookings_api
        self._in_flight = False

    @classmethod
    @inject
    def build(
        cls,
        session_context: SessionContext = Provide[Container.session_context],
        bookings_api: IBookingsApi = Provide[Container.bookings_api],
    ) -> Self:
        return cls(session_context=session_context, bookings_api=bookings_api)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @Logger.io
    async def execute(
        self,
        *,
        event: Event,
        number_of_tickets: int,
        form: PaymentForm,
        today: date | None = None,
    ) -> Booking:
        if self._in_flight:
            raise ConflictError('Payment is already being processed')
        if number_of_tickets < 1:
            raise DomainError('Select at least one ticket', 400)

        self._in_flight = True
        try:
            self.session_context.require_credential(PendingIntent.continue_booking(event.id))
            form.validate(today)

            response = await self.bookings_api.create_booking(
                command=CreateBookingCommand(
                    event_id=event.id, number_of_tickets=number_of_tickets
                )
            )
            if not response.success or response.booking is None or not response.booking.id:
                raise BookingCreateFailedError(response.message or 'Failed to create booking')
            booking = response.booking

            try:
                result = await self.bookings_api.process_payment(
                    booking_id=booking.id, payment_status=PaymentStatus.PAID
                )
            except ApiRequestError as e:
                raise PaymentFailedError(e.message) from e
            if not result.success:
                raise PaymentFailedError(result.message or 'Payment processing failed')

            booking.payment_status = PaymentStatus.PAID
            if booking.event is None:
                booking = booking.with_event(event)
            Logger.base.info(f'🎟️ [GA-CHECKOUT] Booking {booking.display_reference} paid')
            return booking
        finally:
            self._in_flight = False

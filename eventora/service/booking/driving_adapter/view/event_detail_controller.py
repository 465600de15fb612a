"""
Event detail view: details -> seat selection -> payment -> confirmation.

A failed booking sends the user back to a freshly loaded seat map with the reason shown.
"""

from datetime import date
from enum import StrEnum
from typing import Mapping, Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.core_setting import settings
from eventora.platform.config.di import Container
from eventora.platform.exception.exception_handlers import ErrorNotice, resolve_error_notice
from eventora.platform.exception.exceptions import (
    AuthenticationError,
    CustomBaseError,
    DomainError,
)
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.command.general_admission_checkout_use_case import (
    GeneralAdmissionCheckoutUseCase,
)
from eventora.service.booking.app.command.reserve_booking_use_case import ReserveBookingUseCase
from eventora.service.booking.app.command.submit_payment_use_case import SubmitPaymentUseCase
from eventora.service.booking.app.dto import ReservationStatus
from eventora.service.booking.app.query.get_event_use_case import GetEventUseCase
from eventora.service.booking.app.query.load_seat_map_use_case import LoadSeatMapUseCase
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.booking_errors import EmptySelectionError
from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.enum import SelectionState
from eventora.service.booking.domain.payment_form_domain import PaymentForm
from eventora.service.booking.domain.seat_selection_domain import SeatSelection
from eventora.service.booking.domain.value_object.amount import format_amount
from eventora.service.booking.domain.value_object.pending_intent import (
    CONTINUE_BOOKING_PARAM,
    PendingIntent,
)
from eventora.service.booking.domain.value_object.seat_ref import SeatRef
from eventora.service.booking.driving_adapter.view import booking_presenter


class EventDetailPanel(StrEnum):
    DETAILS = 'details'
    SEAT_SELECTION = 'seat_selection'
    PAYMENT = 'payment'
    CONFIRMATION = 'confirmation'


class EventDetailController:
    def __init__(
        self,
        *,
        session_context: SessionContext,
        get_event_use_case: GetEventUseCase,
        load_seat_map_use_case: LoadSeatMapUseCase,
        submit_payment_use_case: SubmitPaymentUseCase,
        reserve_booking_use_case: ReserveBookingUseCase,
        general_admission_checkout_use_case: GeneralAdmissionCheckoutUseCase,
        max_seats_per_booking: int | None = None,
    ) -> None:
        self.session_context = session_context
        self.get_event_use_case = get_event_use_case
        self.load_seat_map_use_case = load_seat_map_use_case
        self.submit_payment_use_case = submit_payment_use_case
        self.reserve_booking_use_case = reserve_booking_use_case
        self.general_admission_checkout_use_case = general_admission_checkout_use_case

        self.panel = EventDetailPanel.DETAILS
        self.event: Event | None = None
        self.selection = SeatSelection(
            max_seats_per_booking=max_seats_per_booking or settings.MAX_SEATS_PER_BOOKING
        )
        self.payment_form = PaymentForm()
        self.booking: Booking | None = None
        self.notice: ErrorNotice | None = None
        self.inline_error: str | None = None

    @classmethod
    @inject
    def build(
        cls, session_context: SessionContext = Provide[Container.session_context]
    ) -> Self:
        return cls(
            session_context=session_context,
            get_event_use_case=GetEventUseCase.build(),
            load_seat_map_use_case=LoadSeatMapUseCase.build(),
            submit_payment_use_case=SubmitPaymentUseCase.build(),
            reserve_booking_use_case=ReserveBookingUseCase.build(),
            general_admission_checkout_use_case=GeneralAdmissionCheckoutUseCase.build(),
        )

    @property
    def processing(self) -> bool:
        """Submit control stays disabled while this is True."""
        return (
            self.submit_payment_use_case.in_flight
            or self.reserve_booking_use_case.in_flight
            or self.general_admission_checkout_use_case.in_flight
        )

    def _report(self, exc: Exception) -> ErrorNotice:
        notice = resolve_error_notice(exc)
        if notice.inline:
            self.inline_error = notice.message
        else:
            self.notice = notice
        return notice

    def _clear_messages(self) -> None:
        self.notice = None
        self.inline_error = None

    def _intent(self, event: Event) -> PendingIntent:
        return PendingIntent.continue_booking(event.id)

    @Logger.io
    async def open(self, *, event_id: str, params: Mapping[str, str] | None = None) -> None:
        self._clear_messages()
        try:
            self.event = await self.get_event_use_case.get_by_id(event_id=event_id)
        except CustomBaseError as e:
            self._report(e)
            return

        params = params or {}
        if params.get(CONTINUE_BOOKING_PARAM) == '1' and self.session_context.is_authenticated:
            await self.open_seat_selection()

    async def book_now(self) -> bool:
        self._clear_messages()
        if self.event is None:
            return False
        try:
            self.session_context.require_credential(self._intent(self.event))
        except AuthenticationError as e:
            self._report(e)
            return False
        await self.open_seat_selection()
        return True

    async def open_seat_selection(self, error_message: str | None = None) -> None:
        if self.event is None:
            return
        self.panel = EventDetailPanel.SEAT_SELECTION
        self.selection.begin_loading()
        try:
            seat_map = await self.load_seat_map_use_case.execute(event_id=self.event.id)
        except CustomBaseError as e:
            self.selection.mark_error(self._report(e).message)
            return
        self.event = seat_map.event
        self.selection.mark_ready(seat_map.event, seat_map.layout)
        if error_message:
            self.selection.reopen(seat_map.layout, error_message)

    async def retry_seat_map(self) -> None:
        self.selection.retry()
        await self.open_seat_selection()

    def toggle_seat(self, seat: str | SeatRef) -> bool:
        self.inline_error = None
        try:
            return self.selection.toggle_seat(SeatRef.parse(seat))
        except DomainError as e:
            self._report(e)
            return False

    def confirm_seats(self) -> bool:
        self._clear_messages()
        if self.event is None:
            return False
        try:
            self.session_context.require_credential(self._intent(self.event))
            self.selection.confirm_selection()
        except (AuthenticationError, DomainError) as e:
            self._report(e)
            return False
        self.payment_form = PaymentForm()
        self.panel = EventDetailPanel.PAYMENT
        return True

    def cancel_seat_selection(self) -> None:
        self.selection.cancel()
        self.panel = EventDetailPanel.DETAILS

    def set_payment_field(self, name: str, raw: str) -> str:
        self.inline_error = None
        return self.payment_form.set_field(name, raw)

    def fill_test_card(self, card_type: str) -> None:
        self.payment_form.fill_test_card(card_type)

    async def cancel_payment(self) -> None:
        await self.open_seat_selection()

    @Logger.io
    async def submit_payment(self, *, today: date | None = None) -> Booking | None:
        if self.processing or self.event is None:
            return None
        self._clear_messages()
        if self.selection.state is not SelectionState.SUBMITTED:
            self._report(EmptySelectionError())
            return None
        seats = self.selection.selected_seats

        try:
            payment = await self.submit_payment_use_case.execute(
                form=self.payment_form, amount=self.selection.total_amount, today=today
            )
            outcome = await self.reserve_booking_use_case.execute(
                event=self.event, seats=seats, payment=payment.payment_details
            )
        except CustomBaseError as e:
            self._report(e)
            return None

        if outcome.succeeded:
            self.booking = outcome.booking
            self.panel = EventDetailPanel.CONFIRMATION
            return self.booking

        message = (
            f'Booking failed: {outcome.reason}'
            if outcome.reason and outcome.status is ReservationStatus.BOOKING_CREATE_FAILED
            else outcome.reason or 'Booking failed. Please try again.'
        )
        self.notice = ErrorNotice(message=message, retryable=True)
        await self.open_seat_selection(error_message=message)
        return None

    @Logger.io
    async def checkout_general_admission(
        self, *, number_of_tickets: int, today: date | None = None
    ) -> Booking | None:
        """Ticket-count checkout for events sold without a seat map."""
        if self.processing or self.event is None:
            return None
        self._clear_messages()
        try:
            self.booking = await self.general_admission_checkout_use_case.execute(
                event=self.event,
                number_of_tickets=number_of_tickets,
                form=self.payment_form,
                today=today,
            )
        except CustomBaseError as e:
            self._report(e)
            return None
        self.panel = EventDetailPanel.CONFIRMATION
        return self.booking

    def render(self) -> str:
        if self.event is None:
            body = ''
        elif self.panel is EventDetailPanel.CONFIRMATION and self.booking is not None:
            body = booking_presenter.render_confirmation(self.booking)
        elif self.panel is EventDetailPanel.SEAT_SELECTION:
            body = booking_presenter.render_seat_map(self.selection)
        elif self.panel is EventDetailPanel.PAYMENT:
            body = (
                f'{booking_presenter.render_event(self.event)}\n'
                f'Seats: {", ".join(s.label for s in self.selection.selected_seats)}\n'
                f'Amount: {format_amount(self.selection.total_amount)}'
            )
        else:
            body = booking_presenter.render_event(self.event)

        messages = [booking_presenter.render_notice(self.notice)] if self.notice else []
        if self.inline_error:
            messages.append(f'! {self.inline_error}')
        return '\n'.join([body, *messages]).strip()

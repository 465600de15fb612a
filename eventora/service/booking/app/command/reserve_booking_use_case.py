from typing import Any, Mapping, Self

from dependency_injector.wiring import Provide, inject
from opentelemetry import trace
import uuid_utils

from eventora.platform.config.core_setting import settings
from eventora.platform.config.di import Container
from eventora.platform.exception.exceptions import (
    AuthenticationError,
    ConflictError,
    NetworkFailureError,
    UnknownFailureError,
)
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import (
    CreateBookingCommand,
    ReservationOutcome,
    ReservationStatus,
)
from eventora.service.booking.app.interface.i_advisory_lock_store import IAdvisoryLockStore
from eventora.service.booking.app.interface.i_bookings_api import IBookingsApi
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.booking_errors import (
    AdvisoryLockWriteFailedError,
    BookingCreateFailedError,
    EmptySelectionError,
)
from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.value_object.payment_details import PaymentDetails
from eventora.service.booking.domain.value_object.pending_intent import PendingIntent
from eventora.service.booking.domain.value_object.seat_ref import SeatRef


class ReserveBookingUseCase:
    """
    Turn a paid seat selection into a backend booking.

    Flow ("lock first, confirm second"):
    1. Refuse an empty selection, re-check the session (login redirect with a pending intent)
    2. Normalize the payment payload (card holder must survive re-derivation)
    3. Read the event's advisory seat set (corrupt -> empty)
    4. Merge the selection into it and persist before calling the backend
    5. createBooking
    6. Success -> re-assert the merged set, return the booking
    7. Rejected -> remove exactly the seats this attempt added, report the reason
    8. Anything else -> same rollback, generic retryable outcome

    The advisory set only stops this client from re-offering seats it just submitted.
    It is not a lock across clients; the backend decides seat ownership.
    """

    def __init__(
        self,
        *,
        session_context: SessionContext,
        bookings_api: IBookingsApi,
        advisory_lock_store: IAdvisoryLockStore,
        cas_attempts: int | None = None,
    ) -> None:
        self.session_context = session_context
        self.bookings_api = bookings_api
        self.advisory_lock_store = advisory_lock_store
        self.cas_attempts = max(1, cas_attempts or settings.ADVISORY_LOCK_CAS_ATTEMPTS)
        self.tracer = trace.get_tracer(__name__)
        self._in_flight = False

    @classmethod
    @inject
    def build(
        cls,
        session_context: SessionContext = Provide[Container.session_context],
        bookings_api: IBookingsApi = Provide[Container.bookings_api],
        advisory_lock_store: IAdvisoryLockStore = Provide[Container.advisory_lock_store],
    ) -> Self:
        return cls(
            session_context=session_context,
            bookings_api=bookings_api,
            advisory_lock_store=advisory_lock_store,
        )

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @Logger.io
    async def execute(
        self,
        *,
        event: Event,
        seats: tuple[SeatRef, ...],
        payment: PaymentDetails | Mapping[str, Any],
    ) -> ReservationOutcome:
        if self._in_flight:
            raise ConflictError('A booking is already in progress')

        self._in_flight = True
        try:
            attempt_id = str(uuid_utils.uuid7())
            with self.tracer.start_as_current_span(
                'use_case.reserve_booking',
                attributes={
                    'booking.attempt_id': attempt_id,
                    'event.id': event.id,
                    'seat.count': len(seats),
                },
            ):
                return await self._reserve(
                    attempt_id=attempt_id, event=event, seats=seats, payment=payment
                )
        finally:
            self._in_flight = False

    async def _reserve(
        self,
        *,
        attempt_id: str,
        event: Event,
        seats: tuple[SeatRef, ...],
        payment: PaymentDetails | Mapping[str, Any],
    ) -> ReservationOutcome:
        # 1-2: failures here happen before anything is written
        if not seats:
            raise EmptySelectionError()
        self.session_context.require_credential(PendingIntent.continue_booking(event.id))
        payment_details = PaymentDetails.normalize(payment)

        # 3-4
        added = self._acquire_advisory_lock(event_id=event.id, seats=seats)

        try:
            # 5
            response = await self.bookings_api.create_booking(
                command=CreateBookingCommand(
                    event_id=event.id,
                    number_of_tickets=len(seats),
                    selected_seats=seats,
                    payment_details=payment_details,
                )
            )
        except AuthenticationError:
            # Credential expired mid-booking: the 401 already went to login, come back here after
            self._release_advisory_lock(event_id=event.id, added=added)
            self.session_context.remember_intent(PendingIntent.continue_booking(event.id))
            raise
        except NetworkFailureError as e:
            self._release_advisory_lock(event_id=event.id, added=added)
            return ReservationOutcome(
                status=ReservationStatus.NETWORK_FAILURE, reason=e.message, released_seats=added
            )
        except Exception as e:
            self._release_advisory_lock(event_id=event.id, added=added)
            Logger.base.exception(f'💥 [RESERVE] {attempt_id} failed unexpectedly: {e}')
            return ReservationOutcome(
                status=ReservationStatus.UNKNOWN_FAILURE,
                reason=UnknownFailureError().message,
                released_seats=added,
            )

        # 7
        if not response.success:
            self._release_advisory_lock(event_id=event.id, added=added)
            failure = BookingCreateFailedError(response.message)
            Logger.base.warning(f'❌ [RESERVE] {attempt_id} rejected: {failure.reason}')
            return ReservationOutcome(
                status=ReservationStatus.BOOKING_CREATE_FAILED,
                reason=failure.reason,
                released_seats=added,
            )

        # 6
        self._reassert_advisory_lock(event_id=event.id, seats=seats)
        booking = self._confirmed_booking(response.booking, event=event, seats=seats)
        Logger.base.info(
            f'✅ [RESERVE] {attempt_id} confirmed booking {booking.display_reference}'
        )
        return ReservationOutcome(status=ReservationStatus.CONFIRMED, booking=booking)

    @staticmethod
    def _confirmed_booking(
        booking: Booking | None, *, event: Event, seats: tuple[SeatRef, ...]
    ) -> Booking:
        if booking is None:
            return Booking(
                id='',
                event_id=event.id,
                event=event,
                number_of_tickets=len(seats),
                selected_seats=tuple(seat.label for seat in seats),
            )
        if booking.event is None:
            return booking.with_event(event)
        return booking

    def _acquire_advisory_lock(
        self, *, event_id: str, seats: tuple[SeatRef, ...]
    ) -> tuple[SeatRef, ...]:
        """Merge `seats` into the stored set. Returns the seats this call actually added."""
        for _ in range(self.cas_attempts):
            record = self.advisory_lock_store.read(event_id=event_id)
            added = tuple(seat for seat in seats if seat not in record.seats)
            if not added:
                return ()
            try:
                written = self.advisory_lock_store.compare_and_swap(
                    event_id=event_id,
                    expected_version=record.version,
                    seats=record.seats + added,
                )
            except AdvisoryLockWriteFailedError as e:
                Logger.base.error(
                    f'⚠️ [ADVISORY-LOCK] {e.message}; continuing without local hold'
                )
                return ()
            if written is not None:
                Logger.base.info(
                    f'🔒 [ADVISORY-LOCK] event {event_id} v{written.version}: '
                    f'+{[seat.label for seat in added]}'
                )
                return added

        Logger.base.warning(
            f'⚠️ [ADVISORY-LOCK] event {event_id}: gave up after {self.cas_attempts} conflicts'
        )
        return ()

    def _release_advisory_lock(self, *, event_id: str, added: tuple[SeatRef, ...]) -> None:
        """Remove only `added`, so seats held by earlier bookings stay put."""
        if not added:
            return
        for _ in range(self.cas_attempts):
            record = self.advisory_lock_store.read(event_id=event_id)
            remaining = tuple(seat for seat in record.seats if seat not in added)
            if remaining == record.seats:
                return
            try:
                written = self.advisory_lock_store.compare_and_swap(
                    event_id=event_id, expected_version=record.version, seats=remaining
                )
            except AdvisoryLockWriteFailedError as e:
                Logger.base.error(f'⚠️ [ADVISORY-LOCK] Rollback failed: {e.message}')
                return
            if written is not None:
                Logger.base.info(
                    f'🔓 [ADVISORY-LOCK] event {event_id} v{written.version}: '
                    f'-{[seat.label for seat in added]}'
                )
                return

        Logger.base.error(f'⚠️ [ADVISORY-LOCK] event {event_id}: rollback gave up on conflicts')

    def _reassert_advisory_lock(self, *, event_id: str, seats: tuple[SeatRef, ...]) -> None:
        """Idempotent re-persist after success; a failure here is only logged."""
        self._acquire_advisory_lock(event_id=event_id, seats=seats)

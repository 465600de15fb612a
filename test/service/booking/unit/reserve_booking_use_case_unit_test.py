"""
Unit tests for ReserveBookingUseCase

Test Coverage:
1. Lock first, confirm second: the advisory set is persisted before createBooking
2. Rejected booking rolls back exactly the seats this attempt added
3. Network / unexpected / auth failures roll back too
4. Corrupt or unwritable advisory state never blocks a booking
5. Session re-check with pending intent (also after a 401 mid-booking), re-entrancy guard
6. An empty selection never reaches the lock or the backend
"""

import asyncio

import pytest

from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.exception.exceptions import (
    AuthenticationError,
    ConflictError,
    NetworkFailureError,
)
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.app.command.reserve_booking_use_case import ReserveBookingUseCase
from eventora.service.booking.app.dto import BookingCreateResponse, ReservationStatus
from eventora.service.booking.app.interface.i_advisory_lock_store import (
    AdvisoryLockRecord,
    IAdvisoryLockStore,
)
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.booking_errors import (
    AdvisoryLockWriteFailedError,
    EmptySelectionError,
    MissingCardHolderError,
)
from eventora.service.booking.domain.value_object.seat_ref import SeatRef
from eventora.service.booking.driven_adapter.state.advisory_lock_store_impl import (
    AdvisoryLockStoreImpl,
)
from eventora.service.booking.driven_adapter.state.credential_store_impl import (
    CredentialStoreImpl,
)
from eventora.service.booking.driven_adapter.state.pending_intent_store_impl import (
    PendingIntentStoreImpl,
)
from eventora.service.booking.driving_adapter.view.route_navigator import RouteNavigator
from test.service.booking.booking_stubs import StubBookingsApi, make_booking, make_event


pytestmark = pytest.mark.unit

A1 = SeatRef('A', 1)
A2 = SeatRef('A', 2)
B1 = SeatRef('B', 1)
C1 = SeatRef('C', 1)

PAYMENT = {
    'cardNumber': '4111 1111 1111 1111',
    'expiryDate': '12/25',
    'cvv': '123',
    'cardHolderName': '  Test User ',
}


class FailingWriteLockStore(IAdvisoryLockStore):
    """Reads fine, every write fails (disk full, read-only dir, ...)."""

    def read(self, *, event_id: str) -> AdvisoryLockRecord:
        return AdvisoryLockRecord(event_id=event_id)

    def compare_and_swap(self, *, event_id, expected_version, seats):
        raise AdvisoryLockWriteFailedError()


class ConcurrentWriterLockStore(IAdvisoryLockStore):
    """Another writer slips C1 in right before this client's first write."""

    def __init__(self, inner: AdvisoryLockStoreImpl) -> None:
        self.inner = inner
        self.cas_calls = 0

    def read(self, *, event_id: str) -> AdvisoryLockRecord:
        return self.inner.read(event_id=event_id)

    def compare_and_swap(self, *, event_id, expected_version, seats):
        self.cas_calls += 1
        if self.cas_calls == 1:
            current = self.inner.read(event_id=event_id)
            self.inner.compare_and_swap(
                event_id=event_id,
                expected_version=current.version,
                seats=current.seats + (C1,),
            )
        return self.inner.compare_and_swap(
            event_id=event_id, expected_version=expected_version, seats=seats
        )


class TestReserveBooking:
    def setup_method(self):
        self.storage = LocalStorageClient()
        self.lock_store = AdvisoryLockStoreImpl(storage=self.storage)
        self.navigator = RouteNavigator(ViewRoute.EVENT_DETAIL)
        self.pending_intent_store = PendingIntentStoreImpl(storage=self.storage)
        self.session = SessionContext(
            credential_store=CredentialStoreImpl(storage=self.storage),
            pending_intent_store=self.pending_intent_store,
            navigator=self.navigator,
        )
        self.session.sign_in('jwt-token')
        self.event = make_event(price=500)
        self.bookings_api = StubBookingsApi(
            create_response=BookingCreateResponse(
                success=True, booking=make_booking(event=self.event, seats=('A1', 'A2'))
            )
        )

    def _use_case(self, lock_store: IAdvisoryLockStore | None = None) -> ReserveBookingUseCase:
        return ReserveBookingUseCase(
            session_context=self.session,
            bookings_api=self.bookings_api,
            advisory_lock_store=lock_store or self.lock_store,
            cas_attempts=3,
        )

    def _locked_seats(self) -> tuple[SeatRef, ...]:
        return self.lock_store.read(event_id=self.event.id).seats

    def _pre_lock(self, *seats: SeatRef) -> None:
        record = self.lock_store.read(event_id=self.event.id)
        self.lock_store.compare_and_swap(
            event_id=self.event.id, expected_version=record.version, seats=seats
        )

    @pytest.mark.asyncio
    async def test_success_confirms_and_keeps_lock(self):
        # When
        outcome = await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        # Then
        assert outcome.status is ReservationStatus.CONFIRMED
        assert outcome.booking.total_price == 1000
        assert outcome.booking.selected_seats == ('A1', 'A2')
        assert self._locked_seats() == (A1, A2)

    @pytest.mark.asyncio
    async def test_create_payload_carries_seats_and_normalized_card_holder(self):
        await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        payload = self.bookings_api.create_calls[0].to_payload()
        assert payload['eventId'] == 'EV1'
        assert payload['numberOfTickets'] == 2
        assert payload['paymentMethod'] == 'card'
        assert payload['selectedSeats'] == [
            {'row': 'A', 'seatNumber': 1},
            {'row': 'A', 'seatNumber': 2},
        ]
        assert payload['paymentDetails']['cardHolder'] == 'Test User'

    @pytest.mark.asyncio
    async def test_lock_is_persisted_before_the_backend_call(self):
        # Given
        seen_at_request_time = []
        self.bookings_api.on_create = lambda _command: seen_at_request_time.append(
            self._locked_seats()
        )

        # When
        await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        # Then
        assert seen_at_request_time == [(A1, A2)]

    @pytest.mark.asyncio
    async def test_backend_without_booking_body_still_confirms(self):
        self.bookings_api.create_response = BookingCreateResponse(success=True)

        outcome = await self._use_case().execute(event=self.event, seats=(A1,), payment=PAYMENT)

        assert outcome.succeeded
        assert outcome.booking.total_price == 500
        assert outcome.booking.selected_seats == ('A1',)

    @pytest.mark.asyncio
    async def test_rejected_booking_rolls_back_lock(self):
        # Given
        self.bookings_api.create_response = BookingCreateResponse(
            success=False, message='Seats already booked'
        )

        # When
        outcome = await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        # Then
        assert outcome.status is ReservationStatus.BOOKING_CREATE_FAILED
        assert outcome.reason == 'Seats already booked'
        assert outcome.released_seats == (A1, A2)
        assert self._locked_seats() == ()

    @pytest.mark.asyncio
    async def test_rollback_keeps_seats_held_by_earlier_bookings(self):
        # Given: A1 was locked by an earlier successful booking
        self._pre_lock(A1, B1)
        self.bookings_api.create_response = BookingCreateResponse(success=False, message='Nope')

        # When
        outcome = await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        # Then
        assert outcome.released_seats == (A2,)
        assert self._locked_seats() == (A1, B1)

    @pytest.mark.asyncio
    async def test_rejection_without_message_reports_unknown_error(self):
        self.bookings_api.create_response = BookingCreateResponse(success=False)

        outcome = await self._use_case().execute(event=self.event, seats=(A1,), payment=PAYMENT)

        assert outcome.reason == 'Unknown error'

    @pytest.mark.asyncio
    async def test_network_failure_is_retryable_and_rolled_back(self):
        self.bookings_api.create_error = NetworkFailureError()

        outcome = await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        assert outcome.status is ReservationStatus.NETWORK_FAILURE
        assert outcome.retryable
        assert self._locked_seats() == ()

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_generic_failure(self):
        self.bookings_api.create_error = RuntimeError('boom')

        outcome = await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        assert outcome.status is ReservationStatus.UNKNOWN_FAILURE
        assert outcome.reason == 'Something went wrong. Please try again.'
        assert self._locked_seats() == ()

    @pytest.mark.asyncio
    async def test_auth_failure_during_create_propagates_after_rollback(self):
        # Given: the credential expires while createBooking is in flight
        self.bookings_api.create_error = AuthenticationError()

        # When
        with pytest.raises(AuthenticationError):
            await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        # Then: nothing held, and the next sign-in comes back to this event
        assert self._locked_seats() == ()
        self.session.sign_in('fresh-jwt')
        intent = self.session.resume()
        assert intent.route is ViewRoute.EVENT_DETAIL
        assert intent.params == {'event_id': 'EV1', 'continueBooking': '1'}

    @pytest.mark.asyncio
    async def test_empty_selection_is_refused_before_any_write(self):
        with pytest.raises(EmptySelectionError):
            await self._use_case().execute(event=self.event, seats=(), payment=PAYMENT)

        assert self.bookings_api.create_calls == []
        assert self.lock_store.read(event_id=self.event.id).version == 0

    @pytest.mark.asyncio
    async def test_corrupt_lock_state_fails_open(self):
        # Given
        self.storage.set_item('event-EV1-booked-seats', '{not json')

        # When
        outcome = await self._use_case().execute(event=self.event, seats=(A1, A2), payment=PAYMENT)

        # Then
        assert outcome.succeeded
        assert self._locked_seats() == (A1, A2)

    @pytest.mark.asyncio
    async def test_legacy_list_format_is_merged(self):
        self.storage.set_item('event-EV1-booked-seats', '["B1"]')

        await self._use_case().execute(event=self.event, seats=(A1,), payment=PAYMENT)

        record = self.lock_store.read(event_id=self.event.id)
        assert record.seats == (B1, A1)
        assert record.version == 1  # the re-assert after success adds nothing

    @pytest.mark.asyncio
    async def test_lock_write_failure_does_not_block_booking(self):
        outcome = await self._use_case(FailingWriteLockStore()).execute(
            event=self.event, seats=(A1, A2), payment=PAYMENT
        )

        assert outcome.succeeded
        assert len(self.bookings_api.create_calls) == 1

    @pytest.mark.asyncio
    async def test_version_conflict_retries_merge(self):
        # Given
        racing_store = ConcurrentWriterLockStore(self.lock_store)
        self.bookings_api.create_response = BookingCreateResponse(success=False, message='Taken')

        # When
        outcome = await self._use_case(racing_store).execute(
            event=self.event, seats=(A1, A2), payment=PAYMENT
        )

        # Then: the other writer's seat survives both the merge and the rollback
        assert outcome.released_seats == (A1, A2)
        assert self._locked_seats() == (C1,)

    @pytest.mark.asyncio
    async def test_unauthenticated_redirects_with_pending_intent(self):
        # Given
        self.session.clear()

        # When
        with pytest.raises(AuthenticationError):
            await self._use_case().execute(event=self.event, seats=(A1,), payment=PAYMENT)

        # Then
        assert self.navigator.current_route is ViewRoute.LOGIN
        intent = self.pending_intent_store.pop()
        assert intent.params == {'event_id': 'EV1', 'continueBooking': '1'}
        assert self.bookings_api.create_calls == []
        assert self._locked_seats() == ()

    @pytest.mark.asyncio
    async def test_missing_card_holder_writes_nothing(self):
        payment = {**PAYMENT, 'cardHolderName': '   '}

        with pytest.raises(MissingCardHolderError) as exc_info:
            await self._use_case().execute(event=self.event, seats=(A1,), payment=payment)

        assert exc_info.value.message == 'Cardholder name is required to complete the payment.'
        assert self.bookings_api.create_calls == []
        assert self._locked_seats() == ()

    @pytest.mark.asyncio
    async def test_second_reservation_while_in_flight_is_rejected(self):
        # Given: the first createBooking is parked until released
        entered = asyncio.Event()
        release = asyncio.Event()
        bookings_api = self.bookings_api

        class ParkedBookingsApi(StubBookingsApi):
            async def create_booking(self, *, command):
                entered.set()
                await release.wait()
                return await bookings_api.create_booking(command=command)

        self.bookings_api = ParkedBookingsApi()
        use_case = self._use_case()
        first = asyncio.create_task(
            use_case.execute(event=self.event, seats=(A1,), payment=PAYMENT)
        )
        await entered.wait()
        assert use_case.in_flight

        # When
        with pytest.raises(ConflictError):
            await use_case.execute(event=self.event, seats=(A2,), payment=PAYMENT)

        # Then
        release.set()
        outcome = await first
        assert outcome.succeeded
        assert not use_case.in_flight

"""
Unit tests for EventDetailController

Test Coverage:
1. Payment only goes out for a confirmed, non-empty seat selection
2. Bad seat labels and early toggles are reported, never raised
3. Actions before an event is loaded are no-ops
"""

from datetime import date

import pytest

from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.app.command.general_admission_checkout_use_case import (
    GeneralAdmissionCheckoutUseCase,
)
from eventora.service.booking.app.command.reserve_booking_use_case import ReserveBookingUseCase
from eventora.service.booking.app.command.submit_payment_use_case import SubmitPaymentUseCase
from eventora.service.booking.app.dto import BookingCreateResponse
from eventora.service.booking.app.query.get_event_use_case import GetEventUseCase
from eventora.service.booking.app.query.load_seat_map_use_case import LoadSeatMapUseCase
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.enum import SelectionState
from eventora.service.booking.driven_adapter.state.advisory_lock_store_impl import (
    AdvisoryLockStoreImpl,
)
from eventora.service.booking.driven_adapter.state.credential_store_impl import (
    CredentialStoreImpl,
)
from eventora.service.booking.driven_adapter.state.pending_intent_store_impl import (
    PendingIntentStoreImpl,
)
from eventora.service.booking.driving_adapter.view.event_detail_controller import (
    EventDetailController,
    EventDetailPanel,
)
from eventora.service.booking.driving_adapter.view.route_navigator import RouteNavigator
from test.service.booking.booking_stubs import (
    StubBookingsApi,
    StubEventsApi,
    make_booking,
    make_event,
)


pytestmark = pytest.mark.unit

TODAY = date(2025, 1, 15)


class TestEventDetailController:
    def setup_method(self):
        storage = LocalStorageClient()
        self.navigator = RouteNavigator(ViewRoute.EVENT_DETAIL)
        self.session = SessionContext(
            credential_store=CredentialStoreImpl(storage=storage),
            pending_intent_store=PendingIntentStoreImpl(storage=storage),
            navigator=self.navigator,
        )
        self.session.sign_in('jwt')
        self.event = make_event(price=500)
        events_api = StubEventsApi(event=self.event)
        lock_store = AdvisoryLockStoreImpl(storage=storage)
        self.bookings_api = StubBookingsApi(
            create_response=BookingCreateResponse(
                success=True, booking=make_booking(event=self.event, seats=('A1',))
            )
        )
        self.controller = EventDetailController(
            session_context=self.session,
            get_event_use_case=GetEventUseCase(events_api=events_api),
            load_seat_map_use_case=LoadSeatMapUseCase(
                events_api=events_api, advisory_lock_store=lock_store
            ),
            submit_payment_use_case=SubmitPaymentUseCase(delay_seconds=0),
            reserve_booking_use_case=ReserveBookingUseCase(
                session_context=self.session,
                bookings_api=self.bookings_api,
                advisory_lock_store=lock_store,
            ),
            general_admission_checkout_use_case=GeneralAdmissionCheckoutUseCase(
                session_context=self.session, bookings_api=self.bookings_api
            ),
        )

    async def _open_seat_map(self) -> None:
        await self.controller.open(event_id=self.event.id)
        assert await self.controller.book_now()

    @pytest.mark.asyncio
    async def test_confirmed_selection_is_booked(self):
        # Given
        await self._open_seat_map()
        self.controller.toggle_seat('A1')
        assert self.controller.confirm_seats()
        self.controller.fill_test_card('visa')

        # When
        booking = await self.controller.submit_payment(today=TODAY)

        # Then
        assert booking is not None
        assert self.controller.panel is EventDetailPanel.CONFIRMATION
        assert self.bookings_api.create_calls[0].number_of_tickets == 1

    @pytest.mark.asyncio
    async def test_payment_without_any_seat_sends_nothing(self):
        # Given: event loaded, nothing selected or confirmed
        await self.controller.open(event_id=self.event.id)
        self.controller.fill_test_card('visa')

        # When
        booking = await self.controller.submit_payment(today=TODAY)

        # Then
        assert booking is None
        assert self.bookings_api.create_calls == []
        assert self.controller.inline_error == 'Select at least one seat to continue.'

    @pytest.mark.asyncio
    async def test_payment_with_unconfirmed_selection_sends_nothing(self):
        # Given
        await self._open_seat_map()
        self.controller.toggle_seat('A1')
        self.controller.fill_test_card('visa')

        # When
        booking = await self.controller.submit_payment(today=TODAY)

        # Then
        assert booking is None
        assert self.controller.selection.state is SelectionState.SELECTING
        assert self.bookings_api.create_calls == []

    @pytest.mark.asyncio
    async def test_unparseable_seat_label_is_reported_inline(self):
        await self._open_seat_map()

        assert self.controller.toggle_seat('??') is False
        assert 'Invalid seat reference' in self.controller.inline_error
        assert self.controller.selection.selected_seats == ()

    @pytest.mark.asyncio
    async def test_toggle_before_seat_map_is_loaded_is_reported(self):
        # Given: event details only, seat map never opened
        await self.controller.open(event_id=self.event.id)

        # When
        changed = self.controller.toggle_seat('A1')

        # Then
        assert changed is False
        assert 'Seat map is not ready' in self.controller.inline_error

    @pytest.mark.asyncio
    async def test_actions_without_an_event_do_nothing(self):
        assert await self.controller.book_now() is False
        assert self.controller.confirm_seats() is False

        await self.controller.open_seat_selection()

        assert self.controller.panel is EventDetailPanel.DETAILS
        assert await self.controller.submit_payment(today=TODAY) is None

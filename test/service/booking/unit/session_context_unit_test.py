"""
Unit tests for SessionContext and the pending-intent store

Test Coverage:
1. Credential lifecycle (load, sign_in, clear)
2. Login wall: pending intent saved with continueBooking, redirect, error
3. Pending intent consumed exactly once; malformed records discarded
4. 401 handling navigates to login only when not already there
"""

import pytest

from eventora.platform.constant.storage_key import POST_LOGIN_REDIRECT_KEY, TOKEN_KEY
from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.exception.exceptions import AuthenticationError
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.value_object.pending_intent import PendingIntent
from eventora.service.booking.driven_adapter.state.credential_store_impl import (
    CredentialStoreImpl,
)
from eventora.service.booking.driven_adapter.state.pending_intent_store_impl import (
    PendingIntentStoreImpl,
)
from eventora.service.booking.driving_adapter.view.route_navigator import RouteNavigator


pytestmark = pytest.mark.unit


class TestSessionContext:
    def setup_method(self):
        self.storage = LocalStorageClient()
        self.navigator = RouteNavigator(ViewRoute.EVENT_DETAIL)
        self.session = SessionContext(
            credential_store=CredentialStoreImpl(storage=self.storage),
            pending_intent_store=PendingIntentStoreImpl(storage=self.storage),
            navigator=self.navigator,
        )

    def test_load_restores_stored_token(self):
        self.storage.set_item(TOKEN_KEY, 'stored-jwt')

        assert self.session.load() == 'stored-jwt'
        assert self.session.is_authenticated

    def test_sign_in_and_clear(self):
        self.session.sign_in('jwt')
        assert self.storage.get_item(TOKEN_KEY) == 'jwt'

        self.session.clear()

        assert self.session.get_credential() is None
        assert self.storage.get_item(TOKEN_KEY) is None

    def test_require_credential_returns_token_when_signed_in(self):
        self.session.sign_in('jwt')

        assert self.session.require_credential() == 'jwt'
        assert self.navigator.current_route is ViewRoute.EVENT_DETAIL

    def test_login_wall_saves_intent_and_redirects(self):
        # When
        with pytest.raises(AuthenticationError) as exc_info:
            self.session.require_credential(
                PendingIntent(route=ViewRoute.EVENT_DETAIL, params={'event_id': 'EV1'})
            )

        # Then
        assert exc_info.value.message == 'Please login to continue with your booking.'
        assert self.navigator.current_route is ViewRoute.LOGIN
        intent = self.session.consume_pending_intent()
        assert intent.continues_booking
        assert intent.params['event_id'] == 'EV1'

    def test_pending_intent_is_consumed_once(self):
        with pytest.raises(AuthenticationError):
            self.session.require_credential(PendingIntent.continue_booking('EV1'))

        assert self.session.consume_pending_intent() is not None
        assert self.session.consume_pending_intent() is None

    @pytest.mark.parametrize(
        'raw',
        [
            '{not json',
            '"#/events/EV1"',
            '{"route": "nowhere", "params": {}}',
            '{"route": "event_detail", "params": {}}',
            '{"route": "event_detail", "params": {"event_id": 7}}',
        ],
    )
    def test_malformed_intent_is_discarded(self, raw):
        self.storage.set_item(POST_LOGIN_REDIRECT_KEY, raw)

        assert self.session.consume_pending_intent() is None
        assert self.storage.get_item(POST_LOGIN_REDIRECT_KEY) is None

    def test_resume_goes_to_intent(self):
        with pytest.raises(AuthenticationError):
            self.session.require_credential(PendingIntent.continue_booking('EV1'))
        self.session.sign_in('jwt')

        intent = self.session.resume()

        assert intent is not None
        assert self.navigator.current.route is ViewRoute.EVENT_DETAIL
        assert self.navigator.current.params == {'event_id': 'EV1', 'continueBooking': '1'}

    def test_resume_without_intent_goes_to_dashboard(self):
        self.session.sign_in('jwt')

        assert self.session.resume() is None
        assert self.navigator.current_route is ViewRoute.DASHBOARD

    def test_unauthorized_clears_and_navigates_once(self):
        self.session.sign_in('jwt')

        self.session.handle_unauthorized()
        self.session.handle_unauthorized()

        assert not self.session.is_authenticated
        login_visits = [e for e in self.navigator.history if e.route is ViewRoute.LOGIN]
        assert len(login_visits) == 1


class TestPendingIntent:
    def test_continue_booking_keeps_query(self):
        intent = PendingIntent.continue_booking('EV1', {'ref': 'home'})

        assert intent.params == {'ref': 'home', 'event_id': 'EV1', 'continueBooking': '1'}

    def test_payload_round_trip(self):
        intent = PendingIntent.continue_booking('EV1')

        assert PendingIntent.from_payload(intent.to_payload()) == intent

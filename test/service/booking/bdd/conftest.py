"""
BDD Step Definitions for the booking checkout flow

Runs the wired client (create_app + real adapters) against an in-memory backend served
through httpx.MockTransport.

Note: pytest-bdd steps must be synchronous, so async calls run on a dedicated event loop
owned by the scenario.
"""

import asyncio
from collections.abc import Coroutine, Iterator
from datetime import date
from itertools import count
from typing import Any, TypeVar

from dependency_injector import providers
import httpx
import orjson
import pytest
from pytest_bdd import given, parsers, then, when

from eventora.app_factory import create_app
from eventora.platform.config.di import Container
from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.domain.value_object.seat_ref import SeatRef
from eventora.service.booking.driving_adapter.view.event_detail_controller import (
    EventDetailPanel,
)


T = TypeVar('T')


# =============================================================================
# In-memory backend
# =============================================================================
class FakeBackend:
    def __init__(self) -> None:
        self.events: dict[str, dict[str, Any]] = {}
        self.bookings: list[dict[str, Any]] = []
        self.reject_message: str | None = None
        self._ids = count(1)

    def _json(self, status: int, body: Any) -> httpx.Response:
        return httpx.Response(status, content=orjson.dumps(body))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix('/api')
        body = orjson.loads(request.content) if request.content else None

        if request.method == 'POST' and path == '/auth/login':
            return self._json(200, {'success': True, 'token': 'jwt-bdd', 'user': {}})

        if request.method == 'POST' and path == '/bookings':
            if 'Authorization' not in request.headers:
                return self._json(401, {'message': 'Not authorized'})
            if self.reject_message:
                return self._json(400, {'success': False, 'message': self.reject_message})
            document = {
                '_id': f'65f1c0ffee00000000BK{next(self._ids):04d}',
                'event': self.events[body['eventId']],
                'numberOfTickets': body['numberOfTickets'],
                'selectedSeats': body.get('selectedSeats', []),
                'status': 'confirmed',
                'paymentStatus': 'paid',
            }
            self.bookings.append(document)
            return self._json(201, {'success': True, 'data': document})

        if request.method == 'GET' and path.startswith('/events/'):
            event_id, _, tail = path.removeprefix('/events/').partition('/')
            event = self.events.get(event_id)
            if event is None:
                return self._json(404, {'message': 'Event not found'})
            if tail == 'seats':
                return self._json(
                    200,
                    {
                        'success': True,
                        'data': {
                            'totalSeats': event['totalSeats'],
                            'availableSeats': event['availableSeats'],
                        },
                    },
                )
            return self._json(200, {'success': True, 'data': event})

        return self._json(404, {'message': 'Route not found'})


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def context() -> dict[str, Any]:
    """Shared test context for storing state between steps"""
    return {}


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def run_async() -> Iterator[Any]:
    loop = asyncio.new_event_loop()

    def _run(coro: Coroutine[Any, Any, T]) -> T:
        return loop.run_until_complete(coro)

    yield _run
    loop.close()


@pytest.fixture
def client_app(backend: FakeBackend, run_async: Any) -> Iterator[Any]:
    app_container = Container()
    app_container.local_storage.override(providers.Object(LocalStorageClient()))
    app_container.http_transport.override(providers.Object(httpx.MockTransport(backend)))

    app_context = create_app(app_container)
    app = run_async(app_context.__aenter__())
    yield app
    run_async(app_context.__aexit__(None, None, None))


def _seats(text: str) -> list[str]:
    return [label.strip() for label in text.split(',') if label.strip()]


# =============================================================================
# Given Steps
# =============================================================================
@given(parsers.parse('today is {today}'))
def given_today(context: dict[str, Any], today: str) -> None:
    context['today'] = date.fromisoformat(today)


@given(parsers.parse('the event "{event_id}" "{title}" costs {price:d} with {seats:d} seats'))
def given_event(backend: FakeBackend, event_id: str, title: str, price: int, seats: int) -> None:
    backend.events[event_id] = {
        '_id': event_id,
        'title': title,
        'date': '2026-12-31T19:00:00.000Z',
        'venue': 'Blue Hall',
        'price': price,
        'totalSeats': seats,
        'availableSeats': seats,
    }


@given('I am signed in')
def given_signed_in(client_app: Any) -> None:
    client_app.container.session_context().sign_in('jwt-bdd')


@given('I am signed out')
def given_signed_out(client_app: Any) -> None:
    client_app.container.session_context().clear()


@given(parsers.parse('the backend rejects bookings with "{message}"'))
def given_backend_rejects(backend: FakeBackend, message: str) -> None:
    backend.reject_message = message


# =============================================================================
# When Steps
# =============================================================================
@when(parsers.parse('I open the event "{event_id}"'))
def when_open_event(
    context: dict[str, Any], client_app: Any, run_async: Any, event_id: str
) -> None:
    controller = client_app.event_detail()
    run_async(controller.open(event_id=event_id))
    context['controller'] = controller


@when(parsers.parse('I open the event "{event_id}" from the pending intent'))
def when_open_event_from_intent(
    context: dict[str, Any], client_app: Any, run_async: Any, event_id: str
) -> None:
    entry = client_app.container.navigator().current
    controller = client_app.event_detail()
    run_async(controller.open(event_id=entry.params['event_id'], params=entry.params))
    context['controller'] = controller


@when('I book now')
def when_book_now(context: dict[str, Any], run_async: Any) -> None:
    context['booked_now'] = run_async(context['controller'].book_now())


@when(parsers.parse('I select seats "{seats}"'))
def when_select_seats(context: dict[str, Any], seats: str) -> None:
    for label in _seats(seats):
        assert context['controller'].toggle_seat(label), f'seat {label} could not be selected'


@when('I confirm my seats')
def when_confirm_seats(context: dict[str, Any]) -> None:
    assert context['controller'].confirm_seats(), context['controller'].render()


@when(parsers.parse('I pay with the "{card_type}" test card'))
def when_pay_with_test_card(context: dict[str, Any], run_async: Any, card_type: str) -> None:
    controller = context['controller']
    controller.fill_test_card(card_type)
    run_async(controller.submit_payment(today=context['today']))


@when(
    parsers.parse(
        'I pay with card "{number}" expiring "{expiry}" cvv "{cvv}" for "{holder}"'
    )
)
def when_pay_with_card(
    context: dict[str, Any],
    run_async: Any,
    number: str,
    expiry: str,
    cvv: str,
    holder: str,
) -> None:
    controller = context['controller']
    controller.set_payment_field('card_number', number)
    controller.set_payment_field('expiry_date', expiry)
    controller.set_payment_field('cvv', cvv)
    controller.set_payment_field('card_holder', holder)
    run_async(controller.submit_payment(today=context['today']))


@when('I log in')
def when_log_in(client_app: Any, run_async: Any) -> None:
    run_async(client_app.auth().login(email='buyer@example.com', password='P@ssw0rd'))


# =============================================================================
# Then Steps
# =============================================================================
@then(parsers.parse('I see "{text}"'))
def then_i_see(context: dict[str, Any], text: str) -> None:
    rendered = context['controller'].render()
    assert text in rendered, rendered


@then('I am back on seat selection')
def then_back_on_seat_selection(context: dict[str, Any]) -> None:
    controller = context['controller']
    assert controller.panel is EventDetailPanel.SEAT_SELECTION
    assert controller.selection.selected_seats == ()


@then(parsers.parse('the advisory lock for "{event_id}" holds "{seats}"'))
def then_lock_holds(client_app: Any, event_id: str, seats: str) -> None:
    record = client_app.container.advisory_lock_store().read(event_id=event_id)
    assert record.seats == tuple(SeatRef.parse(label) for label in _seats(seats))


@then(parsers.parse('the advisory lock for "{event_id}" holds no seats'))
def then_lock_empty(client_app: Any, event_id: str) -> None:
    assert client_app.container.advisory_lock_store().read(event_id=event_id).seats == ()


@then(parsers.parse('the backend received a booking for seats "{seats}"'))
def then_backend_received(backend: FakeBackend, seats: str) -> None:
    [document] = backend.bookings
    sent = [SeatRef.parse(seat).label for seat in document['selectedSeats']]
    assert sent == _seats(seats)


@then('no booking was created')
def then_no_booking(backend: FakeBackend) -> None:
    assert backend.bookings == []


@then(parsers.parse('I am on the "{route}" route'))
def then_on_route(client_app: Any, route: str) -> None:
    assert client_app.container.navigator().current_route is ViewRoute(route)


@then(parsers.parse('I am on the "{route}" route with continueBooking'))
def then_on_route_with_continue(client_app: Any, route: str) -> None:
    entry = client_app.container.navigator().current
    assert entry.route is ViewRoute(route)
    assert entry.params['continueBooking'] == '1'

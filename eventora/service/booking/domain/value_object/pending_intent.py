"""Pending Intent Value Object"""

from typing import Any, Mapping

import attrs

from eventora.platform.constant.view_route import ViewRoute


CONTINUE_BOOKING_PARAM = 'continueBooking'


@attrs.define(frozen=True)
class PendingIntent:
    """
    Where to go after login.

    Saved when a booking action hits the login wall and consumed exactly once after the
    next successful sign-in.
    """

    route: ViewRoute
    params: Mapping[str, str] = attrs.field(factory=dict, converter=dict)

    @classmethod
    def continue_booking(
        cls, event_id: str, query: Mapping[str, str] | None = None
    ) -> 'PendingIntent':
        params = {k: str(v) for k, v in (query or {}).items()}
        params['event_id'] = str(event_id)
        params[CONTINUE_BOOKING_PARAM] = '1'
        return cls(route=ViewRoute.EVENT_DETAIL, params=params)

    @property
    def continues_booking(self) -> bool:
        return self.params.get(CONTINUE_BOOKING_PARAM) == '1'

    def with_continue_booking(self) -> 'PendingIntent':
        return attrs.evolve(self, params={**self.params, CONTINUE_BOOKING_PARAM: '1'})

    def to_payload(self) -> dict[str, Any]:
        return {'route': str(self.route), 'params': dict(self.params)}

    @classmethod
    def from_payload(cls, payload: Any) -> 'PendingIntent':
        """Raises ValueError for anything that is not a well-formed intent record."""
        if not isinstance(payload, dict):
            raise ValueError('pending intent must be an object')
        route = ViewRoute(payload.get('route'))
        params = payload.get('params', {})
        if not isinstance(params, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in params.items()
        ):
            raise ValueError('pending intent params must map strings to strings')
        if route is ViewRoute.EVENT_DETAIL and not params.get('event_id'):
            raise ValueError('event_detail intent needs an event_id')
        return cls(route=route, params=params)

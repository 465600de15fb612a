from typing import Any

from eventora.platform.config.core_setting import settings
from eventora.platform.constant import route_constant as route
from eventora.platform.http.api_client import ApiClient, unwrap_data
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import ApiResult, SeatAvailability
from eventora.service.booking.app.interface.i_events_api import IEventsApi
from eventora.service.booking.domain.entity.event_entity import Event
from eventora.service.booking.domain.value_object.seat_layout import SeatLayout
from eventora.service.booking.driven_adapter.api.schema.event_schema import EventResponse


def _to_events(data: Any) -> list[Event]:
    if isinstance(data, dict):
        data = data.get('events', [])
    if not isinstance(data, list):
        return []
    return [EventResponse.model_validate(item).to_entity() for item in data]


class EventsApiImpl(IEventsApi):
    def __init__(self, *, api_client: ApiClient) -> None:
        self.api_client = api_client

    @Logger.io
    async def get_all_events(self, *, params: dict[str, Any] | None = None) -> list[Event]:
        body = await self.api_client.get(route.EVENT_BASE, params=params)
        return _to_events(unwrap_data(body))

    @Logger.io
    async def get_event_by_id(self, *, event_id: str) -> Event:
        body = await self.api_client.get(route.EVENT_GET.format(event_id=event_id))
        return EventResponse.model_validate(unwrap_data(body)).to_entity()

    @Logger.io
    async def get_featured_events(self) -> list[Event]:
        return _to_events(unwrap_data(await self.api_client.get(route.EVENT_FEATURED)))

    @Logger.io
    async def get_upcoming_events(self) -> list[Event]:
        return _to_events(unwrap_data(await self.api_client.get(route.EVENT_UPCOMING)))

    @Logger.io
    async def get_events_by_category(self, *, category: str) -> list[Event]:
        body = await self.api_client.get(route.EVENT_BY_CATEGORY.format(category=category))
        return _to_events(unwrap_data(body))

    @Logger.io
    async def get_locations(self) -> list[str]:
        data = unwrap_data(await self.api_client.get(route.EVENT_LOCATIONS))
        return [str(location) for location in data] if isinstance(data, list) else []

    @Logger.io
    async def get_seat_availability(self, *, event_id: str) -> SeatAvailability:
        data = unwrap_data(await self.api_client.get(route.EVENT_SEATS.format(event_id=event_id)))
        data = data if isinstance(data, dict) else {}
        total_seats = int(data.get('totalSeats') or 0)
        available = data.get('availableSeats')
        layout = SeatLayout.from_api(
            data, total_seats=total_seats, seats_per_row=settings.SEATS_PER_ROW
        )
        return SeatAvailability(
            layout=layout,
            available_seats=int(available) if available is not None else layout.available_count,
            total_seats=total_seats,
        )

    @Logger.io
    async def fetch_live_events(
        self, *, city: str | None = None, limit: int | None = None
    ) -> list[Event]:
        body = await self.api_client.get(
            route.EVENT_LIVE_FETCH, params={'city': city, 'limit': limit}
        )
        return _to_events(unwrap_data(body))

    @Logger.io
    async def sync_live_events(
        self, *, city: str | None = None, limit: int | None = None
    ) -> ApiResult:
        body = await self.api_client.get(
            route.EVENT_LIVE_SYNC, params={'city': city, 'limit': limit}
        )
        return ApiResult.from_body(body)

    @Logger.io
    async def create_event(self, *, event_data: dict[str, Any]) -> Event:
        body = await self.api_client.post(route.EVENT_BASE, json=event_data)
        return EventResponse.model_validate(unwrap_data(body)).to_entity()

    @Logger.io
    async def delete_event(self, *, event_id: str) -> ApiResult:
        return ApiResult.from_body(
            await self.api_client.delete(route.EVENT_GET.format(event_id=event_id))
        )

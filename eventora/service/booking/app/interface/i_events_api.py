from abc import ABC, abstractmethod
from typing import Any

from eventora.service.booking.app.dto import ApiResult, SeatAvailability
from eventora.service.booking.domain.entity.event_entity import Event


class IEventsApi(ABC):
    """Event catalog endpoints"""

    @abstractmethod
    async def get_all_events(self, *, params: dict[str, Any] | None = None) -> list[Event]:
        pass

    @abstractmethod
    async def get_event_by_id(self, *, event_id: str) -> Event:
        pass

    @abstractmethod
    async def get_featured_events(self) -> list[Event]:
        pass

    @abstractmethod
    async def get_upcoming_events(self) -> list[Event]:
        pass

    @abstractmethod
    async def get_events_by_category(self, *, category: str) -> list[Event]:
        pass

    @abstractmethod
    async def get_locations(self) -> list[str]:
        pass

    @abstractmethod
    async def get_seat_availability(self, *, event_id: str) -> SeatAvailability:
        pass

    @abstractmethod
    async def fetch_live_events(
        self, *, city: str | None = None, limit: int | None = None
    ) -> list[Event]:
        pass

    @abstractmethod
    async def sync_live_events(
        self, *, city: str | None = None, limit: int | None = None
    ) -> ApiResult:
        pass

    @abstractmethod
    async def create_event(self, *, event_data: dict[str, Any]) -> Event:
        """Admin pass-through"""
        pass

    @abstractmethod
    async def delete_event(self, *, event_id: str) -> ApiResult:
        """Admin pass-through"""
        pass

from typing import Self

import attrs
from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import SeatMap
from eventora.service.booking.app.interface.i_advisory_lock_store import IAdvisoryLockStore
from eventora.service.booking.app.interface.i_events_api import IEventsApi


class LoadSeatMapUseCase:
    """
    Event + seat availability, with this client's advisory seat set shown as locked.

    The advisory set is read after both requests return so a rollback that landed
    meanwhile is reflected.
    """

    def __init__(self, *, events_api: IEventsApi, advisory_lock_store: IAdvisoryLockStore) -> None:
        self.events_api = events_api
        self.advisory_lock_store = advisory_lock_store

    @classmethod
    @inject
    def build(
        cls,
        events_api: IEventsApi = Provide[Container.events_api],
        advisory_lock_store: IAdvisoryLockStore = Provide[Container.advisory_lock_store],
    ) -> Self:
        return cls(events_api=events_api, advisory_lock_store=advisory_lock_store)

    @Logger.io
    async def execute(self, *, event_id: str) -> SeatMap:
        event = await self.events_api.get_event_by_id(event_id=event_id)
        availability = await self.events_api.get_seat_availability(event_id=event_id)

        # availability endpoint is fresher than the event document
        event = attrs.evolve(event, available_seats=availability.available_seats)

        record = self.advisory_lock_store.read(event_id=event_id)
        layout = availability.layout.with_locked(record.seats)
        return SeatMap(event=event, layout=layout, locked_seats=record.seats)

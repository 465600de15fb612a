from typing import Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.interface.i_events_api import IEventsApi
from eventora.service.booking.domain.entity.event_entity import Event


class GetEventUseCase:
    def __init__(self, *, events_api: IEventsApi) -> None:
        self.events_api = events_api

    @classmethod
    @inject
    def build(cls, events_api: IEventsApi = Provide[Container.events_api]) -> Self:
        return cls(events_api=events_api)

    @Logger.io
    async def get_by_id(self, *, event_id: str) -> Event:
        return await self.events_api.get_event_by_id(event_id=event_id)

"""
Client bootstrap.

Wires the DI container, restores the stored session and hands out the view controllers.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import attrs

from eventora.platform.config.core_setting import settings
from eventora.platform.config.di import Container, container
from eventora.platform.config.wire_modules import WIRE_MODULES
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.command.authenticate_use_case import AuthenticateUseCase
from eventora.service.booking.driving_adapter.view.dashboard_controller import DashboardController
from eventora.service.booking.driving_adapter.view.event_detail_controller import (
    EventDetailController,
)


@attrs.define
class EventoraApp:
    container: Container

    def event_detail(self) -> EventDetailController:
        return EventDetailController.build()

    def dashboard(self) -> DashboardController:
        return DashboardController.build()

    def auth(self) -> AuthenticateUseCase:
        return AuthenticateUseCase.build()


@asynccontextmanager
async def create_app(app_container: Container | None = None) -> AsyncIterator[EventoraApp]:
    app_container = app_container or container
    Logger.base.info(f'🚀 [{settings.PROJECT_NAME}] Starting against {settings.API_URL}')

    app_container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Client] Dependency injection wired')

    if app_container.session_context().load():
        Logger.base.info('🔑 [Client] Restored stored session')

    try:
        yield EventoraApp(container=app_container)
    finally:
        await app_container.api_client().aclose()
        app_container.unwire()
        Logger.base.info('🛑 [Client] Shut down')

from typing import Any, Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.exception.exceptions import DomainError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import ApiResult
from eventora.service.booking.app.interface.i_users_api import IUsersApi
from eventora.service.booking.app.session_context import SessionContext


class ManageAccountUseCase:
    """Profile and account pass-throughs. Deactivating or deleting the account ends the session."""

    def __init__(self, *, users_api: IUsersApi, session_context: SessionContext) -> None:
        self.users_api = users_api
        self.session_context = session_context

    @classmethod
    @inject
    def build(
        cls,
        users_api: IUsersApi = Provide[Container.users_api],
        session_context: SessionContext = Provide[Container.session_context],
    ) -> Self:
        return cls(users_api=users_api, session_context=session_context)

    @Logger.io
    async def get_profile(self) -> dict[str, Any]:
        return await self.users_api.get_profile()

    @Logger.io
    async def update_profile(self, *, user_data: dict[str, Any]) -> dict[str, Any]:
        return await self.users_api.update_profile(user_data=user_data)

    @Logger.io
    async def get_dashboard(self) -> dict[str, Any]:
        return await self.users_api.get_dashboard()

    @Logger.io
    async def export_user_data(self) -> dict[str, Any]:
        return await self.users_api.export_data()

    @Logger.io
    async def deactivate_account(self) -> ApiResult:
        result = await self.users_api.deactivate_account()
        self._end_session(result, 'Failed to deactivate account.')
        return result

    @Logger.io
    async def delete_account(self) -> ApiResult:
        result = await self.users_api.delete_account()
        self._end_session(result, 'Failed to delete account.')
        return result

    def _end_session(self, result: ApiResult, failure_message: str) -> None:
        if not result.success:
            raise DomainError(result.message or failure_message, 400)
        self.session_context.clear()
        self.session_context.navigator.navigate(ViewRoute.LOGIN)
        Logger.base.info('👋 [ACCOUNT] Account closed, session ended')

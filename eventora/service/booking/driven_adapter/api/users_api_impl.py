from typing import Any

from eventora.platform.constant import route_constant as route
from eventora.platform.http.api_client import ApiClient, unwrap_data
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import ApiResult
from eventora.service.booking.app.interface.i_users_api import IUsersApi


def _as_dict(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {}


class UsersApiImpl(IUsersApi):
    def __init__(self, *, api_client: ApiClient) -> None:
        self.api_client = api_client

    @Logger.io
    async def get_profile(self) -> dict[str, Any]:
        return _as_dict(unwrap_data(await self.api_client.get(route.USER_PROFILE)))

    @Logger.io
    async def update_profile(self, *, user_data: dict[str, Any]) -> dict[str, Any]:
        return _as_dict(unwrap_data(await self.api_client.put(route.USER_PROFILE, json=user_data)))

    @Logger.io
    async def get_dashboard(self) -> dict[str, Any]:
        return _as_dict(unwrap_data(await self.api_client.get(route.USER_DASHBOARD)))

    @Logger.io(truncate_content=True)
    async def export_data(self) -> dict[str, Any]:
        return _as_dict(unwrap_data(await self.api_client.get(route.USER_EXPORT)))

    @Logger.io
    async def deactivate_account(self) -> ApiResult:
        return ApiResult.from_body(await self.api_client.patch(route.USER_DEACTIVATE))

    @Logger.io
    async def delete_account(self) -> ApiResult:
        return ApiResult.from_body(await self.api_client.delete(route.USER_ACCOUNT))

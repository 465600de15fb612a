from abc import ABC, abstractmethod
from typing import Any

from eventora.service.booking.app.dto import ApiResult


class IUsersApi(ABC):
    @abstractmethod
    async def get_profile(self) -> dict[str, Any]:
        pass

    @abstractmethod
    async def update_profile(self, *, user_data: dict[str, Any]) -> dict[str, Any]:
        pass

    @abstractmethod
    async def get_dashboard(self) -> dict[str, Any]:
        pass

    @abstractmethod
    async def export_data(self) -> dict[str, Any]:
        pass

    @abstractmethod
    async def deactivate_account(self) -> ApiResult:
        pass

    @abstractmethod
    async def delete_account(self) -> ApiResult:
        pass

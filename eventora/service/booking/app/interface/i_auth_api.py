from abc import ABC, abstractmethod
from typing import Any

from eventora.service.booking.app.dto import ApiResult, AuthResult


class IAuthApi(ABC):
    """Auth endpoints. Implementations never touch the credential store."""

    @abstractmethod
    async def signup(self, *, user_data: dict[str, Any]) -> AuthResult:
        pass

    @abstractmethod
    async def verify_otp(self, *, email: str, otp: str) -> AuthResult:
        pass

    @abstractmethod
    async def resend_otp(self, *, email: str) -> ApiResult:
        pass

    @abstractmethod
    async def login(self, *, email: str, password: str) -> AuthResult:
        pass

    @abstractmethod
    async def google_login(self, *, token_id: str) -> AuthResult:
        pass

    @abstractmethod
    async def get_me(self) -> dict[str, Any]:
        pass

    @abstractmethod
    async def logout(self) -> ApiResult:
        pass

    @abstractmethod
    async def forgot_password(self, *, email: str) -> ApiResult:
        pass

    @abstractmethod
    async def reset_password(self, *, email: str, otp: str, new_password: str) -> ApiResult:
        pass

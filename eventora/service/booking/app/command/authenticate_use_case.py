from typing import Any, Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.exception.exceptions import AuthenticationError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import ApiResult, AuthResult
from eventora.service.booking.app.interface.i_auth_api import IAuthApi
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.value_object.pending_intent import PendingIntent


class AuthenticateUseCase:
    """
    Sign-in family of calls.

    Whenever the backend hands out a token it is stored in the session and the user is sent
    on to the pending intent (if one was saved at the login wall) or to the dashboard.
    """

    def __init__(self, *, auth_api: IAuthApi, session_context: SessionContext) -> None:
        self.auth_api = auth_api
        self.session_context = session_context

    @classmethod
    @inject
    def build(
        cls,
        auth_api: IAuthApi = Provide[Container.auth_api],
        session_context: SessionContext = Provide[Container.session_context],
    ) -> Self:
        return cls(auth_api=auth_api, session_context=session_context)

    def _complete_sign_in(self, result: AuthResult) -> PendingIntent | None:
        if not result.token:
            return None
        self.session_context.sign_in(result.token)
        return self.session_context.resume()

    @Logger.io
    async def login(self, *, email: str, password: str) -> AuthResult:
        result = await self.auth_api.login(email=email, password=password)
        if not result.token:
            raise AuthenticationError(result.message or 'Invalid email or password')
        self._complete_sign_in(result)
        return result

    @Logger.io
    async def signup(self, *, user_data: dict[str, Any]) -> AuthResult:
        """Backends with OTP verification return no token here; verify_otp finishes the job."""
        result = await self.auth_api.signup(user_data=user_data)
        self._complete_sign_in(result)
        return result

    @Logger.io
    async def verify_otp(self, *, email: str, otp: str) -> AuthResult:
        result = await self.auth_api.verify_otp(email=email, otp=otp)
        self._complete_sign_in(result)
        return result

    @Logger.io
    async def google_login(self, *, token_id: str) -> AuthResult:
        result = await self.auth_api.google_login(token_id=token_id)
        if not result.token:
            raise AuthenticationError(result.message or 'Google sign-in failed')
        self._complete_sign_in(result)
        return result

    @Logger.io
    async def resend_otp(self, *, email: str) -> ApiResult:
        return await self.auth_api.resend_otp(email=email)

    @Logger.io
    async def forgot_password(self, *, email: str) -> ApiResult:
        return await self.auth_api.forgot_password(email=email)

    @Logger.io
    async def reset_password(self, *, email: str, otp: str, new_password: str) -> ApiResult:
        return await self.auth_api.reset_password(email=email, otp=otp, new_password=new_password)

    @Logger.io
    async def get_me(self) -> dict[str, Any]:
        return await self.auth_api.get_me()

    @Logger.io
    async def logout(self) -> None:
        try:
            await self.auth_api.logout()
        finally:
            # the local session ends even when the backend call fails
            self.session_context.clear()

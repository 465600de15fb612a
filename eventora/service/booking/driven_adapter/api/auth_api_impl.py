from typing import Any

from eventora.platform.constant import route_constant as route
from eventora.platform.http.api_client import ApiClient, unwrap_data
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import ApiResult, AuthResult
from eventora.service.booking.app.interface.i_auth_api import IAuthApi


def _to_auth_result(body: Any) -> AuthResult:
    """The token sits at the top level of the body; older responses nest it under data."""
    if not isinstance(body, dict):
        return AuthResult(success=True)
    data = body.get('data') if isinstance(body.get('data'), dict) else {}
    token = body.get('token') or data.get('token')
    user = body.get('user') or data.get('user')
    return AuthResult(
        success=bool(body.get('success', True)),
        token=token if isinstance(token, str) and token else None,
        user=user if isinstance(user, dict) else None,
        message=body.get('message'),
    )


class AuthApiImpl(IAuthApi):
    def __init__(self, *, api_client: ApiClient) -> None:
        self.api_client = api_client

    @Logger.io
    async def signup(self, *, user_data: dict[str, Any]) -> AuthResult:
        return _to_auth_result(await self.api_client.post(route.AUTH_SIGNUP, json=user_data))

    @Logger.io
    async def verify_otp(self, *, email: str, otp: str) -> AuthResult:
        body = await self.api_client.post(route.AUTH_VERIFY_OTP, json={'email': email, 'otp': otp})
        return _to_auth_result(body)

    @Logger.io
    async def resend_otp(self, *, email: str) -> ApiResult:
        return ApiResult.from_body(
            await self.api_client.post(route.AUTH_RESEND_OTP, json={'email': email})
        )

    @Logger.io
    async def login(self, *, email: str, password: str) -> AuthResult:
        body = await self.api_client.post(
            route.AUTH_LOGIN, json={'email': email, 'password': password}
        )
        return _to_auth_result(body)

    @Logger.io
    async def google_login(self, *, token_id: str) -> AuthResult:
        body = await self.api_client.post(route.AUTH_GOOGLE, json={'tokenId': token_id})
        return _to_auth_result(body)

    @Logger.io
    async def get_me(self) -> dict[str, Any]:
        data = unwrap_data(await self.api_client.get(route.AUTH_ME))
        if isinstance(data, dict) and isinstance(data.get('user'), dict):
            return data['user']
        return data if isinstance(data, dict) else {}

    @Logger.io
    async def logout(self) -> ApiResult:
        return ApiResult.from_body(await self.api_client.post(route.AUTH_LOGOUT))

    @Logger.io
    async def forgot_password(self, *, email: str) -> ApiResult:
        return ApiResult.from_body(
            await self.api_client.post(route.AUTH_FORGOT_PASSWORD, json={'email': email})
        )

    @Logger.io
    async def reset_password(self, *, email: str, otp: str, new_password: str) -> ApiResult:
        body = await self.api_client.post(
            route.AUTH_RESET_PASSWORD,
            json={'email': email, 'otp': otp, 'newPassword': new_password},
        )
        return ApiResult.from_body(body)

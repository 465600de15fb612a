"""
HTTP client for the Eventora backend.

Mirrors the shared axios instance of the web client: one base URL, a bearer header taken from
the session on every request, and a response hook that clears the session on 401.
"""

from typing import Any, Callable

import httpx
import orjson

from eventora.platform.exception.exceptions import (
    ApiRequestError,
    AuthenticationError,
    NetworkFailureError,
    NotFoundError,
)
from eventora.platform.logging.loguru_io import Logger


CredentialProvider = Callable[[], str | None]
UnauthorizedHook = Callable[[], None]


def unwrap_data(body: Any) -> Any:
    """Return `data` from a `{success, data}` envelope, or the body itself."""
    if isinstance(body, dict) and 'data' in body and 'success' in body:
        return body['data']
    return body


def _error_message(body: Any, fallback: str) -> str:
    if isinstance(body, dict):
        for key in ('message', 'error', 'detail'):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback


class ApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        credential_provider: CredentialProvider,
        on_unauthorized: UnauthorizedHook,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credential_provider = credential_provider
        self._on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            headers={'Content-Type': 'application/json', 'Accept': 'application/json'},
        )

    async def __aenter__(self) -> 'ApiClient':
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self.request('GET', path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request('POST', path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request('PUT', path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request('PATCH', path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request('DELETE', path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        headers: dict[str, str] = {}
        if token := self._credential_provider():
            headers['Authorization'] = f'Bearer {token}'

        content = orjson.dumps(json) if json is not None else None
        query = {k: v for k, v in (params or {}).items() if v is not None} or None

        try:
            response = await self._client.request(
                method, path, params=query, content=content, headers=headers
            )
        except httpx.TransportError as e:
            Logger.base.warning(f'🌐 [API] {method} {path} transport failure: {type(e).__name__}')
            raise NetworkFailureError() from e

        body = self._decode(response)

        if response.status_code == 401:
            Logger.base.info(f'🔒 [API] {method} {path} -> 401, clearing session')
            self._on_unauthorized()
            raise AuthenticationError(_error_message(body, AuthenticationError().message))
        if response.status_code == 404:
            raise NotFoundError(_error_message(body, 'Not found'))
        if response.status_code >= 400:
            raise ApiRequestError(
                _error_message(body, f'Request failed with status {response.status_code}'),
                response.status_code,
                body,
            )
        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError:
            return response.text

"""Generic backend acknowledgement DTOs."""

from typing import Any

import attrs


@attrs.define(frozen=True)
class ApiResult:
    """`{success, message, data}` answer from a pass-through endpoint"""

    success: bool
    message: str | None = None
    data: Any = None

    @classmethod
    def from_body(cls, body: Any) -> 'ApiResult':
        if not isinstance(body, dict):
            return cls(success=True, data=body)
        return cls(
            success=bool(body.get('success', True)),
            message=body.get('message'),
            data=body.get('data'),
        )


@attrs.define(frozen=True)
class AuthResult:
    success: bool
    token: str | None = attrs.field(default=None, repr=False)
    user: dict[str, Any] | None = None
    message: str | None = None

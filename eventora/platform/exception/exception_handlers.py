"""
Map exceptions onto what the user sees.

Validation errors stay inline, booking and network errors become a single message with a
retry affordance, authentication errors always end in the login redirect.
"""

from typing import Callable

import attrs

from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.exception.exceptions import (
    AuthenticationError,
    CustomBaseError,
    DomainError,
    NetworkFailureError,
    NotFoundError,
    UnknownFailureError,
)


@attrs.frozen
class ErrorNotice:
    message: str
    inline: bool = False
    retryable: bool = False
    redirect_to: ViewRoute | None = None


ErrorNoticeHandler = Callable[[Exception], ErrorNotice]


def authentication_error_handler(exc: Exception) -> ErrorNotice:
    message = exc.message if isinstance(exc, CustomBaseError) else str(exc)
    return ErrorNotice(message=message, redirect_to=ViewRoute.LOGIN)


def domain_error_handler(exc: Exception) -> ErrorNotice:
    message = exc.message if isinstance(exc, CustomBaseError) else str(exc)
    return ErrorNotice(message=message, inline=True)


def not_found_error_handler(exc: Exception) -> ErrorNotice:
    message = exc.message if isinstance(exc, CustomBaseError) else str(exc)
    return ErrorNotice(message=message, redirect_to=ViewRoute.EVENTS)


def retryable_error_handler(exc: Exception) -> ErrorNotice:
    message = exc.message if isinstance(exc, CustomBaseError) else str(exc)
    return ErrorNotice(message=message, retryable=True)


def general_exception_handler(exc: Exception) -> ErrorNotice:
    return ErrorNotice(message=UnknownFailureError().message, retryable=True)


# Most specific class wins (resolved along the MRO)
EXCEPTION_HANDLERS: dict[type[Exception], ErrorNoticeHandler] = {
    AuthenticationError: authentication_error_handler,
    DomainError: domain_error_handler,
    NotFoundError: not_found_error_handler,
    NetworkFailureError: retryable_error_handler,
    CustomBaseError: retryable_error_handler,
    Exception: general_exception_handler,  # Catch-all for unexpected failures
}


def resolve_error_notice(exc: Exception) -> ErrorNotice:
    for klass in type(exc).__mro__:
        handler = EXCEPTION_HANDLERS.get(klass)
        if handler is not None:
            return handler(exc)
    return general_exception_handler(exc)

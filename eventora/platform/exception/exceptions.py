class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str = 'Please login to continue.') -> None:
        super().__init__(message, 401)


class ApiRequestError(CustomBaseError):
    """Backend answered with a non-2xx status that has no dedicated error type."""

    def __init__(self, message: str, status_code: int, body: object = None) -> None:
        super().__init__(message, status_code)
        self.body = body


class NetworkFailureError(CustomBaseError):
    def __init__(self, message: str = 'Network error. Check your connection and retry.') -> None:
        super().__init__(message, 503)


class LocalStorageError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class UnknownFailureError(CustomBaseError):
    def __init__(self, message: str = 'Something went wrong. Please try again.') -> None:
        super().__init__(message, 500)

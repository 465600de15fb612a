"""
Booking workflow errors.

Validation errors surface inline next to the form that produced them; the rest become one
retryable message in the booking view.
"""

from eventora.platform.exception.exceptions import ConflictError, CustomBaseError, DomainError


class ValidationFailedError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidCardNumberError(ValidationFailedError):
    def __init__(self, message: str = 'Enter a valid card number to continue.') -> None:
        super().__init__(message)


class InvalidExpiryFormatError(ValidationFailedError):
    def __init__(self, message: str = 'Enter the card expiry date in MM/YY format.') -> None:
        super().__init__(message)


class ExpiredCardError(ValidationFailedError):
    def __init__(self, message: str = 'This card appears to be expired.') -> None:
        super().__init__(message)


class InvalidCvvError(ValidationFailedError):
    def __init__(
        self, message: str = 'Enter the 3 or 4 digit CVV from the back of your card.'
    ) -> None:
        super().__init__(message)


class MissingCardHolderError(ValidationFailedError):
    def __init__(
        self, message: str = 'Add the cardholder name as it appears on the card.'
    ) -> None:
        super().__init__(message)


class EmptySelectionError(ValidationFailedError):
    def __init__(self, message: str = 'Select at least one seat to continue.') -> None:
        super().__init__(message)


class SelectionLimitExceededError(ValidationFailedError):
    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f'You can select up to {limit} seat(s) for this event.')


class NotCancelableError(DomainError):
    def __init__(self, message: str = 'This booking can no longer be cancelled.') -> None:
        super().__init__(message, 400)


class PaymentFailedError(DomainError):
    def __init__(self, message: str = 'Payment processing failed') -> None:
        super().__init__(message, 402)


class BookingCreateFailedError(ConflictError):
    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or 'Unknown error'
        super().__init__(f'Booking failed: {self.reason}')


class AdvisoryLockWriteFailedError(CustomBaseError):
    """Local seat hold could not be persisted. Logged, never shown to the user."""

    def __init__(self, message: str = 'Unable to reserve seats locally') -> None:
        super().__init__(message, 500)

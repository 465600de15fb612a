from datetime import date
from typing import Self

import anyio

from eventora.platform.config.core_setting import settings
from eventora.platform.exception.exceptions import ConflictError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.domain.domain_event import PaymentSucceeded
from eventora.service.booking.domain.payment_form_domain import PaymentForm


class SubmitPaymentUseCase:
    """
    Simulated card checkout.

    Validates the form, waits a fixed "gateway" delay and approves. Nothing is charged and
    the card data only leaves this process inside the booking-creation request.
    """

    def __init__(self, *, delay_seconds: float | None = None) -> None:
        self.delay_seconds = (
            settings.PAYMENT_SIMULATED_DELAY_SECONDS if delay_seconds is None else delay_seconds
        )
        self._in_flight = False

    @classmethod
    def build(cls) -> Self:
        return cls()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @Logger.io
    async def execute(
        self, *, form: PaymentForm, amount: int | float, today: date | None = None
    ) -> PaymentSucceeded:
        if self._in_flight:
            raise ConflictError('Payment is already being processed')

        self._in_flight = True
        try:
            form.validate(today)
            await anyio.sleep(self.delay_seconds)
            details = form.to_payment_details()
            Logger.base.info(f'💳 [PAYMENT] Simulated approval, card ending {details.last4}')
            return PaymentSucceeded(payment_details=details, amount=amount)
        finally:
            self._in_flight = False

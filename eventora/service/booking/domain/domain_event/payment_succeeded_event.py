from datetime import datetime, timezone

import attrs

from eventora.service.booking.domain.value_object.payment_details import PaymentDetails


@attrs.define(frozen=True)
class PaymentSucceeded:
    """Simulated gateway approval. Carries the validated card data to the reservation step."""

    payment_details: PaymentDetails
    amount: int | float
    occurred_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))

"""Payment Details Value Object"""

from typing import Any, Mapping

import attrs

from eventora.service.booking.domain.booking_errors import MissingCardHolderError


_CARD_HOLDER_KEYS = ('cardHolder', 'cardHolderName', 'card_holder')


@attrs.define(frozen=True)
class PaymentDetails:
    """
    Card data captured by the payment form.

    Transient: sent once with the booking-creation call, never written to local state.
    card_number and cvv stay out of repr so they cannot leak through log lines.
    """

    card_number: str = attrs.field(repr=False)
    expiry_date: str
    cvv: str = attrs.field(repr=False)
    card_holder: str

    @property
    def last4(self) -> str:
        digits = ''.join(ch for ch in self.card_number if ch.isdigit())
        return digits[-4:]

    @classmethod
    def normalize(cls, raw: 'PaymentDetails | Mapping[str, Any] | None') -> 'PaymentDetails':
        """Re-derive the card holder from alternate field names; it must not be blank."""
        if isinstance(raw, PaymentDetails):
            raw = raw.to_payload()
        raw = raw or {}

        card_holder = ''
        for key in _CARD_HOLDER_KEYS:
            value = raw.get(key)
            if isinstance(value, str) and value.strip():
                card_holder = value.strip()
                break
        if not card_holder:
            raise MissingCardHolderError('Cardholder name is required to complete the payment.')

        return cls(
            card_number=str(raw.get('cardNumber') or raw.get('card_number') or ''),
            expiry_date=str(raw.get('expiryDate') or raw.get('expiry_date') or ''),
            cvv=str(raw.get('cvv') or ''),
            card_holder=card_holder,
        )

    def to_payload(self) -> dict[str, str]:
        return {
            'cardNumber': self.card_number,
            'expiryDate': self.expiry_date,
            'cvv': self.cvv,
            'cardHolder': self.card_holder,
        }

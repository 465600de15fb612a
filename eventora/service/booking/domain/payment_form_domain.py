"""
Payment Form Domain

Keystroke formatting and submit-time validation for the simulated card checkout.
Validation reports only the first failing rule, always in the same order.
"""

from datetime import date
import re

import attrs

from eventora.platform.exception.exceptions import DomainError
from eventora.service.booking.domain.booking_errors import (
    ExpiredCardError,
    InvalidCardNumberError,
    InvalidCvvError,
    InvalidExpiryFormatError,
    MissingCardHolderError,
)
from eventora.service.booking.domain.value_object.payment_details import PaymentDetails


MIN_CARD_DIGITS = 13
MAX_CARD_NUMBER_LENGTH = 19  # formatted, spaces included
EXPIRY_LENGTH = 5
MIN_CVV_LENGTH = 3
MAX_CVV_LENGTH = 4

_NON_DIGIT = re.compile(r'\D')

TEST_CARDS: dict[str, dict[str, str]] = {
    'visa': {'number': '4111111111111111', 'expiry': '12/25', 'cvv': '123', 'name': 'Test User'},
    'mastercard': {
        'number': '5555555555554444',
        'expiry': '12/25',
        'cvv': '123',
        'name': 'Test User',
    },
    'amex': {'number': '378282246310005', 'expiry': '12/25', 'cvv': '1234', 'name': 'Test User'},
}


def _digits(raw: str) -> str:
    return _NON_DIGIT.sub('', raw or '')


def format_card_number(raw: str) -> str:
    digits = _digits(raw)
    grouped = ' '.join(digits[i : i + 4] for i in range(0, len(digits), 4))
    return grouped[:MAX_CARD_NUMBER_LENGTH]


def format_expiry(raw: str) -> str:
    digits = _digits(raw)
    if len(digits) >= 2:
        return f'{digits[:2]}/{digits[2:4]}'
    return digits


def format_cvv(raw: str) -> str:
    return _digits(raw)[:MAX_CVV_LENGTH]


_FORMATTERS = {
    'card_number': format_card_number,
    'expiry_date': format_expiry,
    'cvv': format_cvv,
}


@attrs.define
class PaymentForm:
    card_number: str = attrs.field(default='', repr=False)
    expiry_date: str = ''
    cvv: str = attrs.field(default='', repr=False)
    card_holder: str = ''

    def set_field(self, name: str, raw: str) -> str:
        """Apply one keystroke-level edit and return the formatted value."""
        if name not in ('card_number', 'expiry_date', 'cvv', 'card_holder'):
            raise DomainError(f'Unknown payment field: {name}', 400)
        formatter = _FORMATTERS.get(name)
        value = formatter(raw) if formatter else raw
        setattr(self, name, value)
        return value

    def fill_test_card(self, card_type: str) -> None:
        card = TEST_CARDS.get(card_type)
        if card is None:
            raise DomainError(f'Unknown test card: {card_type}', 400)
        self.card_number = card['number']
        self.expiry_date = card['expiry']
        self.cvv = card['cvv']
        self.card_holder = card['name']

    def validate(self, today: date | None = None) -> None:
        today = today or date.today()

        if len(_digits(self.card_number)) < MIN_CARD_DIGITS:
            raise InvalidCardNumberError()

        if len(self.expiry_date) != EXPIRY_LENGTH or self.expiry_date[2] != '/':
            raise InvalidExpiryFormatError()
        month_text, year_text = self.expiry_date.split('/', 1)
        if not (month_text.isdigit() and year_text.isdigit()):
            raise InvalidExpiryFormatError()
        month, year = int(month_text), int(year_text)
        if not 1 <= month <= 12:
            raise InvalidExpiryFormatError('Expiry month looks incorrect.')

        current_year, current_month = today.year % 100, today.month
        if year < current_year or (year == current_year and month < current_month):
            raise ExpiredCardError()

        if len(self.cvv) < MIN_CVV_LENGTH:
            raise InvalidCvvError()

        if not self.card_holder.strip():
            raise MissingCardHolderError()

    def to_payment_details(self) -> PaymentDetails:
        return PaymentDetails(
            card_number=self.card_number,
            expiry_date=self.expiry_date,
            cvv=self.cvv,
            card_holder=self.card_holder.strip(),
        )

"""Money helpers. Prices are whole currency units from the backend, floats tolerated."""

from decimal import Decimal, InvalidOperation
from typing import Any

from eventora.platform.config.core_setting import settings


def normalize_amount(value: Any) -> int | float:
    if value is None or isinstance(value, bool):
        return 0
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return 0
    if not amount.is_finite():
        return 0
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def format_amount(value: Any, currency_symbol: str | None = None) -> str:
    """format_amount(1000) -> '₹1000' (no grouping, matches the receipt text)"""
    amount = normalize_amount(value)
    symbol = settings.CURRENCY_SYMBOL if currency_symbol is None else currency_symbol
    if isinstance(amount, float):
        return f'{symbol}{amount:.2f}'
    return f'{symbol}{amount}'

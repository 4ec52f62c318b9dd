"""
Monetary precision helpers.

Cart items carry Decimal prices and cached tax amounts; reported totals are
rounded to the currency's minor unit with banker's rounding (ROUND_HALF_EVEN)
so repeated aggregation never drifts by a cent.
"""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Union

from django.conf import settings

# Currency minor unit exponents (how many decimal places)
CURRENCY_EXPONENT = {
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "CAD": 2,
    "AUD": 2,
    "INR": 2,
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "KWD": 3,
    "BHD": 3,
    "JOD": 3,
}


def currency_exponent(currency: str) -> int:
    """
    Get the number of decimal places for a currency.

    Examples:
        >>> currency_exponent("USD")
        2
        >>> currency_exponent("JPY")
        0
    """
    return CURRENCY_EXPONENT.get(currency.upper(), 2)


def default_currency() -> str:
    return getattr(settings, "RESTAURANT_OPERATIONS", {}).get("CURRENCY", "USD")


def to_decimal(value: Union[Decimal, str, int, float, None]) -> Decimal:
    """Coerce a JSON-decoded number (or numeric string) into a Decimal."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Convert float to string first to avoid binary representation noise
        value = str(value)
    return Decimal(value)


def quantize(amount: Union[Decimal, str, int, float], currency: str = None) -> Decimal:
    """
    Round to currency decimals using banker's rounding.

    Examples:
        >>> quantize("10.127", "USD")
        Decimal('10.13')
        >>> quantize("10.125", "USD")
        Decimal('10.12')
    """
    currency = currency or default_currency()
    step = Decimal(10) ** -currency_exponent(currency)
    return to_decimal(amount).quantize(step, rounding=ROUND_HALF_EVEN)

"""
Money value object.

An amount is an arbitrary-precision Decimal paired with an ISO 4217 currency
code. Negative amounts are not rejected here; that policy belongs to callers.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

import pycountry


class InvalidCurrencyError(ValueError):
    """Raised when a currency code is not a recognised ISO 4217 code."""

    pass


def parse_currency(code: str) -> str:
    """
    Parse an ISO 4217 currency code.

    Lookup is case-insensitive; the canonical upper-case alpha-3 code is
    returned.

    Raises:
        InvalidCurrencyError: If the code is empty or unknown
    """
    if not code or not isinstance(code, str):
        raise InvalidCurrencyError(f"currency code cannot be empty: {code!r}")

    currency = pycountry.currencies.get(alpha_3=code.strip().upper())
    if currency is None:
        raise InvalidCurrencyError(f"unknown ISO 4217 currency code: {code!r}")

    return currency.alpha_3


@dataclass(frozen=True)
class Money:
    """An amount of money in a single currency."""

    amount: Decimal
    currency: str

    def __post_init__(self):
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "amount", _to_decimal(self.amount))
        object.__setattr__(self, "currency", parse_currency(self.currency))

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


def _to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps the short repr of floats (9.99, not 9.9900000000000002131...)
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid money amount: {value!r}") from exc

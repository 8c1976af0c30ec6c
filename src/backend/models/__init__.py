"""
Domain value objects for carts.

These types carry no persistence awareness; the repository layer maps
database rows to and from them.
"""
from .cart import Cart, CartItem
from .money import InvalidCurrencyError, Money, parse_currency

__all__ = ["Cart", "CartItem", "InvalidCurrencyError", "Money", "parse_currency"]

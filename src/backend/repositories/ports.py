"""
Cart repository port.
"""
from abc import ABC, abstractmethod
from typing import Iterable
from uuid import UUID

from models.cart import Cart, CartItem


class CartRepositoryPort(ABC):
    """Abstract repository for owner-scoped carts."""

    @abstractmethod
    async def get_cart(self, owner_id: str) -> Cart:
        """Return every item stored for the owner."""
        pass

    @abstractmethod
    async def add_item(self, owner_id: str, item: CartItem) -> None:
        """Insert the item or overwrite its price."""
        pass

    @abstractmethod
    async def add_items(self, owner_id: str, items: Iterable[CartItem]) -> int:
        """Upsert several items atomically; return how many were written."""
        pass

    @abstractmethod
    async def delete_item(self, owner_id: str, product_id: UUID) -> bool:
        """Delete one item; return whether a row was removed."""
        pass

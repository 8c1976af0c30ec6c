"""
Cart domain objects.

A cart has no row of its own: it is the set of items currently stored for an
owner, assembled at read time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from models.money import Money


@dataclass(frozen=True)
class CartItem:
    """A priced product in a cart.

    ``created_at`` is assigned by the database on first insert and is
    ignored on writes.
    """

    product_id: UUID
    price: Money
    created_at: Optional[datetime] = None


@dataclass
class Cart:
    """All items stored for one owner."""

    owner_id: str
    items: List[CartItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def product_ids(self) -> List[UUID]:
        return [item.product_id for item in self.items]

    def find(self, product_id: UUID) -> Optional[CartItem]:
        """Return the item for ``product_id`` or None."""
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

"""
Typed query bindings for the cart_items table.

Each method builds one statement and runs it through a DBTX. Rows come back
as plain dataclasses; turning them into domain objects is the repository's
job.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert

from db.executors import DBTX
from db.models import cart_items


@dataclass(frozen=True)
class GetCartRow:
    product_id: UUID
    price_amount: Decimal
    price_currency: str
    created_at: datetime


@dataclass(frozen=True)
class AddItemParams:
    owner_id: str
    product_id: UUID
    price_amount: Decimal
    price_currency: str


@dataclass(frozen=True)
class DeleteItemParams:
    owner_id: str
    product_id: UUID


class Queries:
    """Query bindings over a DBTX."""

    def __init__(self, dbtx: DBTX):
        self.dbtx = dbtx

    def with_tx(self, dbtx: DBTX) -> "Queries":
        """Return bindings running on another executor, typically a transaction."""
        return Queries(dbtx)

    async def get_cart(self, owner_id: str) -> List[GetCartRow]:
        stmt = select(
            cart_items.c.product_id,
            cart_items.c.price_amount,
            cart_items.c.price_currency,
            cart_items.c.created_at,
        ).where(cart_items.c.owner_id == owner_id)

        rows = await self.dbtx.fetch_all(stmt)
        return [
            GetCartRow(
                product_id=row.product_id,
                price_amount=row.price_amount,
                price_currency=row.price_currency,
                created_at=row.created_at,
            )
            for row in rows
        ]

    async def add_item(self, params: AddItemParams) -> None:
        """Insert an item or overwrite its price; created_at is never updated."""
        stmt = insert(cart_items).values(
            owner_id=params.owner_id,
            product_id=params.product_id,
            price_amount=params.price_amount,
            price_currency=params.price_currency,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[cart_items.c.owner_id, cart_items.c.product_id],
            set_={
                "price_amount": stmt.excluded.price_amount,
                "price_currency": stmt.excluded.price_currency,
            },
        )
        await self.dbtx.execute(stmt)

    async def delete_item(self, params: DeleteItemParams) -> int:
        stmt = delete(cart_items).where(
            cart_items.c.owner_id == params.owner_id,
            cart_items.c.product_id == params.product_id,
        )
        return await self.dbtx.execute(stmt)

"""
Cart Repository for database operations.

Validates input, calls the query bindings and maps rows to domain objects.
Holds nothing but the executor and its bindings, so one instance can serve
concurrent callers. Conflicting writes to the same (owner, product) are
resolved by the database's upsert.
"""

import logging
from typing import Any, Iterable, Optional
from uuid import UUID

from core.decorators import handle_database_exceptions
from core.exceptions import MappingError, ValidationError
from db.executors import as_executor
from db.queries import AddItemParams, DeleteItemParams, GetCartRow, Queries
from models.cart import Cart, CartItem
from models.money import InvalidCurrencyError, Money
from repositories.ports import CartRepositoryPort
from repositories.transaction import with_transaction

logger = logging.getLogger(__name__)

NIL_UUID = UUID(int=0)


class CartRepository(CartRepositoryPort):
    """Repository for cart_items backed by a pool or an open transaction."""

    def __init__(self, dbtx: Any):
        """
        Args:
            dbtx: AsyncEngine for pooled access, or AsyncConnection /
                AsyncSession to join a transaction the caller already opened

        Raises:
            ValueError: If dbtx is None
            TypeError: If dbtx is not a supported handle
        """
        self._dbtx = as_executor(dbtx)
        self._queries = Queries(self._dbtx)

    @handle_database_exceptions("q.get_cart")
    async def get_cart(self, owner_id: str) -> Cart:
        """
        Return every item stored for the owner.

        An owner with no rows gets an empty cart, not an error.

        Raises:
            ValidationError: If owner_id is empty
            MappingError: If a stored currency code is not valid
            StorageError: If the query fails
        """
        if not owner_id:
            raise ValidationError("owner_id")

        rows = await self._queries.get_cart(owner_id)

        items = [map_row_to_cart_item(row) for row in rows]
        logger.debug(f"Loaded {len(items)} cart items for owner {owner_id}")

        return Cart(owner_id=owner_id, items=items)

    @handle_database_exceptions("q.add_item")
    async def add_item(self, owner_id: str, item: CartItem) -> None:
        """
        Insert the item or overwrite the price of an existing one.

        ``item.created_at`` is ignored; the stored timestamp keeps its value
        from the first insert.

        Raises:
            ValidationError: If owner_id or item.product_id is empty
            StorageError: If the query fails
        """
        if not owner_id:
            raise ValidationError("owner_id")
        if _is_nil(item.product_id):
            raise ValidationError("item.product_id")

        await self._queries.add_item(map_cart_item_to_add_item_params(owner_id, item))

    @handle_database_exceptions("q.add_items")
    async def add_items(self, owner_id: str, items: Iterable[CartItem]) -> int:
        """
        Upsert several items in one transaction.

        Either every item is written or none is. Validation runs on the whole
        batch before the transaction opens.

        Returns:
            Number of items written
        """
        if not owner_id:
            raise ValidationError("owner_id")

        params = []
        for item in items:
            if _is_nil(item.product_id):
                raise ValidationError("item.product_id")
            params.append(map_cart_item_to_add_item_params(owner_id, item))

        if not params:
            return 0

        async def upsert_all(q: Queries) -> int:
            for p in params:
                await q.add_item(p)
            return len(params)

        return await with_transaction(self._dbtx, upsert_all)

    @handle_database_exceptions("q.delete_item")
    async def delete_item(self, owner_id: str, product_id: UUID) -> bool:
        """
        Delete one item.

        Returns:
            True if a row was removed, False if nothing matched

        Raises:
            ValidationError: If owner_id or product_id is empty
            StorageError: If the query fails
        """
        if not owner_id:
            raise ValidationError("owner_id")
        if _is_nil(product_id):
            raise ValidationError("product_id")

        rows_affected = await self._queries.delete_item(
            DeleteItemParams(owner_id=owner_id, product_id=product_id)
        )

        return rows_affected > 0


def map_row_to_cart_item(row: GetCartRow) -> CartItem:
    """Map a GetCartRow to a domain CartItem."""
    try:
        price = Money(amount=row.price_amount, currency=row.price_currency)
    except InvalidCurrencyError as exc:
        raise MappingError(row.price_currency, row.product_id) from exc

    return CartItem(
        product_id=row.product_id,
        price=price,
        created_at=row.created_at,
    )


def map_cart_item_to_add_item_params(owner_id: str, item: CartItem) -> AddItemParams:
    """Map a domain CartItem to AddItemParams."""
    return AddItemParams(
        owner_id=owner_id,
        product_id=item.product_id,
        price_amount=item.price.amount,
        price_currency=item.price.currency,
    )


def _is_nil(product_id: Optional[UUID]) -> bool:
    return product_id is None or product_id == NIL_UUID

"""
Database table models using SQLModel.

Only table metadata lives here. Rows are read and written through the query
bindings in ``db.queries`` and mapped to domain objects by the repositories.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Column, DateTime, Index, Numeric, String, text
from sqlalchemy.dialects.postgresql import UUID as PostgreSQL_UUID
from sqlmodel import Field, SQLModel


class TableModel(SQLModel):
    """Base table model with common functionality."""

    pass


class CartItemRecord(TableModel, table=True):
    """One priced product in an owner's cart, keyed by (owner_id, product_id)."""

    __tablename__ = "cart_items"

    owner_id: str = Field(
        sa_column=Column(String(255), primary_key=True, nullable=False),
        description="Opaque identifier of the cart owner",
    )
    product_id: UUID = Field(
        sa_column=Column(PostgreSQL_UUID(as_uuid=True), primary_key=True, nullable=False),
        description="Product identifier, unique within a cart",
    )
    price_amount: Decimal = Field(
        sa_column=Column(Numeric(asdecimal=True), nullable=False),
        description="Price amount",
    )
    price_currency: str = Field(
        sa_column=Column(String(3), nullable=False),
        description="ISO 4217 currency code",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(
            DateTime,
            server_default=text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        description="Insert timestamp, assigned by the database",
    )

    __table_args__ = (
        Index("idx_cart_items_owner", "owner_id"),
    )


cart_items = CartItemRecord.__table__

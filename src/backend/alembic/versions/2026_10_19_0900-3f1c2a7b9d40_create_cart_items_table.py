"""create_cart_items_table

Revision ID: 3f1c2a7b9d40
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID as PostgreSQL_UUID


# revision identifiers, used by Alembic.
revision = "3f1c2a7b9d40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create cart_items table"""
    op.create_table(
        "cart_items",
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column(
            "product_id",
            PostgreSQL_UUID(as_uuid=True),
            nullable=False,
        ),
        sa.Column("price_amount", sa.Numeric(), nullable=False),
        sa.Column("price_currency", sa.String(length=3), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("owner_id", "product_id"),
    )

    # Owner-scoped scans
    op.create_index(
        "idx_cart_items_owner",
        "cart_items",
        ["owner_id"],
    )


def downgrade() -> None:
    """Drop cart_items table"""
    op.drop_index("idx_cart_items_owner", table_name="cart_items")
    op.drop_table("cart_items")

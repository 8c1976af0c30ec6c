"""
Repository layer for database operations.

This package contains all data access logic isolated from business logic.
Repositories accept either a pool (AsyncEngine) or an open transaction
(AsyncConnection / AsyncSession) and return domain objects.
"""

from repositories.cart_repository import CartRepository
from repositories.ports import CartRepositoryPort
from repositories.transaction import with_transaction

__all__ = ["CartRepository", "CartRepositoryPort", "with_transaction"]

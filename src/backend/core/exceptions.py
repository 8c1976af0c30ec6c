"""
Error types raised by the repository layer.

Every error the layer produces derives from RepositoryError so callers can
catch the whole family at once. Underlying driver errors stay reachable
through ``__cause__``.
"""

from typing import Optional
from uuid import UUID


class RepositoryError(Exception):
    """Base class for repository layer errors."""

    pass


class ValidationError(RepositoryError, ValueError):
    """Raised before any query is issued when an input is missing."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is empty")


class MappingError(RepositoryError):
    """Raised when a stored row cannot be turned into a domain object."""

    def __init__(self, code: str, product_id: Optional[UUID] = None):
        self.code = code
        self.product_id = product_id
        super().__init__(f"currency[{code}] is not valid (product_id={product_id})")


class StorageError(RepositoryError):
    """Raised when the query boundary fails; wraps the driver error."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        super().__init__(f"{operation}: {cause}")

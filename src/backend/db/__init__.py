"""
db/ - Database Layer
====================
Table metadata, the executor abstraction over "pool" versus "open
transaction", and the typed query bindings used by the repositories.
"""
from .executors import DBTX, PoolExecutor, TransactionExecutor, as_executor
from .models import CartItemRecord, TableModel, cart_items
from .queries import AddItemParams, DeleteItemParams, GetCartRow, Queries

__all__ = [
    "AddItemParams",
    "CartItemRecord",
    "DBTX",
    "DeleteItemParams",
    "GetCartRow",
    "PoolExecutor",
    "Queries",
    "TableModel",
    "TransactionExecutor",
    "as_executor",
    "cart_items",
]

"""
Executors: one query interface over a pool or an already-open transaction.

Query bindings talk to a DBTX and never to a concrete connection type, so the
same bindings run against an engine (each call checks out its own connection
and autocommits) or against a caller's connection/session (statements join
the caller's transaction and are never committed here).
"""

from abc import ABC, abstractmethod
from typing import Any, List, Union

from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession
from sqlalchemy.sql import Executable


class DBTX(ABC):
    """Capability set the query bindings need from a database handle."""

    @property
    @abstractmethod
    def in_transaction(self) -> bool:
        """True when statements already run inside a caller-owned transaction."""

    @abstractmethod
    async def fetch_all(self, statement: Executable) -> List[Row]:
        """Run a statement and return all of its rows."""

    @abstractmethod
    async def execute(self, statement: Executable) -> int:
        """Run a write statement and return the affected row count."""


class PoolExecutor(DBTX):
    """Runs each statement on its own pooled connection."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def in_transaction(self) -> bool:
        return False

    async def fetch_all(self, statement: Executable) -> List[Row]:
        async with self._engine.connect() as conn:
            result = await conn.execute(statement)
            return list(result.all())

    async def execute(self, statement: Executable) -> int:
        async with self._engine.begin() as conn:
            result = await conn.execute(statement)
            return result.rowcount

    def __repr__(self) -> str:
        return f"PoolExecutor({self._engine!r})"


class TransactionExecutor(DBTX):
    """Runs statements on a caller-owned connection or session.

    Begin, commit and rollback stay with whoever opened the transaction.
    """

    def __init__(self, connection: Union[AsyncConnection, AsyncSession]):
        self._connection = connection

    @property
    def connection(self) -> Union[AsyncConnection, AsyncSession]:
        return self._connection

    @property
    def in_transaction(self) -> bool:
        return True

    async def fetch_all(self, statement: Executable) -> List[Row]:
        result = await self._connection.execute(statement)
        return list(result.all())

    async def execute(self, statement: Executable) -> int:
        result = await self._connection.execute(statement)
        return result.rowcount

    def __repr__(self) -> str:
        return f"TransactionExecutor({self._connection!r})"


def as_executor(dbtx: Any) -> DBTX:
    """
    Wrap a database handle in the matching executor.

    Args:
        dbtx: AsyncEngine (pool), AsyncConnection or AsyncSession (existing
            transaction), or an executor instance

    Raises:
        ValueError: If dbtx is None
        TypeError: If dbtx is not a supported handle
    """
    if dbtx is None:
        raise ValueError("dbtx is nil")
    if isinstance(dbtx, DBTX):
        return dbtx
    if isinstance(dbtx, AsyncEngine):
        return PoolExecutor(dbtx)
    if isinstance(dbtx, (AsyncConnection, AsyncSession)):
        return TransactionExecutor(dbtx)
    raise TypeError(
        f"dbtx must be an AsyncEngine, AsyncConnection or AsyncSession, got {type(dbtx).__name__}"
    )

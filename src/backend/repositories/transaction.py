"""
Transaction helper for repository methods that issue several dependent writes.

Single-statement methods call the query bindings directly and do not go
through here.
"""

import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncTransaction

from db.executors import DBTX, PoolExecutor, TransactionExecutor
from db.queries import Queries

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_transaction(dbtx: DBTX, fn: Callable[[Queries], Awaitable[T]]) -> T:
    """
    Run ``fn`` atomically and return its result.

    When ``dbtx`` already runs inside a caller-owned transaction, ``fn`` is
    awaited against it directly with no begin or commit. Otherwise a new
    transaction is opened on a pooled connection and committed when ``fn``
    returns. Any exception, cancellation included, rolls the transaction back
    and is re-raised unchanged. A failing rollback is logged and attached to
    the original exception as a note.

    Args:
        dbtx: Executor the repository was built with
        fn: Unit of work receiving query bindings for the active transaction

    Returns:
        Whatever ``fn`` returns
    """
    if dbtx.in_transaction:
        return await fn(Queries(dbtx))

    if not isinstance(dbtx, PoolExecutor):
        raise TypeError(f"cannot open a transaction on {dbtx!r}")

    async with dbtx.engine.connect() as conn:
        tx = await conn.begin()
        try:
            result = await fn(Queries(dbtx).with_tx(TransactionExecutor(conn)))
            await tx.commit()
        except BaseException as exc:
            await _rollback(tx, exc)
            raise

    return result


async def _rollback(tx: AsyncTransaction, exc: BaseException) -> None:
    # Inactive after a failed commit; nothing left to roll back
    if not tx.is_active:
        return

    try:
        await tx.rollback()
    except Exception as rollback_exc:
        logger.error(f"Failed to rollback transaction: {rollback_exc}")
        exc.add_note(f"tx.rollback: {rollback_exc!r}")
    else:
        logger.debug(f"Transaction rolled back due to {type(exc).__name__}")

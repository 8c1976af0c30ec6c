"""
Database engine lifecycle.

The engine is the "pool" handed to repositories; connections and sessions
obtained from it are the "existing transaction" handles.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlmodel import SQLModel

from .config import DatabaseSettings, settings

# Register table metadata
import db.models  # noqa: F401

logger = logging.getLogger(__name__)


def create_engine(db_settings: Optional[DatabaseSettings] = None) -> AsyncEngine:
    """
    Create an async engine with pool settings from configuration.

    Creating the engine does not connect; the first checkout does.
    """
    if db_settings is None:
        db_settings = settings.database

    return create_async_engine(
        str(db_settings.url),
        echo=bool(db_settings.echo),
        pool_pre_ping=False,  # connections are validated on use
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
        pool_timeout=db_settings.pool_timeout,
        pool_recycle=db_settings.pool_recycle,
        poolclass=AsyncAdaptedQueuePool,
        connect_args={
            "server_settings": {
                "application_name": db_settings.application_name,
            },
            "command_timeout": db_settings.command_timeout,
        },
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables that do not exist yet.

    Safe to call repeatedly. Production schemas are managed by Alembic;
    this is for local setups and tests.
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema initialized")


async def close_db(engine: AsyncEngine) -> None:
    """Dispose of the engine's pooled connections."""
    await engine.dispose()
    logger.info("Database connection pool closed")

"""
Centralized error handling decorators for database operations.

Storage failures are classified, logged and re-raised as StorageError carrying
the name of the failing operation. Validation and mapping errors, task
cancellation and timeouts pass through untouched.
"""
import functools
import inspect
import logging
from typing import Callable, Optional

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    StatementError,
    TimeoutError as PoolTimeoutError,
)

from core.exceptions import StorageError


logger = logging.getLogger(__name__)


class DatabaseErrorHandler:
    """Centralized database error handling utilities."""

    # SQLAlchemy wraps DBAPI errors; asyncpg raises raw OSError subclasses
    # (refused, unresolvable host, missing unix socket) while connecting
    DATABASE_EXCEPTIONS = (
        SQLAlchemyError,
        OSError,
    )

    @staticmethod
    def handle_database_error(
        exc: BaseException,
        operation: str,
        context: Optional[dict] = None
    ) -> tuple[bool, str]:
        """
        Classify and log a database error.

        Args:
            exc: The exception that occurred
            operation: Name of the database operation
            context: Additional context information

        Returns:
            Tuple of (is_recoverable, error_message)
        """
        context_str = f" | Context: {context}" if context else ""

        if isinstance(exc, IntegrityError):
            error_msg = f"Database integrity error during {operation}: {exc}{context_str}"
            logger.warning(error_msg)
            return False, error_msg

        elif isinstance(exc, (OSError, DisconnectionError)):
            error_msg = f"Database connection error during {operation}: {exc}{context_str}"
            logger.error(error_msg)
            return True, error_msg

        elif isinstance(exc, PoolTimeoutError):
            error_msg = f"Database timeout during {operation}: {exc}{context_str}"
            logger.warning(error_msg)
            return True, error_msg

        elif isinstance(exc, OperationalError):
            error_msg = f"Database operational error during {operation}: {exc}{context_str}"
            logger.error(error_msg)
            return True, error_msg

        elif isinstance(exc, StatementError):
            error_msg = f"Database statement error during {operation}: {exc}{context_str}"
            logger.warning(error_msg)
            return False, error_msg

        else:
            error_msg = f"Unexpected database error during {operation}: {type(exc).__name__}: {exc}{context_str}"
            logger.error(error_msg, exc_info=exc)
            return False, error_msg


def handle_database_exceptions(operation_name: Optional[str] = None) -> Callable:
    """
    Decorator wrapping an async database operation with error translation.

    Args:
        operation_name: Name of the operation used in logs and in the
            StorageError message (defaults to the function name)

    Returns:
        Decorated coroutine function
    """
    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"handle_database_exceptions requires a coroutine function, got {func!r}")

        operation = operation_name or func.__name__

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
            except TimeoutError:
                raise
            except DatabaseErrorHandler.DATABASE_EXCEPTIONS as exc:
                DatabaseErrorHandler.handle_database_error(
                    exc, operation, {"function": func.__name__}
                )
                raise StorageError(operation, exc) from exc

            logger.debug(f"Successfully completed {operation}")
            return result

        return async_wrapper

    return decorator

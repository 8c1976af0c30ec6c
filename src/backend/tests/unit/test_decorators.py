"""
Unit tests for database error handling decorators.
"""

import asyncio
import logging
import socket

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError

from core.decorators import DatabaseErrorHandler, handle_database_exceptions
from core.exceptions import StorageError, ValidationError


class TestHandleDatabaseExceptions:
    """Tests for the storage error translation decorator."""

    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        @handle_database_exceptions("q.ok")
        async def ok():
            return "value"

        assert await ok() == "value"

    @pytest.mark.asyncio
    async def test_wraps_sqlalchemy_errors(self):
        cause = OperationalError("SELECT 1", {}, Exception("server closed"))

        @handle_database_exceptions("q.fail")
        async def fail():
            raise cause

        with pytest.raises(StorageError) as exc_info:
            await fail()

        assert exc_info.value.operation == "q.fail"
        assert exc_info.value.__cause__ is cause
        assert str(exc_info.value).startswith("q.fail: ")

    @pytest.mark.asyncio
    async def test_defaults_operation_to_function_name(self):
        @handle_database_exceptions()
        async def load_rows():
            raise ConnectionRefusedError("refused")

        with pytest.raises(StorageError, match="^load_rows: refused$"):
            await load_rows()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [ValidationError("owner_id"), KeyError("x"), asyncio.CancelledError(), TimeoutError()],
    )
    async def test_other_errors_pass_through(self, error):
        @handle_database_exceptions("q.other")
        async def fail():
            raise error

        with pytest.raises(type(error)):
            await fail()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            socket.gaierror(-2, "Name or service not known"),
            FileNotFoundError(2, "No such file or directory"),
        ],
    )
    async def test_wraps_os_level_connect_failures(self, error):
        @handle_database_exceptions("q.get_cart")
        async def connect():
            raise error

        with pytest.raises(StorageError, match="^q.get_cart: ") as exc_info:
            await connect()

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_builtin_timeout_is_not_wrapped(self):
        @handle_database_exceptions("q.get_cart")
        async def slow():
            raise TimeoutError("command timed out")

        with pytest.raises(TimeoutError) as exc_info:
            await slow()

        assert not isinstance(exc_info.value, StorageError)

    def test_rejects_sync_functions(self):
        with pytest.raises(TypeError):
            @handle_database_exceptions("q.sync")
            def sync():
                return None


class TestDatabaseErrorHandler:
    """Tests for error classification."""

    @pytest.mark.parametrize(
        "error,recoverable",
        [
            (IntegrityError("INSERT", {}, Exception("dup")), False),
            (OperationalError("SELECT", {}, Exception("down")), True),
            (PoolTimeoutError("pool exhausted"), True),
            (ConnectionResetError("reset"), True),
            (socket.gaierror(-2, "Name or service not known"), True),
        ],
    )
    def test_classification(self, error, recoverable):
        is_recoverable, message = DatabaseErrorHandler.handle_database_error(error, "q.test")

        assert is_recoverable is recoverable
        assert "q.test" in message

    def test_logs_context(self, caplog):
        with caplog.at_level(logging.WARNING, logger="core.decorators"):
            DatabaseErrorHandler.handle_database_error(
                IntegrityError("INSERT", {}, Exception("dup")), "q.add_item", {"function": "add_item"}
            )

        assert "Database integrity error during q.add_item" in caplog.text
        assert "add_item" in caplog.text

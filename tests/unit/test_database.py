"""Tests for the asyncpg connection wrappers."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from streamvault.config import DatabaseSettings
from streamvault.database import DatabaseManager, ExecuteResult, TransactionConnection, apply_schema, truncate_sql
from streamvault.database.schema import SCHEMA_STATEMENTS


class TestExecuteResult:

    @pytest.mark.parametrize(
        "status, affected",
        [("UPDATE 3", 3), ("INSERT 0 1", 1), ("DELETE 0", 0), ("CREATE TABLE", 0), (None, 0)],
    )
    def test_from_status(self, status, affected):
        assert ExecuteResult.from_status(status).affected_rows == affected


def test_truncate_sql():
    sql = "SELECT *\n    FROM songs\n    WHERE id = $1"

    assert truncate_sql(sql) == "SELECT * FROM songs WHERE id = $1"
    assert truncate_sql("x" * 150, length=10) == "xxxxxxxxxx..."


class TestTransactionConnection:

    @pytest.fixture
    def connection(self):
        connection = MagicMock()
        connection.fetch = AsyncMock(return_value=[{"id": 1}])
        connection.fetchrow = AsyncMock(return_value=None)
        connection.execute = AsyncMock(return_value="UPDATE 2")
        return connection

    @pytest.mark.asyncio
    async def test_statements_use_bound_connection(self, connection):
        tx = TransactionConnection(connection)

        rows = await tx.query("SELECT * FROM songs WHERE id = $1", [1])
        row = await tx.query_one("SELECT 1")
        result = await tx.execute("UPDATE songs SET x = 1")

        assert rows == [{"id": 1}]
        assert row is None
        assert result.affected_rows == 2
        connection.fetch.assert_called_once_with("SELECT * FROM songs WHERE id = $1", 1)

    @pytest.mark.asyncio
    async def test_nested_transaction_reuses_connection(self, connection):
        tx = TransactionConnection(connection)

        async def inner(conn):
            return conn

        assert await tx.transaction(inner) is tx
        connection.transaction.assert_called_once()


class TestDatabaseManager:

    @pytest.fixture
    def settings(self):
        return DatabaseSettings(_env_file=None, pool_min=1, pool_max=3)

    def test_pool_config_overrides(self, settings):
        manager = DatabaseManager(settings, max_size=7)

        assert manager.pool_config["min_size"] == 1
        assert manager.pool_config["max_size"] == 7

    @pytest.mark.asyncio
    async def test_create_pool_once(self, settings):
        pool = MagicMock()
        pool.close = AsyncMock()
        with patch("streamvault.database.connection.asyncpg.create_pool", new=AsyncMock(return_value=pool)) as create_pool:
            manager = DatabaseManager(settings)

            assert await manager.create_pool() is pool
            assert await manager.create_pool() is pool
            create_pool.assert_called_once()

            await manager.close_pool()
            assert manager.pool is None
            pool.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_health_check_reports_failure(self, settings):
        failing = AsyncMock(side_effect=OSError("connection refused"))
        with patch("streamvault.database.connection.asyncpg.create_pool", new=failing):
            manager = DatabaseManager(settings)

            assert await manager.health_check() is False


@pytest.mark.asyncio
async def test_apply_schema_runs_in_one_transaction(mock_db):
    await apply_schema(mock_db)

    mock_db.transaction.assert_called_once()
    statements = [call.args[0] for call in mock_db.execute.call_args_list]
    assert statements == SCHEMA_STATEMENTS
    assert any("idx_users_email_active" in s for s in statements)
    assert any("WHERE deleted_at IS NULL" in s for s in statements)

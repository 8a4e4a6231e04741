"""
Database connection management using asyncpg.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

import asyncpg
from asyncpg import Connection, Pool

from ..config.settings import DatabaseSettings
from .protocols import DatabaseConnection, ExecuteResult, Row

logger = logging.getLogger(__name__)

T = TypeVar("T")

SQL_LOG_LENGTH = 100


def truncate_sql(sql: str, length: int = SQL_LOG_LENGTH) -> str:
    """Collapse whitespace and cut SQL text down for log lines."""
    text = " ".join(sql.split())
    return text if len(text) <= length else text[:length] + "..."


def _log_query(sql: str, started: float, rows: Optional[int] = None) -> None:
    duration_ms = (time.perf_counter() - started) * 1000
    logger.debug(
        f"Executed query in {duration_ms:.1f}ms: {truncate_sql(sql)}",
        extra={"duration_ms": duration_ms, "rows": rows},
    )


async def _fetch(connection: Connection, sql: str, params: Sequence[Any]) -> List[Row]:
    started = time.perf_counter()
    records = await connection.fetch(sql, *params)
    _log_query(sql, started, len(records))
    return [dict(record) for record in records]


async def _fetchrow(connection: Connection, sql: str, params: Sequence[Any]) -> Optional[Row]:
    started = time.perf_counter()
    record = await connection.fetchrow(sql, *params)
    _log_query(sql, started, 0 if record is None else 1)
    return dict(record) if record is not None else None


async def _execute(connection: Connection, sql: str, params: Sequence[Any]) -> ExecuteResult:
    started = time.perf_counter()
    status = await connection.execute(sql, *params)
    result = ExecuteResult.from_status(status)
    _log_query(sql, started, result.affected_rows)
    return result


class TransactionConnection:
    """A single pooled connection bound to an open transaction.

    Nested ``transaction`` calls become savepoints on the same connection.
    """

    def __init__(self, connection: Connection):
        self._connection = connection

    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        return await _fetch(self._connection, sql, params)

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        return await _fetchrow(self._connection, sql, params)

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> ExecuteResult:
        return await _execute(self._connection, sql, params)

    async def transaction(self, fn: Callable[[DatabaseConnection], Awaitable[T]]) -> T:
        async with self._connection.transaction():
            return await fn(self)


class DatabaseManager:
    """Manages the asyncpg pool and runs statements against it."""

    def __init__(self, settings: Optional[DatabaseSettings] = None, **pool_config):
        """Initialize DatabaseManager.

        Args:
            settings: Database settings (read from ``DB_*`` variables when omitted)
            **pool_config: Overrides for ``asyncpg.create_pool`` arguments
        """
        self.settings = settings or DatabaseSettings()
        self.pool: Optional[Pool] = None
        self.pool_config = {**self.settings.pool_kwargs(), **pool_config}

    async def create_pool(self) -> Pool:
        """Create and return a connection pool."""
        if self.pool is None:
            logger.info(
                f"Creating database pool for {self.settings.dsn} "
                f"(min={self.pool_config['min_size']}, max={self.pool_config['max_size']})"
            )
            self.pool = await asyncpg.create_pool(**self.pool_config)
            logger.info("Database pool created successfully")
        return self.pool

    async def close_pool(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        if not self.pool:
            await self.create_pool()

        async with self.pool.acquire() as connection:
            yield connection

    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        async with self.acquire() as connection:
            return await _fetch(connection, sql, params)

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        async with self.acquire() as connection:
            return await _fetchrow(connection, sql, params)

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> ExecuteResult:
        async with self.acquire() as connection:
            return await _execute(connection, sql, params)

    async def transaction(self, fn: Callable[[DatabaseConnection], Awaitable[T]]) -> T:
        """Run ``fn`` inside ``BEGIN ... COMMIT`` on one pooled connection."""
        async with self.acquire() as connection:
            async with connection.transaction():
                logger.debug("Transaction started")
                result = await fn(TransactionConnection(connection))
            logger.debug("Transaction committed")
            return result

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

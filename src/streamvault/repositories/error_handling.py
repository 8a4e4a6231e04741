"""Error handling for repository database calls.

Driver failures are logged with the (truncated) SQL text and parameters and
then replaced by sanitized streamvault exceptions, so raw driver messages never
travel past the repository boundary.
"""

import logging
from typing import Any, NoReturn, Optional, Sequence

import asyncpg

from ..core.exceptions import (
    DatabaseOperationError,
    EntityAlreadyExistsError,
    StreamVaultError,
)
from ..database.connection import truncate_sql


logger = logging.getLogger(__name__)

MAX_LOGGED_PARAMS = 20


def _loggable_params(params: Optional[Sequence[Any]]) -> list:
    if not params:
        return []
    shown = [repr(p) for p in list(params)[:MAX_LOGGED_PARAMS]]
    if len(params) > MAX_LOGGED_PARAMS:
        shown.append(f"... ({len(params) - MAX_LOGGED_PARAMS} more)")
    return shown


def handle_database_error(
    operation: str,
    entity_type: str,
    error: Exception,
    sql: Optional[str] = None,
    params: Optional[Sequence[Any]] = None,
    context: Optional[dict] = None,
) -> NoReturn:
    """Log a failed database call and raise the sanitized exception for it.

    Args:
        operation: The repository operation (e.g. 'find_many', 'save')
        entity_type: Entity being accessed (e.g. 'song')
        error: Original exception
        sql: Statement that failed, if known
        params: Bound parameters of that statement
        context: Additional context for logging

    Raises:
        The original error when it is already a StreamVaultError,
        EntityAlreadyExistsError for unique violations, DatabaseOperationError otherwise
    """
    if isinstance(error, StreamVaultError):
        raise error

    context = context or {}
    logger.error(
        f"Database {operation} failed for {entity_type}: {type(error).__name__}",
        extra={
            "operation": operation,
            "entity_type": entity_type,
            "sql": truncate_sql(sql) if sql else None,
            "params": _loggable_params(params),
            "error_type": type(error).__name__,
            "error_message": str(error),
            "context": context,
        },
        exc_info=error,
    )

    if isinstance(error, asyncpg.UniqueViolationError):
        raise EntityAlreadyExistsError(
            entity_type, constraint=getattr(error, "constraint_name", None)
        ) from error

    raise DatabaseOperationError(operation) from error

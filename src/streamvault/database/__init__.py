"""Database access for streamvault."""

from .connection import DatabaseManager, TransactionConnection, truncate_sql
from .protocols import DatabaseConnection, ExecuteResult, Row
from .schema import apply_schema

__all__ = [
    "DatabaseConnection",
    "DatabaseManager",
    "ExecuteResult",
    "Row",
    "TransactionConnection",
    "apply_schema",
    "truncate_sql",
]

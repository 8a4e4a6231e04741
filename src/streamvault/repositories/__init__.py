"""Generic repository building blocks."""

from .base import NOT_DELETED, BaseRepository
from .error_handling import handle_database_error
from .executor import PaginatedQueryExecutor, join_sql
from .query_builder import (
    ArrayOverlap,
    QueryFragmentBuilder,
    QueryFragments,
    RangeFilter,
    SearchFilter,
    bind_value,
)

__all__ = [
    "NOT_DELETED",
    "BaseRepository",
    "PaginatedQueryExecutor",
    "QueryFragmentBuilder",
    "QueryFragments",
    "RangeFilter",
    "SearchFilter",
    "ArrayOverlap",
    "bind_value",
    "handle_database_error",
    "join_sql",
]

"""Offset pagination for streamvault repositories."""

from .entities import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PaginatedResult,
    PaginationOptions,
    SortDirection,
    SortSpec,
    parse_sort_direction,
)
from .validator import PaginationValidator

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PaginatedResult",
    "PaginationOptions",
    "PaginationValidator",
    "SortDirection",
    "SortSpec",
    "parse_sort_direction",
]

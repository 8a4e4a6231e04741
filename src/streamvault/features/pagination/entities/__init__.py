"""Pagination entities."""

from .requests import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE,
    MIN_PAGE_SIZE,
    PaginationOptions,
    SortDirection,
    SortSpec,
    pagination_errors,
    parse_sort_direction,
)
from .responses import PaginatedResult, total_pages_for

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MIN_PAGE",
    "MIN_PAGE_SIZE",
    "PaginationOptions",
    "SortDirection",
    "SortSpec",
    "pagination_errors",
    "parse_sort_direction",
    "PaginatedResult",
    "total_pages_for",
]

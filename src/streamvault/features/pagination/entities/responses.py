"""Pagination response entities."""

from dataclasses import dataclass
from typing import Generic, Iterable, Tuple, TypeVar

T = TypeVar('T')


def total_pages_for(total_count: int, page_size: int) -> int:
    """Ceiling division without floating point."""
    if total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of results plus the metadata needed to navigate the rest."""

    items: Tuple[T, ...]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def create(
        cls,
        items: Iterable[T],
        total_count: int,
        page: int,
        page_size: int,
    ) -> "PaginatedResult[T]":
        """Build a result, deriving page counts from ``total_count``."""
        total_pages = total_pages_for(total_count, page_size)
        return cls(
            items=tuple(items),
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )

    @property
    def count(self) -> int:
        """Get number of items in current page."""
        return len(self.items)

    @property
    def has_items(self) -> bool:
        """Check if response has any items."""
        return len(self.items) > 0

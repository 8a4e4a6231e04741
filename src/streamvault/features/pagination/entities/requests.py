"""Pagination and sort request entities."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from ....core.exceptions import ValidationError
from ....core.sql import ensure_safe_identifier


MIN_PAGE = 1
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20


class SortDirection(str, Enum):
    """Sort direction enumeration."""
    ASC = "asc"
    DESC = "desc"

    def to_sql(self) -> str:
        """Convert to SQL ORDER BY keyword."""
        return "ASC" if self == SortDirection.ASC else "DESC"


def parse_sort_direction(value: Any) -> SortDirection:
    """Parse ``asc``/``desc`` (case-insensitive); anything else is a ValidationError."""
    if isinstance(value, SortDirection):
        return value
    if isinstance(value, str):
        try:
            return SortDirection(value.strip().lower())
        except ValueError:
            pass
    raise ValidationError.for_field(
        "sort.direction", f"Sort direction must be 'asc' or 'desc', got: {value!r}"
    )


@dataclass(frozen=True)
class SortSpec:
    """Single-column sort specification.

    ``direction`` defaults to ascending when omitted. Passing a value that is
    not ``asc``/``desc`` raises instead of being coerced.
    """

    field: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        """Validate field name and normalize direction."""
        ensure_safe_identifier(self.field, "sort.field")
        object.__setattr__(self, "direction", parse_sort_direction(self.direction))

    def to_sql(self) -> str:
        """Render ``ORDER BY col DIRECTION``."""
        return f"ORDER BY {self.field} {self.direction.to_sql()}"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def pagination_errors(page: Any, page_size: Any) -> List[Dict[str, str]]:
    """Return every violation for a page/page_size pair."""
    errors: List[Dict[str, str]] = []
    if not _is_int(page):
        errors.append({"field": "page", "message": "Page must be an integer"})
    elif page < MIN_PAGE:
        errors.append({"field": "page", "message": f"Page must be >= {MIN_PAGE}"})

    if not _is_int(page_size):
        errors.append({"field": "page_size", "message": "Page size must be an integer"})
    elif page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE:
        errors.append({
            "field": "page_size",
            "message": f"Page size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}",
        })
    return errors


@dataclass(frozen=True)
class PaginationOptions:
    """Offset pagination request (page/page_size).

    Values are checked, never clamped.
    """

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        """Validate pagination parameters."""
        errors = pagination_errors(self.page, self.page_size)
        if errors:
            raise ValidationError("Invalid pagination options", errors=errors)

    @property
    def offset(self) -> int:
        """Calculate offset from page and page_size."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size

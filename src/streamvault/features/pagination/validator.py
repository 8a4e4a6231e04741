"""Pagination option validation for untrusted input."""

import re
from typing import AbstractSet, Any, Mapping, Optional, Union

from ...core.exceptions import ValidationError, ValidationErrorCollector
from ...core.sql import is_safe_identifier
from .entities import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    PaginationOptions,
    PaginatedResult,
    SortDirection,
    SortSpec,
    pagination_errors,
    parse_sort_direction,
)


RawPagination = Union[None, PaginationOptions, Mapping[str, Any]]
RawSort = Union[None, SortSpec, Mapping[str, Any]]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """Convert ``createdAt`` style names to ``created_at``."""
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


class PaginationValidator:
    """Builds ``PaginationOptions`` from caller input.

    Accepts ``None`` (defaults), an existing ``PaginationOptions``, or a
    mapping with ``page`` and ``page_size`` (``pageSize`` is accepted too).
    Missing keys take their defaults; present keys must be integers in range.
    """

    @staticmethod
    def validate(raw: RawPagination = None) -> PaginationOptions:
        if raw is None:
            return PaginationOptions()
        if isinstance(raw, PaginationOptions):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError.for_field("pagination", "Pagination must be a mapping")

        page = raw.get("page", DEFAULT_PAGE)
        page_size = raw.get("page_size", raw.get("pageSize", DEFAULT_PAGE_SIZE))

        errors = pagination_errors(page, page_size)
        if errors:
            raise ValidationError("Invalid pagination options", errors=errors)
        return PaginationOptions(page=page, page_size=page_size)

    @staticmethod
    def validate_sort(
        raw: RawSort, allowed_fields: Optional[AbstractSet[str]] = None
    ) -> Optional[SortSpec]:
        """Build a ``SortSpec`` from caller input.

        camelCase field names are converted to snake_case. When
        ``allowed_fields`` is given the field must be one of them. A missing
        direction means ascending; an unknown direction is an error.
        """
        if raw is None:
            return None
        if isinstance(raw, SortSpec):
            field, direction = raw.field, raw.direction
        elif isinstance(raw, Mapping):
            field = raw.get("field")
            direction = raw.get("direction")
            if direction is None:
                direction = SortDirection.ASC
        else:
            raise ValidationError.for_field("sort", "Sort must be a mapping with 'field'")

        collector = ValidationErrorCollector()
        if isinstance(field, str):
            field = to_snake_case(field)
        if not is_safe_identifier(field):
            collector.add("sort.field", f"Invalid identifier: {field!r}")
        elif allowed_fields is not None and field not in allowed_fields:
            collector.add("sort.field", f"Cannot sort by '{field}'")
        try:
            direction = parse_sort_direction(direction)
        except ValidationError as e:
            collector.extend(e)
        collector.raise_if_errors("Invalid sort options")
        return SortSpec(field=field, direction=direction)

    @staticmethod
    def create_result(
        items, total_count: int, options: Optional[PaginationOptions] = None
    ) -> PaginatedResult:
        """Wrap items in a result for the given (or default) options."""
        options = options or PaginationOptions()
        return PaginatedResult.create(items, total_count, options.page, options.page_size)

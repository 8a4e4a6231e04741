"""Query fragment builder.

Turns a validated filter mapping, an optional sort and optional pagination
into ``WHERE`` / ``ORDER BY`` / ``LIMIT ... OFFSET`` fragments with
sequential ``$n`` placeholders and the matching parameter list.

Filter values render as follows:

- ``None``: no constraint, skipped
- list / tuple / set: ``col IN ($n, $n+1, ...)``; an empty collection is ``FALSE``
- ``RangeFilter`` or a ``{"from", "to"}`` mapping: ``col >= $n`` and/or ``col <= $m``
- ``SearchFilter``: ``(c1 ILIKE $n OR c2 ILIKE $n+1 ...)``
- ``ArrayOverlap``: ``col && $n`` with the whole array bound once
- anything else: ``col = $n``
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.exceptions import ValidationError, ValidationErrorCollector
from ..core.sql import escape_like, is_safe_identifier
from ..core.value_objects import EntityId
from ..features.pagination.entities import PaginationOptions, SortSpec


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive bounds; either side may be open."""

    gte: Any = None
    lte: Any = None

    @classmethod
    def of(cls, gte: Any = None, lte: Any = None) -> Optional["RangeFilter"]:
        """Build a range, or None when both bounds are open."""
        if gte is None and lte is None:
            return None
        return cls(gte=gte, lte=lte)


@dataclass(frozen=True)
class SearchFilter:
    """Case-insensitive substring match over one or more columns."""

    columns: Tuple[str, ...]
    term: str

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))


@dataclass(frozen=True)
class ArrayOverlap:
    """Match rows whose array column shares at least one element with ``values``."""

    values: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class QueryFragments:
    """Rendered SQL fragments and their bound parameters.

    ``params`` holds the WHERE parameters followed by the LIMIT/OFFSET pair;
    ``where_params`` is the WHERE-only prefix used by count queries.
    """

    where_clause: str
    order_by_clause: str
    limit_clause: str
    params: Tuple[Any, ...]
    where_param_count: int
    next_index: int

    @property
    def where_params(self) -> Tuple[Any, ...]:
        return self.params[:self.where_param_count]


def bind_value(value: Any) -> Any:
    """Convert domain values to what the driver expects."""
    if isinstance(value, EntityId):
        return value.value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [bind_value(v) for v in value]
    return value


def _as_range(value: Mapping[str, Any]) -> RangeFilter:
    unknown = set(value) - {"from", "to"}
    if unknown:
        raise ValidationError.for_field(
            "filters", f"Range filters accept only 'from' and 'to', got: {sorted(unknown)}"
        )
    return RangeFilter(gte=value.get("from"), lte=value.get("to"))


class QueryFragmentBuilder:
    """Builds parameterized WHERE / ORDER BY / LIMIT fragments.

    Every column name that reaches SQL text is re-checked against the safe
    identifier pattern here, independent of any earlier validation.
    """

    def __init__(self, start_index: int = 1):
        self.start_index = start_index

    def build(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        pagination: Optional[PaginationOptions] = None,
        conditions: Sequence[str] = (),
        start_index: Optional[int] = None,
    ) -> QueryFragments:
        index = self.start_index if start_index is None else start_index
        where_clause, params, index = self.build_where(filters, conditions, index)
        where_param_count = len(params)

        order_by_clause = self.build_order_by(sort)

        limit_clause = ""
        if pagination is not None:
            limit_clause = f"LIMIT ${index} OFFSET ${index + 1}"
            params.extend([pagination.limit, pagination.offset])
            index += 2

        return QueryFragments(
            where_clause=where_clause,
            order_by_clause=order_by_clause,
            limit_clause=limit_clause,
            params=tuple(params),
            where_param_count=where_param_count,
            next_index=index,
        )

    def build_where(
        self,
        filters: Optional[Mapping[str, Any]],
        conditions: Iterable[str] = (),
        start_index: int = 1,
    ) -> Tuple[str, List[Any], int]:
        """Render the WHERE clause; returns ``(clause, params, next_index)``."""
        filters = filters or {}
        self._check_identifiers(filters)

        conjuncts: List[str] = []
        params: List[Any] = []
        index = start_index

        for column, value in filters.items():
            if value is None:
                continue
            if isinstance(value, Mapping):
                value = _as_range(value)

            if isinstance(value, RangeFilter):
                if value.gte is not None:
                    conjuncts.append(f"{column} >= ${index}")
                    params.append(bind_value(value.gte))
                    index += 1
                if value.lte is not None:
                    conjuncts.append(f"{column} <= ${index}")
                    params.append(bind_value(value.lte))
                    index += 1
            elif isinstance(value, SearchFilter):
                pattern = f"%{escape_like(value.term)}%"
                parts = []
                for search_column in value.columns:
                    parts.append(f"{search_column} ILIKE ${index}")
                    params.append(pattern)
                    index += 1
                conjuncts.append("(" + " OR ".join(parts) + ")")
            elif isinstance(value, ArrayOverlap):
                conjuncts.append(f"{column} && ${index}")
                params.append(bind_value(list(value.values)))
                index += 1
            elif isinstance(value, (list, tuple, set, frozenset)):
                items = list(value)
                if not items:
                    conjuncts.append("FALSE")
                    continue
                placeholders = []
                for item in items:
                    placeholders.append(f"${index}")
                    params.append(bind_value(item))
                    index += 1
                conjuncts.append(f"{column} IN ({', '.join(placeholders)})")
            else:
                conjuncts.append(f"{column} = ${index}")
                params.append(bind_value(value))
                index += 1

        conjuncts.extend(conditions)
        where_clause = f"WHERE {' AND '.join(conjuncts)}" if conjuncts else ""
        return where_clause, params, index

    @staticmethod
    def build_order_by(sort: Optional[SortSpec]) -> str:
        if sort is None:
            return ""
        if not is_safe_identifier(sort.field):
            raise ValidationError.for_field("sort.field", f"Invalid identifier: {sort.field!r}")
        return sort.to_sql()

    @staticmethod
    def _check_identifiers(filters: Mapping[str, Any]) -> None:
        collector = ValidationErrorCollector()
        for column, value in filters.items():
            if not is_safe_identifier(column):
                collector.add(str(column), f"Invalid identifier: {column!r}")
            if isinstance(value, SearchFilter):
                if not value.columns:
                    collector.add(str(column), "Search filter needs at least one column")
                for search_column in value.columns:
                    if not is_safe_identifier(search_column):
                        collector.add(str(column), f"Invalid identifier: {search_column!r}")
        collector.raise_if_errors("Invalid filter identifiers")

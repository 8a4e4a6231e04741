"""Paginated query executor.

Runs a count query and a data query built from the same WHERE fragment and
maps every returned row through a caller-supplied mapper.

The two statements are separate round-trips and are not wrapped in a
snapshot. Under concurrent writes ``total_count`` can disagree with
``items`` by the rows committed between the two statements.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from ..core.exceptions import RowMappingError, StreamVaultError
from ..database.protocols import DatabaseConnection, Row
from ..features.pagination import PaginatedResult, PaginationValidator, SortSpec
from ..features.pagination.validator import RawPagination
from .error_handling import handle_database_error
from .query_builder import QueryFragmentBuilder

T = TypeVar("T")

logger = logging.getLogger(__name__)


def join_sql(*parts: str) -> str:
    """Join non-empty SQL fragments with single spaces."""
    return " ".join(part.strip() for part in parts if part and part.strip())


class PaginatedQueryExecutor:
    """Executes count + page queries and assembles a ``PaginatedResult``."""

    def __init__(
        self,
        db: DatabaseConnection,
        builder: Optional[QueryFragmentBuilder] = None,
        entity_type: str = "entity",
    ):
        self._db = db
        self._builder = builder or QueryFragmentBuilder()
        self._entity_type = entity_type

    async def execute(
        self,
        base_select: str,
        count_select: str,
        filters: Optional[Mapping[str, Any]],
        pagination: RawPagination,
        sort: Optional[SortSpec],
        row_mapper: Callable[[Row], T],
        conditions: Sequence[str] = (),
    ) -> PaginatedResult[T]:
        options = PaginationValidator.validate(pagination)
        fragments = self._builder.build(filters, sort, options, conditions)

        count_sql = join_sql(count_select, fragments.where_clause)
        data_sql = join_sql(
            base_select,
            fragments.where_clause,
            fragments.order_by_clause,
            fragments.limit_clause,
        )

        try:
            count_row = await self._db.query_one(count_sql, fragments.where_params)
        except Exception as e:
            handle_database_error(
                "count", self._entity_type, e, count_sql, fragments.where_params
            )
        total_count = int(_first_value(count_row))

        try:
            rows = await self._db.query(data_sql, fragments.params)
        except Exception as e:
            handle_database_error(
                "find_many", self._entity_type, e, data_sql, fragments.params
            )

        items = [self._map(row, row_mapper) for row in rows]

        logger.debug(
            f"Fetched {self._entity_type} page {options.page} "
            f"({len(items)} of {total_count} rows)"
        )
        return PaginatedResult.create(items, total_count, options.page, options.page_size)

    def _map(self, row: Row, row_mapper: Callable[[Row], T]) -> T:
        try:
            return row_mapper(row)
        except StreamVaultError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                f"Failed to map {self._entity_type} row: {e}",
                extra={"entity_type": self._entity_type, "reason": str(e)},
            )
            raise RowMappingError(self._entity_type, reason=str(e)) from e


def _first_value(row: Optional[Row]) -> Any:
    if not row:
        return 0
    if "count" in row:
        return row["count"] or 0
    return next(iter(row.values()), 0) or 0

"""
Base repository for soft-deletable PostgreSQL tables.

Subclasses declare their table and column sets and implement
the row/entity mapping; everything else (finders, pagination, save, soft
delete and restore, counters, bulk operations) is shared here.
"""

import logging
from abc import ABC, abstractmethod
from typing import (
    Any,
    Awaitable,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)
from uuid import UUID

from ..config.constants import Limits
from ..core.exceptions import (
    ConflictError,
    RowMappingError,
    TransactionError,
    ValidationError,
)
from ..core.sql import ensure_safe_identifier
from ..core.value_objects import EntityId, is_valid_uuid
from ..database.protocols import DatabaseConnection, ExecuteResult, Row
from ..features.pagination import PaginatedResult, PaginationValidator, SortSpec
from ..features.pagination.validator import RawPagination, RawSort
from .error_handling import handle_database_error
from .executor import PaginatedQueryExecutor, join_sql
from .query_builder import QueryFragmentBuilder, bind_value

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)

NOT_DELETED = "deleted_at IS NULL"


class BaseRepository(ABC, Generic[T]):
    """
    Shared persistence behaviour for one entity table.

    Subclasses set:
    - ``table_name`` and ``entity_type``
    - ``required_columns``: columns a row must carry to be mapped
    - ``sortable_columns``: columns callers may sort by
    - ``counter_columns``: columns adjusted through ``_adjust_counter``
    """

    table_name: ClassVar[str]
    entity_type: ClassVar[str]
    required_columns: ClassVar[FrozenSet[str]] = frozenset()
    sortable_columns: ClassVar[FrozenSet[str]] = frozenset({"created_at", "updated_at"})
    counter_columns: ClassVar[FrozenSet[str]] = frozenset()
    immutable_columns: ClassVar[FrozenSet[str]] = frozenset({"id", "created_at", "deleted_at"})

    def __init__(self, db: DatabaseConnection):
        """
        Initialize repository.

        Args:
            db: Pool-backed manager or a transaction-bound connection
        """
        self._db = db
        self._builder = QueryFragmentBuilder()
        self._executor = PaginatedQueryExecutor(db, self._builder, self.entity_type)

    def with_connection(self, db: DatabaseConnection):
        """Return a copy of this repository that runs on ``db``."""
        return type(self)(db)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @abstractmethod
    def _row_to_entity(self, row: Row) -> T:
        """Convert a database row to an entity."""

    @abstractmethod
    def _entity_to_row(self, entity: T) -> Dict[str, Any]:
        """Convert an entity to column values."""

    @abstractmethod
    def _filters_to_db(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Validate caller filters and convert them to column filters."""

    def map_row(self, row: Row) -> T:
        """Map a row, failing with RowMappingError if any required column is missing."""
        missing = sorted(self.required_columns - set(row.keys()))
        if missing:
            raise RowMappingError(self.entity_type, missing_columns=missing)
        try:
            return self._row_to_entity(row)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                f"Failed to map {self.entity_type} row: {e}",
                extra={"entity_type": self.entity_type, "reason": str(e)},
            )
            raise RowMappingError(self.entity_type, reason=str(e)) from e

    # ------------------------------------------------------------------
    # Guarded database calls
    # ------------------------------------------------------------------

    async def _query(
        self, operation: str, sql: str, params: Sequence[Any] = (), context: Optional[dict] = None
    ) -> List[Row]:
        try:
            return await self._db.query(sql, params)
        except Exception as e:
            handle_database_error(operation, self.entity_type, e, sql, params, context)

    async def _query_one(
        self, operation: str, sql: str, params: Sequence[Any] = (), context: Optional[dict] = None
    ) -> Optional[Row]:
        try:
            return await self._db.query_one(sql, params)
        except Exception as e:
            handle_database_error(operation, self.entity_type, e, sql, params, context)

    async def _execute(
        self, operation: str, sql: str, params: Sequence[Any] = (), context: Optional[dict] = None
    ) -> ExecuteResult:
        try:
            return await self._db.execute(sql, params)
        except Exception as e:
            handle_database_error(operation, self.entity_type, e, sql, params, context)

    async def _transaction(self, operation: str, fn: Callable[[DatabaseConnection], Awaitable[R]]) -> R:
        """Run ``fn`` in one transaction; any failure rolls back the whole batch."""
        try:
            return await self._db.transaction(fn)
        except (ValidationError, ConflictError):
            raise
        except Exception as e:
            logger.error(
                f"Transaction {operation} rolled back for {self.entity_type}",
                extra={"operation": operation, "entity_type": self.entity_type},
                exc_info=e,
            )
            raise TransactionError(operation, e) from e

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _id_value(entity_id: Any) -> Optional[UUID]:
        """Return the UUID for ``entity_id`` or None if it is malformed."""
        if not is_valid_uuid(entity_id):
            return None
        if isinstance(entity_id, EntityId):
            return entity_id.value
        if isinstance(entity_id, UUID):
            return entity_id
        return UUID(entity_id)

    @staticmethod
    def _check_limit(limit: Any) -> int:
        """Validate the row cap of a non-paginated finder."""
        if limit is None:
            return Limits.DEFAULT_LIST_LIMIT
        if isinstance(limit, bool) or not isinstance(limit, int) or not (
            1 <= limit <= Limits.MAX_LIST_LIMIT
        ):
            raise ValidationError.for_field(
                "limit", f"Limit must be an integer between 1 and {Limits.MAX_LIST_LIMIT}"
            )
        return limit

    @staticmethod
    def _empty_page(pagination: RawPagination) -> PaginatedResult[T]:
        """Result for lookups short-circuited by a malformed ID."""
        return PaginationValidator.create_result([], 0, PaginationValidator.validate(pagination))

    def _resolve_sort(self, sort: RawSort, default: Optional[SortSpec] = None) -> Optional[SortSpec]:
        resolved = PaginationValidator.validate_sort(sort, self.sortable_columns)
        return resolved or default

    async def _find_list(
        self,
        operation: str,
        filters: Optional[Mapping[str, Any]] = None,
        conditions: Sequence[str] = (),
        order_by: str = "",
        limit: Optional[int] = None,
    ) -> List[T]:
        """Run a non-paginated finder.

        ``conditions`` and ``order_by`` are trusted SQL literals owned by the
        subclass; caller values must go through ``filters``.
        """
        where_clause, params, index = self._builder.build_where(
            filters, (*conditions, NOT_DELETED)
        )
        limit_clause = ""
        if limit is not None:
            limit_clause = f"LIMIT ${index}"
            params.append(limit)
        sql = join_sql(f"SELECT * FROM {self.table_name}", where_clause, order_by, limit_clause)
        rows = await self._query(operation, sql, params)
        return [self.map_row(row) for row in rows]

    async def _exists(
        self,
        operation: str,
        filters: Mapping[str, Any],
        exclude_id: Any = None,
    ) -> bool:
        """``SELECT 1 ... LIMIT 1`` over live rows matching ``filters``."""
        where_clause, params, index = self._builder.build_where(filters, (NOT_DELETED,))
        if exclude_id is not None:
            exclude_value = self._id_value(exclude_id)
            if exclude_value is not None:
                where_clause += f" AND id != ${index}"
                params.append(exclude_value)
        sql = join_sql(f"SELECT 1 FROM {self.table_name}", where_clause, "LIMIT 1")
        return await self._query_one(operation, sql, params) is not None

    async def _count_where(
        self, operation: str, filters: Optional[Mapping[str, Any]] = None, conditions: Sequence[str] = ()
    ) -> int:
        where_clause, params, _ = self._builder.build_where(filters, (*conditions, NOT_DELETED))
        sql = join_sql(f"SELECT COUNT(*) AS count FROM {self.table_name}", where_clause)
        row = await self._query_one(operation, sql, params)
        return int(row["count"]) if row else 0

    async def _adjust_counter(self, entity_id: Any, column: str, amount: int = 1) -> bool:
        """Atomically add ``amount`` to a counter column; never goes below zero."""
        if column not in self.counter_columns:
            raise ValidationError.for_field("column", f"'{column}' is not a counter column")
        id_value = self._id_value(entity_id)
        if id_value is None:
            return False
        if amount >= 0:
            expression = f"{column} + $2"
        else:
            expression = f"GREATEST({column} - $2, 0)"
        sql = (
            f"UPDATE {self.table_name} SET {column} = {expression}, updated_at = CURRENT_TIMESTAMP "
            f"WHERE id = $1 AND {NOT_DELETED}"
        )
        result = await self._execute(f"adjust_{column}", sql, [id_value, abs(amount)])
        return result.affected_rows > 0

    async def _set_column(self, entity_id: Any, column: str, value: Any) -> bool:
        ensure_safe_identifier(column)
        id_value = self._id_value(entity_id)
        if id_value is None:
            return False
        sql = (
            f"UPDATE {self.table_name} SET {column} = $2, updated_at = CURRENT_TIMESTAMP "
            f"WHERE id = $1 AND {NOT_DELETED}"
        )
        result = await self._execute(f"set_{column}", sql, [id_value, bind_value(value)])
        return result.affected_rows > 0

    # ------------------------------------------------------------------
    # Finders
    # ------------------------------------------------------------------

    async def find_by_id(self, entity_id: Any) -> Optional[T]:
        """Find a live entity by ID; malformed IDs return None without querying."""
        id_value = self._id_value(entity_id)
        if id_value is None:
            return None
        sql = f"SELECT * FROM {self.table_name} WHERE id = $1 AND {NOT_DELETED}"
        row = await self._query_one("find_by_id", sql, [id_value])
        return self.map_row(row) if row else None

    async def find_many(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        pagination: RawPagination = None,
        sort: RawSort = None,
    ) -> PaginatedResult[T]:
        """Find a page of live entities matching ``filters``."""
        return await self._paginate(self._filters_to_db(filters), pagination, self._resolve_sort(sort))

    async def _paginate(
        self,
        db_filters: Mapping[str, Any],
        pagination: RawPagination,
        sort: Optional[SortSpec],
        conditions: Sequence[str] = (),
    ) -> PaginatedResult[T]:
        return await self._executor.execute(
            f"SELECT * FROM {self.table_name}",
            f"SELECT COUNT(*) AS count FROM {self.table_name}",
            db_filters,
            pagination,
            sort,
            self.map_row,
            conditions=(*conditions, NOT_DELETED),
        )

    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        """Count live entities matching ``filters``."""
        return await self._count_where("count", self._filters_to_db(filters))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def save(self, entity: T) -> T:
        """Insert ``entity`` or update it if a live row with its ID exists.

        The presence check and the write are separate statements; a unique
        violation from a concurrent writer surfaces as EntityAlreadyExistsError.
        """
        existing = await self.find_by_id(entity.id)
        if existing is not None:
            return await self._update(entity)
        return await self._insert(entity)

    async def _insert(self, entity: T) -> T:
        row = self._entity_to_row(entity)
        columns = [ensure_safe_identifier(c) for c in row]
        placeholders = [f"${i}" for i in range(1, len(columns) + 1)]
        sql = (
            f"INSERT INTO {self.table_name} ({', '.join(columns)}) "
            f"VALUES ({', '.join(placeholders)}) RETURNING *"
        )
        params = [bind_value(v) for v in row.values()]
        result = await self._query_one("insert", sql, params, {"id": str(entity.id)})
        return self.map_row(result) if result else entity

    async def _update(self, entity: T) -> T:
        row = self._entity_to_row(entity)
        id_value = bind_value(entity.id)
        assignments = []
        params: List[Any] = [id_value]
        for column, value in row.items():
            if column in self.immutable_columns or column == "updated_at":
                continue
            params.append(bind_value(value))
            assignments.append(f"{ensure_safe_identifier(column)} = ${len(params)}")
        assignments.append("updated_at = CURRENT_TIMESTAMP")
        sql = (
            f"UPDATE {self.table_name} SET {', '.join(assignments)} "
            f"WHERE id = $1 AND {NOT_DELETED} RETURNING *"
        )
        result = await self._query_one("update", sql, params, {"id": str(entity.id)})
        return self.map_row(result) if result else entity

    async def soft_delete(self, entity_id: Any) -> bool:
        """Mark a live row deleted; returns False if it was missing or already deleted."""
        id_value = self._id_value(entity_id)
        if id_value is None:
            return False
        sql = (
            f"UPDATE {self.table_name} SET deleted_at = CURRENT_TIMESTAMP, "
            f"updated_at = CURRENT_TIMESTAMP WHERE id = $1 AND {NOT_DELETED}"
        )
        result = await self._execute("soft_delete", sql, [id_value])
        return result.affected_rows > 0

    async def restore(self, entity_id: Any) -> bool:
        """Clear ``deleted_at``; returns False if the row was not deleted."""
        id_value = self._id_value(entity_id)
        if id_value is None:
            return False
        sql = (
            f"UPDATE {self.table_name} SET deleted_at = NULL, updated_at = CURRENT_TIMESTAMP "
            f"WHERE id = $1 AND deleted_at IS NOT NULL"
        )
        result = await self._execute("restore", sql, [id_value])
        return result.affected_rows > 0

    async def hard_delete(self, entity_id: Any) -> bool:
        """Physically remove a row, deleted or not."""
        id_value = self._id_value(entity_id)
        if id_value is None:
            return False
        sql = f"DELETE FROM {self.table_name} WHERE id = $1"
        result = await self._execute("hard_delete", sql, [id_value])
        return result.affected_rows > 0

    async def bulk_save(self, entities: Iterable[T]) -> List[T]:
        """Save every entity in one transaction."""
        entities = list(entities)
        if not entities:
            return []

        async def _save_all(conn: DatabaseConnection) -> List[T]:
            repository = self.with_connection(conn)
            return [await repository.save(entity) for entity in entities]

        return await self._transaction("bulk_save", _save_all)

    async def bulk_soft_delete(self, entity_ids: Iterable[Any]) -> int:
        """Soft delete many rows in one transaction; malformed IDs are skipped."""
        id_values = []
        for entity_id in entity_ids:
            id_value = self._id_value(entity_id)
            if id_value is not None and id_value not in id_values:
                id_values.append(id_value)
        if not id_values:
            return 0

        where_clause, params, _ = self._builder.build_where({"id": id_values}, (NOT_DELETED,))
        sql = join_sql(
            f"UPDATE {self.table_name} SET deleted_at = CURRENT_TIMESTAMP, "
            f"updated_at = CURRENT_TIMESTAMP",
            where_clause,
        )

        async def _delete_all(conn: DatabaseConnection) -> int:
            result = await self.with_connection(conn)._execute("bulk_soft_delete", sql, params)
            return result.affected_rows

        return await self._transaction("bulk_soft_delete", _delete_all)

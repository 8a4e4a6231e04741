"""Tests for the paginated query executor."""

import pytest

from streamvault.core.exceptions import DatabaseOperationError, RowMappingError, ValidationError
from streamvault.features.pagination import SortDirection, SortSpec
from streamvault.repositories import PaginatedQueryExecutor, join_sql


def mapper(row):
    return row["name"]


class TestPaginatedQueryExecutor:
    """Count + data query execution."""

    @pytest.fixture
    def executor(self, mock_db):
        return PaginatedQueryExecutor(mock_db, entity_type="song")

    @pytest.mark.asyncio
    async def test_runs_count_then_page(self, executor, mock_db):
        mock_db.query_one.return_value = {"count": 45}
        mock_db.query.return_value = [{"name": "a"}, {"name": "b"}]

        result = await executor.execute(
            "SELECT * FROM songs",
            "SELECT COUNT(*) AS count FROM songs",
            {"genre": "rock", "is_public": True},
            {"page": 3, "page_size": 20},
            SortSpec("title", SortDirection.DESC),
            mapper,
            conditions=("deleted_at IS NULL",),
        )

        count_sql, count_params = mock_db.query_one.call_args[0]
        assert count_sql == (
            "SELECT COUNT(*) AS count FROM songs "
            "WHERE genre = $1 AND is_public = $2 AND deleted_at IS NULL"
        )
        assert count_params == ("rock", True)

        data_sql, data_params = mock_db.query.call_args[0]
        assert data_sql == (
            "SELECT * FROM songs WHERE genre = $1 AND is_public = $2 AND deleted_at IS NULL "
            "ORDER BY title DESC LIMIT $3 OFFSET $4"
        )
        assert data_params == ("rock", True, 20, 40)

        assert result.items == ("a", "b")
        assert result.total_count == 45
        assert result.total_pages == 3
        assert result.has_next_page is False
        assert result.has_previous_page is True

    @pytest.mark.asyncio
    async def test_empty_page(self, executor, mock_db):
        mock_db.query_one.return_value = {"count": 0}
        mock_db.query.return_value = []

        result = await executor.execute(
            "SELECT * FROM songs", "SELECT COUNT(*) AS count FROM songs",
            None, None, None, mapper,
        )

        assert result.items == ()
        assert result.total_pages == 0
        assert result.page == 1

    @pytest.mark.asyncio
    async def test_invalid_pagination_never_queries(self, executor, mock_db):
        with pytest.raises(ValidationError):
            await executor.execute(
                "SELECT * FROM songs", "SELECT COUNT(*) AS count FROM songs",
                None, {"page": 0}, None, mapper,
            )

        mock_db.query_one.assert_not_called()
        mock_db.query.assert_not_called()

    @pytest.mark.asyncio
    async def test_mapper_failure_becomes_row_mapping_error(self, executor, mock_db):
        mock_db.query_one.return_value = {"count": 1}
        mock_db.query.return_value = [{"title": "no name column"}]

        with pytest.raises(RowMappingError) as exc_info:
            await executor.execute(
                "SELECT * FROM songs", "SELECT COUNT(*) AS count FROM songs",
                None, None, None, mapper,
            )

        assert exc_info.value.entity_type == "song"
        assert exc_info.value.message == "Cannot map row to song"
        assert exc_info.value.reason == "'name'"

    @pytest.mark.asyncio
    async def test_driver_error_is_sanitized(self, executor, mock_db):
        mock_db.query_one.side_effect = RuntimeError("password authentication failed for user x")

        with pytest.raises(DatabaseOperationError) as exc_info:
            await executor.execute(
                "SELECT * FROM songs", "SELECT COUNT(*) AS count FROM songs",
                None, None, None, mapper,
            )

        assert "password" not in exc_info.value.message
        assert exc_info.value.operation == "count"
        mock_db.query.assert_not_called()


def test_join_sql_skips_empty_parts():
    assert join_sql("SELECT * FROM t", "", "  ", "LIMIT 1") == "SELECT * FROM t LIMIT 1"

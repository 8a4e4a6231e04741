"""Tests for pagination options, results and sort validation."""

import pytest

from streamvault.core.exceptions import ValidationError
from streamvault.features.pagination import (
    PaginatedResult,
    PaginationOptions,
    PaginationValidator,
    SortDirection,
    SortSpec,
)


class TestPaginatedResult:
    """Page arithmetic."""

    def test_last_page_metadata(self):
        result = PaginatedResult.create([], total_count=45, page=3, page_size=20)

        assert result.total_pages == 3
        assert result.has_next_page is False
        assert result.has_previous_page is True

    def test_first_page_metadata(self):
        result = PaginatedResult.create(["a", "b"], total_count=45, page=1, page_size=20)

        assert result.total_pages == 3
        assert result.has_next_page is True
        assert result.has_previous_page is False
        assert result.items == ("a", "b")
        assert result.count == 2

    def test_empty_result(self):
        result = PaginatedResult.create([], total_count=0, page=1, page_size=20)

        assert result.total_pages == 0
        assert result.has_next_page is False
        assert result.has_previous_page is False
        assert not result.has_items

    def test_exact_multiple(self):
        result = PaginatedResult.create([], total_count=40, page=2, page_size=20)

        assert result.total_pages == 2
        assert result.has_next_page is False

    def test_page_past_the_end(self):
        result = PaginatedResult.create([], total_count=5, page=4, page_size=20)

        assert result.total_pages == 1
        assert result.has_next_page is False
        assert result.has_previous_page is True


class TestPaginationOptions:
    """Validation without clamping."""

    def test_defaults(self):
        options = PaginationOptions()

        assert options.page == 1
        assert options.page_size == 20
        assert options.offset == 0

    def test_offset(self):
        assert PaginationOptions(page=3, page_size=25).offset == 50

    @pytest.mark.parametrize("page", [0, -1, "2", 1.5, True])
    def test_invalid_page(self, page):
        with pytest.raises(ValidationError) as exc_info:
            PaginationOptions(page=page)

        assert exc_info.value.fields == ["page"]

    @pytest.mark.parametrize("page_size", [0, 101, None])
    def test_invalid_page_size(self, page_size):
        with pytest.raises(ValidationError) as exc_info:
            PaginationOptions(page_size=page_size)

        assert exc_info.value.fields == ["page_size"]

    def test_all_errors_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            PaginationOptions(page=0, page_size=500)

        assert exc_info.value.fields == ["page", "page_size"]

    def test_bounds_are_accepted(self):
        assert PaginationOptions(page=1, page_size=100).limit == 100
        assert PaginationOptions(page=1, page_size=1).limit == 1


class TestPaginationValidator:
    """Raw pagination and sort input."""

    def test_none_gives_defaults(self):
        assert PaginationValidator.validate(None) == PaginationOptions()

    def test_camel_case_page_size(self):
        options = PaginationValidator.validate({"page": 2, "pageSize": 10})

        assert options.offset == 10
        assert options.limit == 10

    def test_non_mapping_rejected(self):
        with pytest.raises(ValidationError):
            PaginationValidator.validate("page=1")

    def test_out_of_range_is_not_clamped(self):
        with pytest.raises(ValidationError):
            PaginationValidator.validate({"page": 1, "page_size": 1000})

    def test_sort_none(self):
        assert PaginationValidator.validate_sort(None) is None

    def test_missing_direction_defaults_to_ascending(self):
        sort = PaginationValidator.validate_sort({"field": "createdAt"})

        assert sort == SortSpec("created_at", SortDirection.ASC)
        assert PaginationValidator.validate_sort({"field": "createdAt", "direction": None}) == sort

    def test_direction_is_case_insensitive(self):
        sort = PaginationValidator.validate_sort({"field": "title", "direction": "DESC"})

        assert sort.direction == SortDirection.DESC
        assert sort.to_sql() == "ORDER BY title DESC"

    @pytest.mark.parametrize("direction", ["sideways", "", "  ", 0, False])
    def test_invalid_direction_is_an_error(self, direction):
        with pytest.raises(ValidationError) as exc_info:
            PaginationValidator.validate_sort({"field": "title", "direction": direction})

        assert exc_info.value.fields == ["sort.direction"]

    def test_field_must_be_allowed(self):
        with pytest.raises(ValidationError) as exc_info:
            PaginationValidator.validate_sort({"field": "password_hash"}, {"title"})

        assert exc_info.value.fields == ["sort.field"]

    def test_unsafe_field_and_direction_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            PaginationValidator.validate_sort({"field": "title; --", "direction": "up"})

        assert exc_info.value.fields == ["sort.field", "sort.direction"]

    def test_sort_spec_rejects_unsafe_field(self):
        with pytest.raises(ValidationError):
            SortSpec("title desc, (SELECT 1)")

    def test_create_result_uses_options(self):
        result = PaginationValidator.create_result([1, 2], 12, PaginationOptions(page=2, page_size=5))

        assert result.page == 2
        assert result.total_pages == 3

"""Tests for the query fragment builder."""

import re
import pytest
from enum import Enum
from uuid import uuid4

from streamvault.core.exceptions import ValidationError
from streamvault.core.value_objects import SongId
from streamvault.features.pagination import PaginationOptions, SortDirection, SortSpec
from streamvault.repositories import (
    ArrayOverlap,
    QueryFragmentBuilder,
    RangeFilter,
    SearchFilter,
    bind_value,
)

PLACEHOLDER = re.compile(r"\$(\d+)")


def placeholders(sql: str):
    return [int(n) for n in PLACEHOLDER.findall(sql)]


class TestBuildWhere:
    """WHERE clause rendering."""

    @pytest.fixture
    def builder(self):
        return QueryFragmentBuilder()

    def test_equality_filters_with_trusted_condition(self, builder):
        fragments = builder.build(
            {"genre": "rock", "is_public": True},
            pagination=PaginationOptions(page=1, page_size=20),
            conditions=("deleted_at IS NULL",),
        )

        assert fragments.where_clause == "WHERE genre = $1 AND is_public = $2 AND deleted_at IS NULL"
        assert fragments.where_params == ("rock", True)
        assert fragments.limit_clause == "LIMIT $3 OFFSET $4"
        assert fragments.params == ("rock", True, 20, 0)

    def test_list_value_renders_in(self, builder):
        clause, params, next_index = builder.build_where({"tags": ["rock", "pop"]})

        assert clause == "WHERE tags IN ($1, $2)"
        assert params == ["rock", "pop"]
        assert next_index == 3

    def test_empty_list_matches_nothing(self, builder):
        clause, params, _ = builder.build_where({"genre": []})

        assert clause == "WHERE FALSE"
        assert params == []

    def test_none_values_are_skipped(self, builder):
        clause, params, next_index = builder.build_where({"genre": None, "year": None})

        assert clause == ""
        assert params == []
        assert next_index == 1

    def test_range_mapping(self, builder):
        clause, params, _ = builder.build_where({"duration": {"from": 60, "to": 300}})

        assert clause == "WHERE duration >= $1 AND duration <= $2"
        assert params == [60, 300]

    def test_open_range(self, builder):
        clause, params, _ = builder.build_where({"duration": RangeFilter(lte=300)})

        assert clause == "WHERE duration <= $1"
        assert params == [300]

    def test_range_mapping_rejects_unknown_keys(self, builder):
        with pytest.raises(ValidationError):
            builder.build_where({"duration": {"from": 1, "until": 5}})

    def test_search_escapes_wildcards(self, builder):
        clause, params, _ = builder.build_where(
            {"search": SearchFilter(("title", "description"), "50%_off")}
        )

        assert clause == "WHERE (title ILIKE $1 OR description ILIKE $2)"
        assert params == ["%50\\%\\_off%", "%50\\%\\_off%"]

    def test_array_overlap(self, builder):
        clause, params, _ = builder.build_where({"tags": ArrayOverlap(("rock", "pop"))})

        assert clause == "WHERE tags && $1"
        assert params == [["rock", "pop"]]

    def test_start_index_offsets_placeholders(self, builder):
        clause, params, next_index = builder.build_where({"genre": "rock"}, start_index=3)

        assert clause == "WHERE genre = $3"
        assert next_index == 4

    def test_unsafe_keys_are_all_reported(self, builder):
        with pytest.raises(ValidationError) as exc_info:
            builder.build_where({"genre; DROP TABLE songs": "x", "1bad": "y", "ok": 1})

        assert exc_info.value.fields == ["genre; DROP TABLE songs", "1bad"]

    def test_unsafe_search_column_rejected(self, builder):
        with pytest.raises(ValidationError):
            builder.build_where({"search": SearchFilter(("title--",), "x")})

    def test_every_placeholder_has_a_parameter(self, builder):
        fragments = builder.build(
            {
                "genre": "rock",
                "tags": ["a", "b", "c"],
                "duration": RangeFilter(10, 20),
                "search": SearchFilter(("title",), "x"),
                "missing": None,
            },
            sort=SortSpec("title"),
            pagination=PaginationOptions(page=2, page_size=10),
        )
        sql = " ".join([fragments.where_clause, fragments.limit_clause])

        assert placeholders(sql) == list(range(1, len(fragments.params) + 1))
        assert fragments.next_index == len(fragments.params) + 1
        assert fragments.params[-2:] == (10, 10)


class TestBuildOrderBy:
    """ORDER BY rendering."""

    def test_no_sort(self):
        assert QueryFragmentBuilder.build_order_by(None) == ""

    def test_sort_direction(self):
        sort = SortSpec("created_at", SortDirection.DESC)

        assert QueryFragmentBuilder.build_order_by(sort) == "ORDER BY created_at DESC"


class TestBindValue:
    """Domain value conversion."""

    def test_entity_id(self):
        song_id = SongId(uuid4())

        assert bind_value(song_id) == song_id.value

    def test_enum(self):
        class Color(Enum):
            RED = "red"

        assert bind_value(Color.RED) == "red"

    def test_nested_list(self):
        song_id = SongId(uuid4())

        assert bind_value((song_id, "x")) == [song_id.value, "x"]

    def test_range_of_open_bounds_is_none(self):
        assert RangeFilter.of(None, None) is None
        assert RangeFilter.of(1, None) == RangeFilter(gte=1, lte=None)

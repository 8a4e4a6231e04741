"""Artist repository backed by the ``artists`` table."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ....config.constants import Genre
from ....core.exceptions import ValidationError
from ....core.value_objects import ArtistId, UserId
from ....database.protocols import Row
from ....features.filtering import FilterValidator
from ....features.pagination import PaginatedResult, SortDirection, SortSpec
from ....features.pagination.validator import RawPagination
from ....repositories import ArrayOverlap, BaseRepository, RangeFilter, SearchFilter
from ..entities.artist import Artist
from ..utils.queries import (
    ARTIST_NAME_TAKEN_BY_OTHER_USER,
    ARTIST_ORDER_BY_FOLLOWERS,
    ARTIST_ORDER_BY_LISTENERS,
    ARTIST_SEARCH_COLUMNS,
    ARTIST_VERIFIED_CONDITION,
)


logger = logging.getLogger(__name__)


class ArtistRepository(BaseRepository[Artist]):
    """Database repository for artist profiles."""

    table_name = "artists"
    entity_type = "artist"
    required_columns = frozenset({
        "id", "user_id", "artist_name", "genres", "is_verified", "follower_count",
        "monthly_listeners", "created_at", "updated_at", "deleted_at",
    })
    sortable_columns = frozenset({
        "artist_name", "follower_count", "monthly_listeners", "created_at", "updated_at",
    })
    counter_columns = frozenset({"follower_count"})
    immutable_columns = frozenset({"id", "user_id", "created_at", "deleted_at"})

    def _row_to_entity(self, row: Row) -> Artist:
        return Artist(
            id=ArtistId(row["id"]),
            user_id=UserId(row["user_id"]),
            artist_name=row["artist_name"],
            biography=row.get("biography"),
            genres=[Genre(g) for g in row["genres"] or []],
            is_verified=row["is_verified"],
            follower_count=row["follower_count"],
            monthly_listeners=row["monthly_listeners"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _entity_to_row(self, artist: Artist) -> Dict[str, Any]:
        return {
            "id": artist.id.value,
            "user_id": artist.user_id.value,
            "artist_name": artist.artist_name,
            "biography": artist.biography,
            "genres": [g.value for g in artist.genres],
            "is_verified": artist.is_verified,
            "follower_count": artist.follower_count,
            "monthly_listeners": artist.monthly_listeners,
            "created_at": artist.created_at,
            "updated_at": artist.updated_at,
            "deleted_at": artist.deleted_at,
        }

    def _filters_to_db(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        validated = FilterValidator.validate_artist_filters(filters)
        created_at = validated.created_at
        return {
            "is_verified": validated.is_verified,
            "genres": ArrayOverlap(validated.genres) if validated.genres else None,
            "follower_count": RangeFilter.of(validated.min_followers, validated.max_followers),
            "created_at": RangeFilter.of(created_at.start, created_at.end) if created_at else None,
            "search": SearchFilter(ARTIST_SEARCH_COLUMNS, validated.search) if validated.search else None,
        }

    # ------------------------------------------------------------------
    # Finders
    # ------------------------------------------------------------------

    async def find_by_user_id(self, user_id: Any) -> Optional[Artist]:
        """The live artist profile owned by ``user_id``, if any."""
        user_uuid = self._id_value(user_id)
        if user_uuid is None:
            return None
        artists = await self._find_list("find_by_user_id", {"user_id": user_uuid}, limit=1)
        return artists[0] if artists else None

    async def find_by_genre(self, genre: Any, pagination: RawPagination = None) -> PaginatedResult[Artist]:
        """Artists listing ``genre`` among their genres, most followed first."""
        return await self._paginate(
            self._filters_to_db({"genres": [genre]}),
            pagination,
            SortSpec("follower_count", SortDirection.DESC),
        )

    async def find_verified(self, pagination: RawPagination = None) -> PaginatedResult[Artist]:
        return await self._paginate(
            self._filters_to_db({"is_verified": True}),
            pagination,
            SortSpec("follower_count", SortDirection.DESC),
        )

    async def find_popular(self, limit: Optional[int] = None, genre: Any = None) -> List[Artist]:
        limit = self._check_limit(limit)
        filters = self._filters_to_db({"genres": [genre]}) if genre is not None else {}
        return await self._find_list(
            "find_popular", filters, order_by=ARTIST_ORDER_BY_FOLLOWERS, limit=limit
        )

    async def find_trending(self, limit: Optional[int] = None) -> List[Artist]:
        """Verified artists with the largest monthly audience."""
        limit = self._check_limit(limit)
        return await self._find_list(
            "find_trending",
            conditions=(ARTIST_VERIFIED_CONDITION,),
            order_by=ARTIST_ORDER_BY_LISTENERS,
            limit=limit,
        )

    # ------------------------------------------------------------------
    # Existence and counts
    # ------------------------------------------------------------------

    async def exists_by_name_for_different_user(self, artist_name: str, user_id: Any) -> bool:
        """Check whether another user's live artist already uses ``artist_name``."""
        user_uuid = self._id_value(user_id)
        if user_uuid is None:
            return False
        row = await self._query_one(
            "exists_by_name_for_different_user",
            ARTIST_NAME_TAKEN_BY_OTHER_USER,
            [artist_name.strip(), user_uuid],
        )
        return row is not None

    async def count_verified(self) -> int:
        return await self.count({"is_verified": True})

    # ------------------------------------------------------------------
    # Audience metrics
    # ------------------------------------------------------------------

    @staticmethod
    def _check_metric(name: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError.for_field(name, f"{name} must be a non-negative integer")
        return value

    async def update_follower_count(self, artist_id: Any, follower_count: int) -> bool:
        count = self._check_metric("follower_count", follower_count)
        return await self._set_column(artist_id, "follower_count", count)

    async def update_monthly_listeners(self, artist_id: Any, monthly_listeners: int) -> bool:
        count = self._check_metric("monthly_listeners", monthly_listeners)
        return await self._set_column(artist_id, "monthly_listeners", count)

    async def increment_followers(self, artist_id: Any) -> bool:
        return await self._adjust_counter(artist_id, "follower_count", 1)

    async def decrement_followers(self, artist_id: Any) -> bool:
        return await self._adjust_counter(artist_id, "follower_count", -1)

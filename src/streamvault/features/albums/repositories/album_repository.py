"""Album repository backed by the ``albums`` table.

``song_count`` is a generated column over ``song_ids``; it is read for
filtering and sorting but never written.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from ....config.constants import Genre, Limits
from ....core.value_objects import AlbumId, ArtistId, SongId
from ....database.protocols import Row
from ....features.filtering import FilterValidator
from ....features.pagination import PaginatedResult, SortDirection, SortSpec
from ....features.pagination.validator import RawPagination, RawSort
from ....repositories import ArrayOverlap, BaseRepository, RangeFilter, SearchFilter
from ..entities.album import Album
from ..utils.queries import (
    ALBUM_ADD_SONG,
    ALBUM_ORDER_BY_POPULARITY,
    ALBUM_ORDER_BY_RELEASE,
    ALBUM_PUBLIC_CONDITION,
    ALBUM_RELEASED_CONDITION,
    ALBUM_REMOVE_SONG,
    ALBUM_SEARCH_COLUMNS,
)


logger = logging.getLogger(__name__)


class AlbumRepository(BaseRepository[Album]):
    """Database repository for albums."""

    table_name = "albums"
    entity_type = "album"
    required_columns = frozenset({
        "id", "title", "artist_id", "genre", "release_date", "song_ids", "is_public",
        "total_duration", "play_count", "like_count", "created_at", "updated_at", "deleted_at",
    })
    sortable_columns = frozenset({
        "title", "release_date", "song_count", "play_count", "like_count",
        "created_at", "updated_at",
    })
    counter_columns = frozenset({"play_count", "like_count"})

    def _row_to_entity(self, row: Row) -> Album:
        return Album(
            id=AlbumId(row["id"]),
            title=row["title"],
            artist_id=ArtistId(row["artist_id"]),
            genre=Genre(row["genre"]),
            release_date=row["release_date"],
            description=row.get("description"),
            cover_image_url=row.get("cover_image_url"),
            song_ids=[SongId(s) for s in row["song_ids"] or []],
            is_public=row["is_public"],
            total_duration=row["total_duration"],
            play_count=row["play_count"],
            like_count=row["like_count"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _entity_to_row(self, album: Album) -> Dict[str, Any]:
        return {
            "id": album.id.value,
            "title": album.title,
            "artist_id": album.artist_id.value,
            "description": album.description,
            "genre": album.genre.value,
            "release_date": album.release_date,
            "cover_image_url": album.cover_image_url,
            "song_ids": [s.value for s in album.song_ids],
            "is_public": album.is_public,
            "total_duration": album.total_duration,
            "play_count": album.play_count,
            "like_count": album.like_count,
            "created_at": album.created_at,
            "updated_at": album.updated_at,
            "deleted_at": album.deleted_at,
        }

    def _filters_to_db(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        validated = FilterValidator.validate_album_filters(filters)
        created_at = validated.created_at
        release_date = None
        if validated.release_year is not None:
            release_date = RangeFilter(
                date(validated.release_year, 1, 1), date(validated.release_year, 12, 31)
            )
        return {
            "artist_id": validated.artist_id,
            "genre": validated.genre,
            "is_public": validated.is_public,
            "release_date": release_date,
            "song_count": RangeFilter.of(validated.min_songs, validated.max_songs),
            "created_at": RangeFilter.of(created_at.start, created_at.end) if created_at else None,
            "search": SearchFilter(ALBUM_SEARCH_COLUMNS, validated.search) if validated.search else None,
        }

    @staticmethod
    def _visibility(include_private: bool) -> Dict[str, Any]:
        return {} if include_private else {"is_public": True}

    # ------------------------------------------------------------------
    # Paginated finders
    # ------------------------------------------------------------------

    async def find_by_artist(
        self,
        artist_id: Any,
        pagination: RawPagination = None,
        include_private: bool = False,
    ) -> PaginatedResult[Album]:
        """Albums of one artist, latest release first."""
        artist_uuid = self._id_value(artist_id)
        if artist_uuid is None:
            return self._empty_page(pagination)
        filters = {"artist_id": artist_uuid, **self._visibility(include_private)}
        return await self._paginate(
            self._filters_to_db(filters),
            pagination,
            SortSpec("release_date", SortDirection.DESC),
        )

    async def find_public(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        pagination: RawPagination = None,
        sort: RawSort = None,
    ) -> PaginatedResult[Album]:
        return await self.find_many({**(filters or {}), "is_public": True}, pagination, sort)

    async def find_by_genre(
        self,
        genre: Any,
        pagination: RawPagination = None,
        include_private: bool = False,
    ) -> PaginatedResult[Album]:
        filters = {"genre": genre, **self._visibility(include_private)}
        return await self._paginate(
            self._filters_to_db(filters),
            pagination,
            SortSpec("release_date", SortDirection.DESC),
        )

    async def find_by_release_year(
        self,
        year: Any,
        pagination: RawPagination = None,
        include_private: bool = False,
    ) -> PaginatedResult[Album]:
        """Albums released in ``year``, in release order."""
        filters = {"release_year": year, **self._visibility(include_private)}
        return await self._paginate(
            self._filters_to_db(filters),
            pagination,
            SortSpec("release_date", SortDirection.ASC),
        )

    # ------------------------------------------------------------------
    # List finders
    # ------------------------------------------------------------------

    async def find_popular(self, limit: Optional[int] = None, genre: Any = None) -> List[Album]:
        limit = self._check_limit(limit)
        filters = self._filters_to_db({"genre": genre}) if genre is not None else {}
        return await self._find_list(
            "find_popular", filters, (ALBUM_PUBLIC_CONDITION,), ALBUM_ORDER_BY_POPULARITY, limit
        )

    async def find_recently_released(
        self, limit: Optional[int] = None, genre: Any = None
    ) -> List[Album]:
        """Public albums already released, newest release first."""
        limit = self._check_limit(limit)
        filters = self._filters_to_db({"genre": genre}) if genre is not None else {}
        return await self._find_list(
            "find_recently_released",
            filters,
            (ALBUM_PUBLIC_CONDITION, ALBUM_RELEASED_CONDITION),
            ALBUM_ORDER_BY_RELEASE,
            limit,
        )

    async def find_containing_song(self, song_id: Any) -> List[Album]:
        """Live albums whose track list includes ``song_id``."""
        song_uuid = self._id_value(song_id)
        if song_uuid is None:
            return []
        return await self._find_list(
            "find_containing_song",
            {"song_ids": ArrayOverlap((song_uuid,))},
            order_by=ALBUM_ORDER_BY_RELEASE,
        )

    # ------------------------------------------------------------------
    # Existence and counts
    # ------------------------------------------------------------------

    async def exists_by_title_for_artist(
        self, title: str, artist_id: Any, exclude_album_id: Any = None
    ) -> bool:
        artist_uuid = self._id_value(artist_id)
        if artist_uuid is None:
            return False
        return await self._exists(
            "exists_by_title_for_artist",
            {"title": title.strip(), "artist_id": artist_uuid},
            exclude_id=exclude_album_id,
        )

    async def count_public(self) -> int:
        return await self.count({"is_public": True})

    async def count_by_artist(self, artist_id: Any, include_private: bool = False) -> int:
        artist_uuid = self._id_value(artist_id)
        if artist_uuid is None:
            return 0
        return await self.count({"artist_id": artist_uuid, **self._visibility(include_private)})

    # ------------------------------------------------------------------
    # Counters and track list
    # ------------------------------------------------------------------

    async def increment_play_count(self, album_id: Any) -> bool:
        return await self._adjust_counter(album_id, "play_count", 1)

    async def increment_like_count(self, album_id: Any) -> bool:
        return await self._adjust_counter(album_id, "like_count", 1)

    async def decrement_like_count(self, album_id: Any) -> bool:
        return await self._adjust_counter(album_id, "like_count", -1)

    async def add_song(self, album_id: Any, song_id: Any) -> bool:
        """Append a song to the track list; False if nothing was appended.

        Duplicates and a full track list are rejected in the UPDATE itself.
        """
        album_uuid = self._id_value(album_id)
        song_uuid = self._id_value(song_id)
        if album_uuid is None or song_uuid is None:
            return False
        result = await self._execute(
            "add_song", ALBUM_ADD_SONG, [album_uuid, song_uuid, Limits.MAX_ALBUM_SONGS]
        )
        return result.affected_rows > 0

    async def remove_song(self, album_id: Any, song_id: Any) -> bool:
        album_uuid = self._id_value(album_id)
        song_uuid = self._id_value(song_id)
        if album_uuid is None or song_uuid is None:
            return False
        result = await self._execute("remove_song", ALBUM_REMOVE_SONG, [album_uuid, song_uuid])
        return result.affected_rows > 0

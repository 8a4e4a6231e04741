"""Song repository backed by the ``songs`` table."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ....config.constants import Genre, TimeRange
from ....core.exceptions import ValidationError
from ....core.value_objects import AlbumId, ArtistId, SongId
from ....database.protocols import DatabaseConnection, Row
from ....features.filtering import FilterValidator
from ....features.pagination import PaginatedResult, SortDirection, SortSpec
from ....features.pagination.validator import RawPagination, RawSort
from ....repositories import ArrayOverlap, BaseRepository, RangeFilter, SearchFilter
from ..entities.song import Song, SongMetadata
from ..utils.queries import (
    SONG_ASSIGN_TO_ALBUM,
    SONG_COUNT_BY_GENRE,
    SONG_ORDER_BY_ALBUM_POSITION,
    SONG_ORDER_BY_POPULARITY,
    SONG_ORDER_BY_RECENT,
    SONG_ORDER_BY_TRENDING,
    SONG_PUBLIC_CONDITION,
    SONG_SEARCH_COLUMNS,
    SONG_TRENDING_WINDOW_CONDITION,
    SONG_WITHOUT_ALBUM_CONDITION,
)


logger = logging.getLogger(__name__)


def _time_range(value: Any) -> TimeRange:
    try:
        return TimeRange(value)
    except ValueError:
        allowed = ", ".join(member.value for member in TimeRange)
        raise ValidationError.for_field("time_range", f"time_range must be one of: {allowed}") from None


class SongRepository(BaseRepository[Song]):
    """Database repository for songs."""

    table_name = "songs"
    entity_type = "song"
    required_columns = frozenset({
        "id", "title", "duration", "artist_id", "album_id", "file_path", "genre",
        "explicit", "tags", "file_size", "format", "is_public", "play_count",
        "like_count", "created_at", "updated_at", "deleted_at",
    })
    sortable_columns = frozenset({
        "title", "duration", "year", "play_count", "like_count", "created_at", "updated_at",
    })
    counter_columns = frozenset({"play_count", "like_count"})

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def _row_to_entity(self, row: Row) -> Song:
        return Song(
            id=SongId(row["id"]),
            title=row["title"],
            duration=row["duration"],
            artist_id=ArtistId(row["artist_id"]),
            album_id=AlbumId(row["album_id"]) if row["album_id"] else None,
            file_path=row["file_path"],
            metadata=SongMetadata(
                genre=Genre(row["genre"]),
                year=row.get("year"),
                bpm=row.get("bpm"),
                key=row.get("key"),
                explicit=row["explicit"],
                language=row.get("language"),
                tags=list(row["tags"] or []),
                file_size=row["file_size"],
                bitrate=row.get("bitrate"),
                sample_rate=row.get("sample_rate"),
                format=row["format"],
            ),
            is_public=row["is_public"],
            play_count=row["play_count"],
            like_count=row["like_count"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def _entity_to_row(self, song: Song) -> Dict[str, Any]:
        metadata = song.metadata
        return {
            "id": song.id.value,
            "title": song.title,
            "duration": song.duration,
            "artist_id": song.artist_id.value,
            "album_id": song.album_id.value if song.album_id else None,
            "file_path": song.file_path,
            "genre": metadata.genre.value,
            "year": metadata.year,
            "bpm": metadata.bpm,
            "key": metadata.key,
            "explicit": metadata.explicit,
            "language": metadata.language,
            "tags": list(metadata.tags),
            "file_size": metadata.file_size,
            "bitrate": metadata.bitrate,
            "sample_rate": metadata.sample_rate,
            "format": metadata.format,
            "is_public": song.is_public,
            "play_count": song.play_count,
            "like_count": song.like_count,
            "created_at": song.created_at,
            "updated_at": song.updated_at,
            "deleted_at": song.deleted_at,
        }

    def _filters_to_db(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        validated = FilterValidator.validate_song_filters(filters)
        created_at = validated.created_at
        return {
            "artist_id": validated.artist_id,
            "album_id": validated.album_id,
            "genre": validated.genre,
            "is_public": validated.is_public,
            "duration": RangeFilter.of(validated.min_duration, validated.max_duration),
            "year": validated.year,
            "explicit": validated.explicit,
            "tags": ArrayOverlap(validated.tags) if validated.tags else None,
            "created_at": RangeFilter.of(created_at.start, created_at.end) if created_at else None,
            "search": SearchFilter(SONG_SEARCH_COLUMNS, validated.search) if validated.search else None,
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
    ) -> PaginatedResult[Song]:
        """Songs of one artist, newest first."""
        artist_uuid = self._id_value(artist_id)
        if artist_uuid is None:
            return self._empty_page(pagination)
        filters = {"artist_id": artist_uuid, **self._visibility(include_private)}
        return await self._paginate(
            self._filters_to_db(filters),
            pagination,
            SortSpec("created_at", SortDirection.DESC),
        )

    async def find_public(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        pagination: RawPagination = None,
        sort: RawSort = None,
    ) -> PaginatedResult[Song]:
        """Public songs matching ``filters``; ``is_public`` is forced on."""
        return await self.find_many({**(filters or {}), "is_public": True}, pagination, sort)

    async def find_by_genre(
        self,
        genre: Any,
        pagination: RawPagination = None,
        include_private: bool = False,
    ) -> PaginatedResult[Song]:
        """Songs of one genre, most played first."""
        filters = {"genre": genre, **self._visibility(include_private)}
        return await self._paginate(
            self._filters_to_db(filters),
            pagination,
            SortSpec("play_count", SortDirection.DESC),
        )

    async def find_without_album(
        self,
        artist_id: Any = None,
        pagination: RawPagination = None,
    ) -> PaginatedResult[Song]:
        """Songs not assigned to any album, optionally for one artist."""
        filters: Dict[str, Any] = {}
        if artist_id is not None:
            artist_uuid = self._id_value(artist_id)
            if artist_uuid is None:
                return self._empty_page(pagination)
            filters["artist_id"] = artist_uuid
        return await self._paginate(
            self._filters_to_db(filters),
            pagination,
            SortSpec("created_at", SortDirection.DESC),
            conditions=(SONG_WITHOUT_ALBUM_CONDITION,),
        )

    async def search(
        self,
        term: str,
        pagination: RawPagination = None,
        include_private: bool = False,
    ) -> PaginatedResult[Song]:
        """Case-insensitive title search, most played first."""
        filters = {"search": term, **self._visibility(include_private)}
        return await self._paginate(
            self._filters_to_db(filters),
            pagination,
            SortSpec("play_count", SortDirection.DESC),
        )

    # ------------------------------------------------------------------
    # List finders
    # ------------------------------------------------------------------

    async def find_by_album(self, album_id: Any, include_private: bool = False) -> List[Song]:
        """Songs of one album in insertion order."""
        album_uuid = self._id_value(album_id)
        if album_uuid is None:
            return []
        filters = {"album_id": album_uuid, **self._visibility(include_private)}
        return await self._find_list(
            "find_by_album", filters, order_by=SONG_ORDER_BY_ALBUM_POSITION
        )

    async def find_popular(
        self,
        limit: Optional[int] = None,
        genre: Any = None,
        time_range: Any = TimeRange.ALL,
    ) -> List[Song]:
        """Most played public songs, optionally limited to a genre and look-back window."""
        limit = self._check_limit(limit)
        filters = self._filters_to_db({"genre": genre}) if genre is not None else {}
        conditions = [SONG_PUBLIC_CONDITION]
        interval = _time_range(time_range).interval
        if interval:
            conditions.append(f"created_at >= NOW() - INTERVAL '{interval}'")
        return await self._find_list(
            "find_popular", filters, conditions, SONG_ORDER_BY_POPULARITY, limit
        )

    async def find_trending(self, limit: Optional[int] = None, genre: Any = None) -> List[Song]:
        """Public songs from the last 30 days weighted by plays and likes."""
        limit = self._check_limit(limit)
        filters = self._filters_to_db({"genre": genre}) if genre is not None else {}
        return await self._find_list(
            "find_trending",
            filters,
            (SONG_PUBLIC_CONDITION, SONG_TRENDING_WINDOW_CONDITION),
            SONG_ORDER_BY_TRENDING,
            limit,
        )

    async def find_recent(
        self,
        limit: Optional[int] = None,
        genre: Any = None,
        include_private: bool = False,
    ) -> List[Song]:
        """Newest songs first."""
        limit = self._check_limit(limit)
        filters = {"genre": genre, **self._visibility(include_private)}
        return await self._find_list(
            "find_recent", self._filters_to_db(filters), order_by=SONG_ORDER_BY_RECENT, limit=limit
        )

    # ------------------------------------------------------------------
    # Existence and counts
    # ------------------------------------------------------------------

    async def exists_by_title_for_artist(
        self, title: str, artist_id: Any, exclude_song_id: Any = None
    ) -> bool:
        """Check whether the artist already has a live song with this title."""
        artist_uuid = self._id_value(artist_id)
        if artist_uuid is None:
            return False
        return await self._exists(
            "exists_by_title_for_artist",
            {"title": title.strip(), "artist_id": artist_uuid},
            exclude_id=exclude_song_id,
        )

    async def count_public(self) -> int:
        return await self.count({"is_public": True})

    async def count_by_artist(self, artist_id: Any, include_private: bool = False) -> int:
        artist_uuid = self._id_value(artist_id)
        if artist_uuid is None:
            return 0
        return await self.count({"artist_id": artist_uuid, **self._visibility(include_private)})

    async def count_by_genre(self) -> Dict[Genre, int]:
        """Number of live public songs per genre; genres without songs are omitted."""
        rows = await self._query("count_by_genre", SONG_COUNT_BY_GENRE)
        return {Genre(row["genre"]): int(row["count"]) for row in rows}

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    async def increment_play_count(self, song_id: Any) -> bool:
        return await self._adjust_counter(song_id, "play_count", 1)

    async def increment_like_count(self, song_id: Any) -> bool:
        return await self._adjust_counter(song_id, "like_count", 1)

    async def decrement_like_count(self, song_id: Any) -> bool:
        return await self._adjust_counter(song_id, "like_count", -1)

    # ------------------------------------------------------------------
    # Bulk
    # ------------------------------------------------------------------

    async def bulk_assign_to_album(self, song_ids: Iterable[Any], album_id: Any) -> int:
        """Move songs into an album in one transaction; returns rows updated."""
        album_uuid = self._id_value(album_id)
        if album_uuid is None:
            return 0
        song_uuids = [u for u in (self._id_value(s) for s in song_ids) if u is not None]
        if not song_uuids:
            return 0

        async def _assign(conn: DatabaseConnection) -> int:
            repository = self.with_connection(conn)
            result = await repository._execute(
                "bulk_assign_to_album", SONG_ASSIGN_TO_ALBUM, [album_uuid, song_uuids]
            )
            return result.affected_rows

        return await self._transaction("bulk_assign_to_album", _assign)

"""Validated filter objects, one per entity.

Every field is optional; ``None`` means "no constraint". Instances are built
by ``FilterValidator`` and consumed by the repositories, which translate
them into column filters.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from ...config.constants import Genre, UserRole


@dataclass(frozen=True)
class DateRange:
    """Inclusive timestamp range; ``start <= end`` when both are set."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None


class _FilterSet:
    """Helpers shared by the filter dataclasses."""

    def as_dict(self) -> Dict[str, Any]:
        """Return only the fields that constrain the query."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.as_dict()


@dataclass(frozen=True)
class UserFilters(_FilterSet):
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None
    created_at: Optional[DateRange] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class ArtistFilters(_FilterSet):
    is_verified: Optional[bool] = None
    genres: Optional[Tuple[Genre, ...]] = None
    min_followers: Optional[int] = None
    max_followers: Optional[int] = None
    created_at: Optional[DateRange] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class SongFilters(_FilterSet):
    artist_id: Optional[UUID] = None
    album_id: Optional[UUID] = None
    genre: Optional[Genre] = None
    is_public: Optional[bool] = None
    min_duration: Optional[int] = None
    max_duration: Optional[int] = None
    year: Optional[int] = None
    explicit: Optional[bool] = None
    tags: Optional[Tuple[str, ...]] = None
    created_at: Optional[DateRange] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class AlbumFilters(_FilterSet):
    artist_id: Optional[UUID] = None
    genre: Optional[Genre] = None
    is_public: Optional[bool] = None
    release_year: Optional[int] = None
    min_songs: Optional[int] = None
    max_songs: Optional[int] = None
    created_at: Optional[DateRange] = None
    search: Optional[str] = None

"""
Response DTOs for repository results.

Field names are snake_case in Python and camelCase on the wire; dump with
``model_dump(by_alias=True)`` or return the model from a FastAPI route.
"""
from datetime import date, datetime
from typing import Callable, Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import Field

from ..features.albums.entities import Album
from ..features.artists.entities import Artist
from ..features.pagination import PaginatedResult
from ..features.songs.entities import Song
from ..features.users.entities import User
from .base import BaseSchema, TimestampMixin, UUIDMixin

T = TypeVar("T")
E = TypeVar("E")


class PaginatedResponse(BaseSchema, Generic[T]):
    """Paginated response wrapper."""
    items: List[T] = Field(description="Items on this page")
    total_count: int = Field(alias="totalCount", description="Total number of matching items")
    page: int = Field(description="Current page number")
    page_size: int = Field(alias="pageSize", description="Items per page")
    total_pages: int = Field(alias="totalPages", description="Total number of pages")
    has_next_page: bool = Field(alias="hasNextPage", description="Has next page")
    has_previous_page: bool = Field(alias="hasPreviousPage", description="Has previous page")

    @classmethod
    def from_result(
        cls,
        result: PaginatedResult[E],
        convert: Optional[Callable[[E], T]] = None,
    ) -> "PaginatedResponse[T]":
        """Build a response from a repository result, converting each item."""
        items = [convert(item) for item in result.items] if convert else list(result.items)
        return cls(
            items=items,
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
            has_next_page=result.has_next_page,
            has_previous_page=result.has_previous_page,
        )


class UserResponse(UUIDMixin, TimestampMixin):
    """Public view of a user; the password hash is never exposed."""
    email: str
    username: str
    role: str
    display_name: str = Field(alias="displayName")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    bio: Optional[str] = None
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")
    country: Optional[str] = None
    is_active: bool = Field(alias="isActive")
    is_verified: bool = Field(alias="isVerified")
    last_login_at: Optional[datetime] = Field(None, alias="lastLoginAt")

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        profile = user.profile
        return cls(
            id=user.id.value,
            email=user.email,
            username=user.username,
            role=user.role.value,
            display_name=user.display_name,
            first_name=profile.first_name,
            last_name=profile.last_name,
            bio=profile.bio,
            avatar_url=profile.avatar_url,
            country=profile.country,
            is_active=user.is_active,
            is_verified=user.is_verified,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ArtistResponse(UUIDMixin, TimestampMixin):
    user_id: UUID = Field(alias="userId")
    artist_name: str = Field(alias="artistName")
    biography: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    is_verified: bool = Field(alias="isVerified")
    follower_count: int = Field(alias="followerCount")
    monthly_listeners: int = Field(alias="monthlyListeners")

    @classmethod
    def from_entity(cls, artist: Artist) -> "ArtistResponse":
        return cls(
            id=artist.id.value,
            user_id=artist.user_id.value,
            artist_name=artist.artist_name,
            biography=artist.biography,
            genres=[g.value for g in artist.genres],
            is_verified=artist.is_verified,
            follower_count=artist.follower_count,
            monthly_listeners=artist.monthly_listeners,
            created_at=artist.created_at,
            updated_at=artist.updated_at,
        )


class SongResponse(UUIDMixin, TimestampMixin):
    title: str
    duration: int = Field(description="Duration in seconds")
    artist_id: UUID = Field(alias="artistId")
    album_id: Optional[UUID] = Field(None, alias="albumId")
    genre: str
    year: Optional[int] = None
    explicit: bool = False
    tags: List[str] = Field(default_factory=list)
    is_public: bool = Field(alias="isPublic")
    play_count: int = Field(alias="playCount")
    like_count: int = Field(alias="likeCount")

    @classmethod
    def from_entity(cls, song: Song) -> "SongResponse":
        return cls(
            id=song.id.value,
            title=song.title,
            duration=song.duration,
            artist_id=song.artist_id.value,
            album_id=song.album_id.value if song.album_id else None,
            genre=song.genre.value,
            year=song.metadata.year,
            explicit=song.metadata.explicit,
            tags=list(song.metadata.tags),
            is_public=song.is_public,
            play_count=song.play_count,
            like_count=song.like_count,
            created_at=song.created_at,
            updated_at=song.updated_at,
        )


class AlbumResponse(UUIDMixin, TimestampMixin):
    title: str
    artist_id: UUID = Field(alias="artistId")
    genre: str
    release_date: date = Field(alias="releaseDate")
    description: Optional[str] = None
    cover_image_url: Optional[str] = Field(None, alias="coverImageUrl")
    song_ids: List[UUID] = Field(default_factory=list, alias="songIds")
    song_count: int = Field(alias="songCount")
    is_public: bool = Field(alias="isPublic")
    total_duration: int = Field(alias="totalDuration")
    play_count: int = Field(alias="playCount")
    like_count: int = Field(alias="likeCount")

    @classmethod
    def from_entity(cls, album: Album) -> "AlbumResponse":
        return cls(
            id=album.id.value,
            title=album.title,
            artist_id=album.artist_id.value,
            genre=album.genre.value,
            release_date=album.release_date,
            description=album.description,
            cover_image_url=album.cover_image_url,
            song_ids=[s.value for s in album.song_ids],
            song_count=album.song_count,
            is_public=album.is_public,
            total_duration=album.total_duration,
            play_count=album.play_count,
            like_count=album.like_count,
            created_at=album.created_at,
            updated_at=album.updated_at,
        )

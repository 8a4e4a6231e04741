"""Value objects for streamvault."""

from .identifiers import (
    EntityId,
    UUID_PATTERN,
    AlbumId,
    ArtistId,
    SongId,
    UserId,
    is_valid_uuid,
)

__all__ = [
    "UUID_PATTERN",
    "EntityId",
    "is_valid_uuid",
    "UserId",
    "ArtistId",
    "SongId",
    "AlbumId",
]

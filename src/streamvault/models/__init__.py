"""Pydantic response models."""

from .base import BaseSchema, TimestampMixin, UUIDMixin
from .responses import (
    AlbumResponse,
    ArtistResponse,
    PaginatedResponse,
    SongResponse,
    UserResponse,
)

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "UUIDMixin",
    "AlbumResponse",
    "ArtistResponse",
    "PaginatedResponse",
    "SongResponse",
    "UserResponse",
]

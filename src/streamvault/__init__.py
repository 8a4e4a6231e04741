"""Streamvault - persistence core for a music-streaming API.

Provides PostgreSQL repositories for users, artists, songs and albums with
validated filtering, safe query-fragment building and offset pagination.
"""

from .__version__ import __version__

from .config import AppSettings, DatabaseSettings, configure_logging

from .core.exceptions import (
    StreamVaultError,
    ValidationError,
    DatabaseOperationError,
    EntityNotFoundError,
    EntityAlreadyExistsError,
    RowMappingError,
    TransactionError,
)

from .database import DatabaseManager, apply_schema

from .features.pagination import PaginatedResult, PaginationOptions, SortDirection, SortSpec
from .features.filtering import FilterValidator

from .features.users import User, UserProfile, UserRepository
from .features.artists import Artist, ArtistRepository
from .features.songs import Song, SongMetadata, SongRepository
from .features.albums import Album, AlbumRepository

__all__ = [
    "__version__",
    # Configuration
    "AppSettings",
    "DatabaseSettings",
    "configure_logging",
    # Exceptions
    "StreamVaultError",
    "ValidationError",
    "DatabaseOperationError",
    "EntityNotFoundError",
    "EntityAlreadyExistsError",
    "RowMappingError",
    "TransactionError",
    # Database
    "DatabaseManager",
    "apply_schema",
    # Pagination and filtering
    "PaginatedResult",
    "PaginationOptions",
    "SortDirection",
    "SortSpec",
    "FilterValidator",
    # Entities and repositories
    "User",
    "UserProfile",
    "UserRepository",
    "Artist",
    "ArtistRepository",
    "Song",
    "SongMetadata",
    "SongRepository",
    "Album",
    "AlbumRepository",
]

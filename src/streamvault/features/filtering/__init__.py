"""Filter validation for the entity repositories."""

from .entities import AlbumFilters, ArtistFilters, DateRange, SongFilters, UserFilters
from .validator import FilterValidator

__all__ = [
    "AlbumFilters",
    "ArtistFilters",
    "DateRange",
    "FilterValidator",
    "SongFilters",
    "UserFilters",
]

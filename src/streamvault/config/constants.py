"""Constants and enums for streamvault.

The enums mirror the PostgreSQL enum types created by
``streamvault.database.schema``.
"""

from enum import Enum
from typing import Final


class Genre(str, Enum):
    """Music genres - corresponds to the music_genre database type."""

    ROCK = "rock"
    POP = "pop"
    JAZZ = "jazz"
    CLASSICAL = "classical"
    ELECTRONIC = "electronic"
    HIP_HOP = "hip_hop"
    COUNTRY = "country"
    BLUES = "blues"
    REGGAE = "reggae"
    FOLK = "folk"
    METAL = "metal"
    PUNK = "punk"
    INDIE = "indie"
    ALTERNATIVE = "alternative"
    R_AND_B = "r_and_b"
    SOUL = "soul"
    FUNK = "funk"
    DISCO = "disco"
    HOUSE = "house"
    TECHNO = "techno"
    AMBIENT = "ambient"
    WORLD = "world"
    LATIN = "latin"
    REGGAETON = "reggaeton"
    OTHER = "other"


class UserRole(str, Enum):
    """User roles - corresponds to the user_role database type."""

    USER = "user"
    ARTIST = "artist"
    ADMIN = "admin"
    MODERATOR = "moderator"


class TimeRange(str, Enum):
    """Look-back windows for popularity queries."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    @property
    def interval(self) -> str:
        """PostgreSQL interval literal, empty for ALL."""
        return {
            TimeRange.DAY: "1 day",
            TimeRange.WEEK: "1 week",
            TimeRange.MONTH: "1 month",
            TimeRange.YEAR: "1 year",
        }.get(self, "")


class Limits:
    """Domain limits enforced by the validators and the schema."""

    MAX_SEARCH_LENGTH: Final[int] = 100
    MAX_TAG_LENGTH: Final[int] = 30
    MIN_YEAR: Final[int] = 1900
    FUTURE_YEAR_ALLOWANCE: Final[int] = 2
    MAX_ARTIST_GENRES: Final[int] = 5
    MAX_ALBUM_SONGS: Final[int] = 50
    DEFAULT_LIST_LIMIT: Final[int] = 50
    MAX_LIST_LIMIT: Final[int] = 100
    TRENDING_WINDOW_DAYS: Final[int] = 30

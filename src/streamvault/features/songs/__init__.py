"""Songs feature: song entity and its PostgreSQL repository.

Usage:
    from streamvault.features.songs import SongRepository

    songs = SongRepository(db)
    page = await songs.find_public({"genre": "rock"}, {"page": 1, "page_size": 20})
"""

from .entities import Song, SongMetadata
from .repositories import SongRepository

__all__ = ["Song", "SongMetadata", "SongRepository"]

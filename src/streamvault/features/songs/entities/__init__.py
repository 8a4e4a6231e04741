"""Song entities."""

from .song import Song, SongMetadata

__all__ = ["Song", "SongMetadata"]

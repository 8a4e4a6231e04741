"""Song repositories module."""

from .song_repository import SongRepository

__all__ = ["SongRepository"]

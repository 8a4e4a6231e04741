"""Artist repositories module."""

from .artist_repository import ArtistRepository

__all__ = ["ArtistRepository"]

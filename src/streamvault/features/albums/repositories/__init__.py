"""Album repositories module."""

from .album_repository import AlbumRepository

__all__ = ["AlbumRepository"]

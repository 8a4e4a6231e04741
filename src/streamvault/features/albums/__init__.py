"""Albums feature: album entity, track list and repository."""

from .entities import Album
from .repositories import AlbumRepository

__all__ = ["Album", "AlbumRepository"]

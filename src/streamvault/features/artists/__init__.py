"""Artists feature: artist profiles and audience metrics."""

from .entities import Artist
from .repositories import ArtistRepository

__all__ = ["Artist", "ArtistRepository"]

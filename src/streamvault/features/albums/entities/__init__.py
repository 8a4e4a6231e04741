"""Album entities."""

from .album import Album

__all__ = ["Album"]

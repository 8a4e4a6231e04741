"""Artist entities."""

from .artist import Artist

__all__ = ["Artist"]

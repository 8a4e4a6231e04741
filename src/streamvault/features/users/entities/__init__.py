"""User entities."""

from .user import User, UserProfile

__all__ = ["User", "UserProfile"]

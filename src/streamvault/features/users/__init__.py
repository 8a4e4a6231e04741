"""Users feature module.

Provides the user account entity and its repository. Email and username
lookups are case-insensitive.
"""

from .entities import User, UserProfile
from .repositories import UserRepository

__all__ = ["User", "UserProfile", "UserRepository"]

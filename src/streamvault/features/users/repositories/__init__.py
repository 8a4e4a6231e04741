"""User repositories module."""

from .user_repository import UserRepository

__all__ = ["UserRepository"]

"""User domain entity.

This module defines the User entity and its profile value object.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Optional

from ....config.constants import UserRole
from ....core.value_objects import UserId


@dataclass(frozen=True)
class UserProfile:
    """Public profile information of a user."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    is_public: bool = True

    @property
    def full_name(self) -> Optional[str]:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else None


@dataclass
class User:
    """User domain entity.

    Email and username are unique among live (not soft-deleted) users; the
    database enforces this with partial unique indexes.
    """

    id: UserId
    email: str
    username: str
    password_hash: str
    role: UserRole = UserRole.USER
    profile: UserProfile = field(default_factory=UserProfile)

    # Status
    is_active: bool = True
    is_verified: bool = False

    # Audit
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_login_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.id, UserId):
            self.id = UserId(self.id)
        self.role = UserRole(self.role)
        self.email = self.email.strip().lower()
        self.username = self.username.strip()

    @classmethod
    def create(
        cls,
        email: str,
        username: str,
        password_hash: str,
        role: UserRole = UserRole.USER,
        profile: Optional[UserProfile] = None,
    ) -> "User":
        """Create a new user with a generated ID."""
        return cls(
            id=UserId.generate(),
            email=email,
            username=username,
            password_hash=password_hash,
            role=role,
            profile=profile or UserProfile(),
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def display_name(self) -> str:
        return self.profile.display_name or self.username

    def update_profile(self, **changes) -> None:
        """Replace profile fields, e.g. ``update_profile(bio="...")``."""
        self.profile = replace(self.profile, **changes)
        self.updated_at = datetime.now(timezone.utc)

"""Artist domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from ....config.constants import Genre, Limits
from ....core.value_objects import ArtistId, UserId


@dataclass
class Artist:
    """Artist profile owned by a user account."""

    id: ArtistId
    user_id: UserId
    artist_name: str
    biography: Optional[str] = None
    genres: List[Genre] = field(default_factory=list)
    is_verified: bool = False
    follower_count: int = 0
    monthly_listeners: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.id, ArtistId):
            self.id = ArtistId(self.id)
        if not isinstance(self.user_id, UserId):
            self.user_id = UserId(self.user_id)
        self.genres = [Genre(g) for g in self.genres]
        if len(self.genres) > Limits.MAX_ARTIST_GENRES:
            raise ValueError(f"An artist can have at most {Limits.MAX_ARTIST_GENRES} genres")
        if self.follower_count < 0 or self.monthly_listeners < 0:
            raise ValueError("Artist counters cannot be negative")

    @classmethod
    def create(
        cls,
        user_id: UserId,
        artist_name: str,
        genres: Optional[List[Genre]] = None,
        biography: Optional[str] = None,
    ) -> "Artist":
        """Create a new artist with a generated ID."""
        return cls(
            id=ArtistId.generate(),
            user_id=user_id,
            artist_name=artist_name.strip(),
            biography=biography,
            genres=list(genres or []),
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

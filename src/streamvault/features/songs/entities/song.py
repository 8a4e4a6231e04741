"""Song domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from ....config.constants import Genre
from ....core.value_objects import AlbumId, ArtistId, SongId


@dataclass(frozen=True)
class SongMetadata:
    """Descriptive and technical attributes of an audio file."""

    genre: Genre
    file_size: int
    format: str
    year: Optional[int] = None
    bpm: Optional[int] = None
    key: Optional[str] = None
    explicit: bool = False
    language: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    bitrate: Optional[int] = None
    sample_rate: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "genre", Genre(self.genre))
        object.__setattr__(self, "tags", list(self.tags or []))


@dataclass
class Song:
    """A track uploaded by an artist, optionally part of an album."""

    id: SongId
    title: str
    duration: int
    artist_id: ArtistId
    file_path: str
    metadata: SongMetadata
    album_id: Optional[AlbumId] = None
    is_public: bool = False
    play_count: int = 0
    like_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.id, SongId):
            self.id = SongId(self.id)
        if not isinstance(self.artist_id, ArtistId):
            self.artist_id = ArtistId(self.artist_id)
        if self.album_id is not None and not isinstance(self.album_id, AlbumId):
            self.album_id = AlbumId(self.album_id)
        if self.duration <= 0:
            raise ValueError("Song duration must be positive")

    @classmethod
    def create(
        cls,
        title: str,
        duration: int,
        artist_id: ArtistId,
        file_path: str,
        metadata: SongMetadata,
        album_id: Optional[AlbumId] = None,
    ) -> "Song":
        """Create a new private song with a generated ID."""
        return cls(
            id=SongId.generate(),
            title=title.strip(),
            duration=duration,
            artist_id=artist_id,
            file_path=file_path,
            metadata=metadata,
            album_id=album_id,
        )

    @property
    def genre(self) -> Genre:
        return self.metadata.genre

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

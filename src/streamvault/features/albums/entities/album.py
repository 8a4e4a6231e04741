"""Album domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional

from ....config.constants import Genre, Limits
from ....core.value_objects import AlbumId, ArtistId, SongId


@dataclass
class Album:
    """An ordered collection of up to 50 songs by one artist."""

    id: AlbumId
    title: str
    artist_id: ArtistId
    genre: Genre
    release_date: date
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    song_ids: List[SongId] = field(default_factory=list)
    is_public: bool = False
    total_duration: int = 0
    play_count: int = 0
    like_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.id, AlbumId):
            self.id = AlbumId(self.id)
        if not isinstance(self.artist_id, ArtistId):
            self.artist_id = ArtistId(self.artist_id)
        self.genre = Genre(self.genre)
        self.song_ids = [s if isinstance(s, SongId) else SongId(s) for s in self.song_ids]
        if len(self.song_ids) > Limits.MAX_ALBUM_SONGS:
            raise ValueError(f"An album can hold at most {Limits.MAX_ALBUM_SONGS} songs")

    @classmethod
    def create(
        cls,
        title: str,
        artist_id: ArtistId,
        genre: Genre,
        release_date: date,
        description: Optional[str] = None,
    ) -> "Album":
        """Create a new private, empty album with a generated ID."""
        return cls(
            id=AlbumId.generate(),
            title=title.strip(),
            artist_id=artist_id,
            genre=genre,
            release_date=release_date,
            description=description,
        )

    @property
    def song_count(self) -> int:
        return len(self.song_ids)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def contains(self, song_id: SongId) -> bool:
        return song_id in self.song_ids

"""Pytest configuration and fixtures for streamvault tests."""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

from streamvault.core.value_objects import AlbumId, ArtistId, SongId, UserId
from streamvault.database.protocols import ExecuteResult


@pytest.fixture
def mock_db():
    """Mock DatabaseConnection; ``transaction`` runs the callback on the same mock."""
    db = AsyncMock()
    db.query = AsyncMock(return_value=[])
    db.query_one = AsyncMock(return_value=None)
    db.execute = AsyncMock(return_value=ExecuteResult(affected_rows=1, status="UPDATE 1"))

    async def run_in_transaction(fn):
        return await fn(db)

    db.transaction = AsyncMock(side_effect=run_in_transaction)
    return db


@pytest.fixture
def sample_user_id():
    """Sample user ID for testing."""
    return UserId(uuid4())


@pytest.fixture
def sample_artist_id():
    """Sample artist ID for testing."""
    return ArtistId(uuid4())


@pytest.fixture
def sample_song_id():
    """Sample song ID for testing."""
    return SongId(uuid4())


@pytest.fixture
def sample_album_id():
    """Sample album ID for testing."""
    return AlbumId(uuid4())


@pytest.fixture
def user_row(sample_user_id):
    """A users row as returned by the database."""
    now = datetime.now(timezone.utc)
    return {
        "id": sample_user_id.value,
        "email": "ada@example.com",
        "username": "ada",
        "password_hash": "hashed",
        "role": "user",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "display_name": None,
        "bio": None,
        "avatar_url": None,
        "country": "GB",
        "date_of_birth": None,
        "is_public": True,
        "is_active": True,
        "is_verified": False,
        "created_at": now,
        "updated_at": now,
        "last_login_at": None,
        "deleted_at": None,
    }


@pytest.fixture
def artist_row(sample_artist_id, sample_user_id):
    """An artists row as returned by the database."""
    now = datetime.now(timezone.utc)
    return {
        "id": sample_artist_id.value,
        "user_id": sample_user_id.value,
        "artist_name": "The Analytical Engines",
        "biography": "Loud and mechanical",
        "genres": ["rock", "electronic"],
        "is_verified": True,
        "follower_count": 1200,
        "monthly_listeners": 5400,
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
    }


@pytest.fixture
def song_row(sample_song_id, sample_artist_id):
    """A songs row as returned by the database."""
    now = datetime.now(timezone.utc)
    return {
        "id": sample_song_id.value,
        "title": "Difference Engine",
        "duration": 215,
        "artist_id": sample_artist_id.value,
        "album_id": None,
        "file_path": "songs/difference-engine.mp3",
        "genre": "rock",
        "year": 2024,
        "bpm": 120,
        "key": "E",
        "explicit": False,
        "language": "en",
        "tags": ["rock", "instrumental"],
        "file_size": 5_000_000,
        "bitrate": 320,
        "sample_rate": 44100,
        "format": "mp3",
        "is_public": True,
        "play_count": 42,
        "like_count": 7,
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
    }


@pytest.fixture
def album_row(sample_album_id, sample_artist_id, sample_song_id):
    """An albums row as returned by the database."""
    now = datetime.now(timezone.utc)
    return {
        "id": sample_album_id.value,
        "title": "Punch Cards",
        "artist_id": sample_artist_id.value,
        "description": None,
        "genre": "rock",
        "release_date": date(2024, 3, 1),
        "cover_image_url": None,
        "song_ids": [sample_song_id.value],
        "song_count": 1,
        "is_public": True,
        "total_duration": 215,
        "play_count": 100,
        "like_count": 10,
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
    }

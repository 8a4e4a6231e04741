"""PostgreSQL schema for the streamvault tables.

Uniqueness rules are expressed as partial unique indexes over live rows
(``deleted_at IS NULL``) so a soft-deleted user or song does not block a new
row with the same email or title.
"""

import logging
from typing import List

from .protocols import DatabaseConnection

logger = logging.getLogger(__name__)


ENUM_TYPES = """
    DO $$ BEGIN
        CREATE TYPE user_role AS ENUM ('user', 'artist', 'admin', 'moderator');
    EXCEPTION WHEN duplicate_object THEN NULL; END $$;

    DO $$ BEGIN
        CREATE TYPE music_genre AS ENUM (
            'rock', 'pop', 'jazz', 'classical', 'electronic', 'hip_hop', 'country',
            'blues', 'reggae', 'folk', 'metal', 'punk', 'indie', 'alternative',
            'r_and_b', 'soul', 'funk', 'disco', 'house', 'techno', 'ambient',
            'world', 'latin', 'reggaeton', 'other'
        );
    EXCEPTION WHEN duplicate_object THEN NULL; END $$;
"""

USERS_TABLE = """
    CREATE TABLE IF NOT EXISTS users (
        id UUID PRIMARY KEY,
        email VARCHAR(254) NOT NULL,
        username VARCHAR(30) NOT NULL,
        password_hash VARCHAR(255) NOT NULL,
        role user_role NOT NULL DEFAULT 'user',
        first_name VARCHAR(50),
        last_name VARCHAR(50),
        display_name VARCHAR(50),
        bio TEXT,
        avatar_url VARCHAR(500),
        country CHAR(2),
        date_of_birth DATE,
        is_public BOOLEAN NOT NULL DEFAULT TRUE,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        is_verified BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        last_login_at TIMESTAMPTZ,
        deleted_at TIMESTAMPTZ
    );

    CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email_active
        ON users (LOWER(email)) WHERE deleted_at IS NULL;
    CREATE UNIQUE INDEX IF NOT EXISTS idx_users_username_active
        ON users (LOWER(username)) WHERE deleted_at IS NULL;
    CREATE INDEX IF NOT EXISTS idx_users_role ON users (role) WHERE deleted_at IS NULL;
    CREATE INDEX IF NOT EXISTS idx_users_created_at ON users (created_at);
"""

ARTISTS_TABLE = """
    CREATE TABLE IF NOT EXISTS artists (
        id UUID PRIMARY KEY,
        user_id UUID NOT NULL REFERENCES users (id) ON DELETE CASCADE,
        artist_name VARCHAR(100) NOT NULL,
        biography TEXT,
        genres music_genre[] NOT NULL DEFAULT '{}',
        is_verified BOOLEAN NOT NULL DEFAULT FALSE,
        follower_count INTEGER NOT NULL DEFAULT 0 CHECK (follower_count >= 0),
        monthly_listeners INTEGER NOT NULL DEFAULT 0 CHECK (monthly_listeners >= 0),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        deleted_at TIMESTAMPTZ,
        CONSTRAINT artists_genres_max CHECK (cardinality(genres) <= 5)
    );

    CREATE UNIQUE INDEX IF NOT EXISTS idx_artists_user_active
        ON artists (user_id) WHERE deleted_at IS NULL;
    CREATE UNIQUE INDEX IF NOT EXISTS idx_artists_name_active
        ON artists (LOWER(artist_name)) WHERE deleted_at IS NULL;
    CREATE INDEX IF NOT EXISTS idx_artists_genres ON artists USING GIN (genres);
"""

ALBUMS_TABLE = """
    CREATE TABLE IF NOT EXISTS albums (
        id UUID PRIMARY KEY,
        title VARCHAR(200) NOT NULL,
        artist_id UUID NOT NULL REFERENCES artists (id) ON DELETE CASCADE,
        description TEXT,
        genre music_genre NOT NULL,
        release_date DATE NOT NULL,
        cover_image_url VARCHAR(500),
        song_ids UUID[] NOT NULL DEFAULT '{}',
        song_count INTEGER GENERATED ALWAYS AS (cardinality(song_ids)) STORED,
        is_public BOOLEAN NOT NULL DEFAULT FALSE,
        total_duration INTEGER NOT NULL DEFAULT 0 CHECK (total_duration >= 0),
        play_count BIGINT NOT NULL DEFAULT 0,
        like_count INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        deleted_at TIMESTAMPTZ,
        CONSTRAINT albums_song_ids_max CHECK (cardinality(song_ids) <= 50)
    );

    CREATE UNIQUE INDEX IF NOT EXISTS idx_albums_title_artist_active
        ON albums (artist_id, title) WHERE deleted_at IS NULL;
    CREATE INDEX IF NOT EXISTS idx_albums_genre ON albums (genre) WHERE deleted_at IS NULL;
"""

SONGS_TABLE = """
    CREATE TABLE IF NOT EXISTS songs (
        id UUID PRIMARY KEY,
        title VARCHAR(200) NOT NULL,
        duration INTEGER NOT NULL CHECK (duration > 0),
        artist_id UUID NOT NULL REFERENCES artists (id) ON DELETE CASCADE,
        album_id UUID REFERENCES albums (id) ON DELETE SET NULL,
        file_path VARCHAR(500) NOT NULL,
        genre music_genre NOT NULL,
        year INTEGER,
        bpm INTEGER,
        key VARCHAR(10),
        explicit BOOLEAN NOT NULL DEFAULT FALSE,
        language VARCHAR(10),
        tags TEXT[] NOT NULL DEFAULT '{}',
        file_size BIGINT NOT NULL,
        bitrate INTEGER,
        sample_rate INTEGER,
        format VARCHAR(10) NOT NULL,
        is_public BOOLEAN NOT NULL DEFAULT FALSE,
        play_count BIGINT NOT NULL DEFAULT 0,
        like_count INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        deleted_at TIMESTAMPTZ
    );

    CREATE UNIQUE INDEX IF NOT EXISTS idx_songs_title_artist_active
        ON songs (artist_id, title) WHERE deleted_at IS NULL;
    CREATE INDEX IF NOT EXISTS idx_songs_album ON songs (album_id) WHERE deleted_at IS NULL;
    CREATE INDEX IF NOT EXISTS idx_songs_genre ON songs (genre) WHERE deleted_at IS NULL;
    CREATE INDEX IF NOT EXISTS idx_songs_tags ON songs USING GIN (tags);
"""

SCHEMA_STATEMENTS: List[str] = [
    ENUM_TYPES,
    USERS_TABLE,
    ARTISTS_TABLE,
    ALBUMS_TABLE,
    SONGS_TABLE,
]


async def apply_schema(db: DatabaseConnection) -> None:
    """Create enum types, tables and indexes inside one transaction."""

    async def _apply(conn: DatabaseConnection) -> None:
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(statement)

    await db.transaction(_apply)
    logger.info(f"Applied schema ({len(SCHEMA_STATEMENTS)} statement groups)")

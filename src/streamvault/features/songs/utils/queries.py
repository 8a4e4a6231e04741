"""Song SQL fragments and statements.

Only trusted literals live here; caller values are always bound as
parameters by the repository.
"""

# =====================================================================================
# FRAGMENTS
# =====================================================================================

SONG_SEARCH_COLUMNS = ("title",)

SONG_PUBLIC_CONDITION = "is_public = TRUE"

SONG_WITHOUT_ALBUM_CONDITION = "album_id IS NULL"

SONG_TRENDING_WINDOW_CONDITION = "created_at >= NOW() - INTERVAL '30 days'"

SONG_ORDER_BY_POPULARITY = "ORDER BY play_count DESC, like_count DESC"

SONG_ORDER_BY_TRENDING = "ORDER BY (play_count * 0.7 + like_count * 0.3) DESC"

SONG_ORDER_BY_RECENT = "ORDER BY created_at DESC"

SONG_ORDER_BY_ALBUM_POSITION = "ORDER BY created_at ASC"

# =====================================================================================
# STATEMENTS
# =====================================================================================

SONG_COUNT_BY_GENRE = """
    SELECT genre, COUNT(*) AS count
    FROM songs
    WHERE deleted_at IS NULL AND is_public = TRUE
    GROUP BY genre
    ORDER BY genre
"""

SONG_ASSIGN_TO_ALBUM = """
    UPDATE songs
    SET album_id = $1, updated_at = CURRENT_TIMESTAMP
    WHERE id = ANY($2::uuid[]) AND deleted_at IS NULL
"""

"""Album SQL fragments and statements."""

# =====================================================================================
# FRAGMENTS
# =====================================================================================

ALBUM_SEARCH_COLUMNS = ("title", "description")

ALBUM_PUBLIC_CONDITION = "is_public = TRUE"

ALBUM_RELEASED_CONDITION = "release_date <= CURRENT_DATE"

ALBUM_ORDER_BY_POPULARITY = "ORDER BY play_count DESC, like_count DESC"

ALBUM_ORDER_BY_RELEASE = "ORDER BY release_date DESC, created_at DESC"

# =====================================================================================
# STATEMENTS
# =====================================================================================

# $1 album id, $2 song id, $3 maximum number of songs
ALBUM_ADD_SONG = """
    UPDATE albums
    SET song_ids = array_append(song_ids, $2), updated_at = CURRENT_TIMESTAMP
    WHERE id = $1
        AND deleted_at IS NULL
        AND NOT ($2 = ANY(song_ids))
        AND cardinality(song_ids) < $3
"""

ALBUM_REMOVE_SONG = """
    UPDATE albums
    SET song_ids = array_remove(song_ids, $2), updated_at = CURRENT_TIMESTAMP
    WHERE id = $1
        AND deleted_at IS NULL
        AND $2 = ANY(song_ids)
"""

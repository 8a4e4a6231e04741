"""Artist SQL fragments and statements."""

ARTIST_SEARCH_COLUMNS = ("artist_name", "biography")

ARTIST_VERIFIED_CONDITION = "is_verified = TRUE"

ARTIST_ORDER_BY_FOLLOWERS = "ORDER BY follower_count DESC, monthly_listeners DESC"

ARTIST_ORDER_BY_LISTENERS = "ORDER BY monthly_listeners DESC, follower_count DESC"

# Names compare case-insensitively, matching idx_artists_name_active
ARTIST_NAME_TAKEN_BY_OTHER_USER = """
    SELECT 1 FROM artists
    WHERE LOWER(artist_name) = LOWER($1)
        AND user_id != $2
        AND deleted_at IS NULL
    LIMIT 1
"""

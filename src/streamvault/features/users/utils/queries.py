"""User SQL fragments and statements.

Email and username comparisons use ``LOWER(...)`` so they hit the
case-insensitive unique indexes.
"""

# =====================================================================================
# FRAGMENTS
# =====================================================================================

USER_SEARCH_COLUMNS = ("username", "email", "display_name", "first_name", "last_name")

# =====================================================================================
# LOOKUPS
# =====================================================================================

USER_GET_BY_EMAIL = """
    SELECT * FROM users
    WHERE LOWER(email) = LOWER($1) AND deleted_at IS NULL
"""

USER_GET_BY_USERNAME = """
    SELECT * FROM users
    WHERE LOWER(username) = LOWER($1) AND deleted_at IS NULL
"""

# $2 is an optional user id to ignore; NULL matches no row
USER_EMAIL_EXISTS = """
    SELECT 1 FROM users
    WHERE LOWER(email) = LOWER($1)
        AND deleted_at IS NULL
        AND ($2::uuid IS NULL OR id != $2::uuid)
    LIMIT 1
"""

USER_USERNAME_EXISTS = """
    SELECT 1 FROM users
    WHERE LOWER(username) = LOWER($1)
        AND deleted_at IS NULL
        AND ($2::uuid IS NULL OR id != $2::uuid)
    LIMIT 1
"""

# =====================================================================================
# REPORTING
# =====================================================================================

USER_COUNT_BY_ROLE = """
    SELECT role, COUNT(*) AS count
    FROM users
    WHERE deleted_at IS NULL
    GROUP BY role
"""

# $1 days without login, $2 row cap
USER_LIST_INACTIVE = """
    SELECT * FROM users
    WHERE deleted_at IS NULL
        AND is_active = TRUE
        AND (
            (last_login_at IS NULL AND created_at < NOW() - make_interval(days => $1))
            OR last_login_at < NOW() - make_interval(days => $1)
        )
    ORDER BY last_login_at ASC NULLS FIRST
    LIMIT $2
"""

# =====================================================================================
# UPDATES
# =====================================================================================

USER_RECORD_LOGIN = """
    UPDATE users
    SET last_login_at = CURRENT_TIMESTAMP, updated_at = CURRENT_TIMESTAMP
    WHERE id = $1 AND deleted_at IS NULL
"""

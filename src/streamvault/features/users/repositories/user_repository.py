"""User repository backed by the ``users`` table."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from ....config.constants import Limits, UserRole
from ....core.exceptions import ValidationError
from ....core.value_objects import UserId
from ....database.protocols import Row
from ....features.filtering import FilterValidator
from ....features.pagination import PaginatedResult, SortDirection, SortSpec
from ....features.pagination.validator import RawPagination
from ....repositories import BaseRepository, RangeFilter, SearchFilter
from ..entities.user import User, UserProfile
from ..utils.queries import (
    USER_COUNT_BY_ROLE,
    USER_EMAIL_EXISTS,
    USER_GET_BY_EMAIL,
    USER_GET_BY_USERNAME,
    USER_LIST_INACTIVE,
    USER_RECORD_LOGIN,
    USER_SEARCH_COLUMNS,
    USER_USERNAME_EXISTS,
)


logger = logging.getLogger(__name__)

PROFILE_COLUMNS = (
    "first_name", "last_name", "display_name", "bio", "avatar_url",
    "country", "date_of_birth", "is_public",
)


class UserRepository(BaseRepository[User]):
    """Database repository for user accounts.

    The profile value object is flattened into columns of the ``users`` row.
    """

    table_name = "users"
    entity_type = "user"
    required_columns = frozenset({
        "id", "email", "username", "password_hash", "role", "is_active", "is_verified",
        "created_at", "updated_at", "last_login_at", "deleted_at",
    })
    sortable_columns = frozenset({
        "username", "email", "role", "last_login_at", "created_at", "updated_at",
    })

    def _row_to_entity(self, row: Row) -> User:
        profile = UserProfile(**{
            column: row[column] for column in PROFILE_COLUMNS if row.get(column) is not None
        })
        return User(
            id=UserId(row["id"]),
            email=row["email"],
            username=row["username"],
            password_hash=row["password_hash"],
            role=UserRole(row["role"]),
            profile=profile,
            is_active=row["is_active"],
            is_verified=row["is_verified"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            last_login_at=row["last_login_at"],
            deleted_at=row["deleted_at"],
        )

    def _entity_to_row(self, user: User) -> Dict[str, Any]:
        row = {
            "id": user.id.value,
            "email": user.email,
            "username": user.username,
            "password_hash": user.password_hash,
            "role": user.role.value,
        }
        row.update({column: getattr(user.profile, column) for column in PROFILE_COLUMNS})
        row.update({
            "is_active": user.is_active,
            "is_verified": user.is_verified,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "last_login_at": user.last_login_at,
            "deleted_at": user.deleted_at,
        })
        return row

    def _filters_to_db(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        validated = FilterValidator.validate_user_filters(filters)
        created_at = validated.created_at
        return {
            "role": validated.role,
            "is_active": validated.is_active,
            "is_verified": validated.is_verified,
            "created_at": RangeFilter.of(created_at.start, created_at.end) if created_at else None,
            "search": SearchFilter(USER_SEARCH_COLUMNS, validated.search) if validated.search else None,
        }

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def find_by_email(self, email: str) -> Optional[User]:
        row = await self._query_one("find_by_email", USER_GET_BY_EMAIL, [email.strip()])
        return self.map_row(row) if row else None

    async def find_by_username(self, username: str) -> Optional[User]:
        row = await self._query_one("find_by_username", USER_GET_BY_USERNAME, [username.strip()])
        return self.map_row(row) if row else None

    async def exists_by_email(self, email: str, exclude_user_id: Any = None) -> bool:
        row = await self._query_one(
            "exists_by_email",
            USER_EMAIL_EXISTS,
            [email.strip(), self._id_value(exclude_user_id)],
        )
        return row is not None

    async def exists_by_username(self, username: str, exclude_user_id: Any = None) -> bool:
        row = await self._query_one(
            "exists_by_username",
            USER_USERNAME_EXISTS,
            [username.strip(), self._id_value(exclude_user_id)],
        )
        return row is not None

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def search(self, term: str, pagination: RawPagination = None) -> PaginatedResult[User]:
        """Match ``term`` against username, email and profile names."""
        return await self._paginate(
            self._filters_to_db({"search": term, "is_active": True}),
            pagination,
            SortSpec("username", SortDirection.ASC),
        )

    async def find_by_created_date_range(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        pagination: RawPagination = None,
    ) -> PaginatedResult[User]:
        """Users registered between ``start`` and ``end`` (inclusive), newest first."""
        return await self._paginate(
            self._filters_to_db({"created_at": {"from": start, "to": end}}),
            pagination,
            SortSpec("created_at", SortDirection.DESC),
        )

    async def find_inactive_users(self, days: int = 90, limit: Optional[int] = None) -> List[User]:
        """Active accounts with no login in the last ``days`` days.

        Accounts that never logged in count from their registration date.
        """
        if isinstance(days, bool) or not isinstance(days, int) or days < 1:
            raise ValidationError.for_field("days", "days must be a positive integer")
        limit = self._check_limit(limit if limit is not None else Limits.MAX_LIST_LIMIT)
        rows = await self._query("find_inactive_users", USER_LIST_INACTIVE, [days, limit])
        return [self.map_row(row) for row in rows]

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    async def count_active(self) -> int:
        return await self.count({"is_active": True})

    async def count_by_role(self) -> Dict[UserRole, int]:
        """Live users per role; every role is present, zero when unused."""
        rows = await self._query("count_by_role", USER_COUNT_BY_ROLE)
        counts = {role: 0 for role in UserRole}
        for row in rows:
            counts[UserRole(row["role"])] = int(row["count"])
        return counts

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    async def record_login(self, user_id: Any) -> bool:
        """Stamp ``last_login_at`` with the current time."""
        user_uuid = self._id_value(user_id)
        if user_uuid is None:
            return False
        result = await self._execute("record_login", USER_RECORD_LOGIN, [user_uuid])
        return result.affected_rows > 0

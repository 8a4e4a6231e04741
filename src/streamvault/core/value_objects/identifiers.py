"""Value objects for entity identifiers.

Identifiers are immutable wrappers around ``uuid.UUID``. Textual input must be
a canonical RFC 4122 UUID of version 1 through 5; anything else is rejected
before it can reach a query.
"""

import re
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4


UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_uuid(value: Any) -> bool:
    """Check whether a value is a UUID or a canonical v1-v5 UUID string."""
    if isinstance(value, UUID):
        return True
    if isinstance(value, EntityId):
        return True
    return isinstance(value, str) and bool(UUID_PATTERN.match(value))


def _coerce_uuid(value: Any, type_name: str) -> UUID:
    if isinstance(value, UUID):
        return value
    if isinstance(value, EntityId):
        return value.value
    if isinstance(value, str) and UUID_PATTERN.match(value):
        return UUID(value)
    raise ValueError(f"{type_name} must be a valid UUID, got: {value!r}")


@dataclass(frozen=True)
class EntityId:
    """Shared behaviour for UUID-backed identifiers."""
    value: UUID

    def __post_init__(self):
        object.__setattr__(self, "value", _coerce_uuid(self.value, type(self).__name__))

    @classmethod
    def generate(cls):
        """Generate a new random identifier."""
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self.value!r})"


@dataclass(frozen=True, repr=False)
class UserId(EntityId):
    """User identifier value object."""


@dataclass(frozen=True, repr=False)
class ArtistId(EntityId):
    """Artist identifier value object."""


@dataclass(frozen=True, repr=False)
class SongId(EntityId):
    """Song identifier value object."""


@dataclass(frozen=True, repr=False)
class AlbumId(EntityId):
    """Album identifier value object."""

"""SQL identifier and literal safety helpers.

Column names are the only part of a statement that cannot be bound as a
parameter, so anything that reaches SQL text as an identifier must pass
``ensure_safe_identifier`` first.
"""

import re
from typing import Any

from .exceptions import ValidationError


IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_.]*$")
MAX_IDENTIFIER_LENGTH = 64

_LIKE_SPECIAL = re.compile(r"([%_\\])")


def is_safe_identifier(name: Any) -> bool:
    """Check a column name against the identifier pattern and length cap."""
    return (
        isinstance(name, str)
        and len(name) <= MAX_IDENTIFIER_LENGTH
        and IDENTIFIER_PATTERN.match(name) is not None
    )


def ensure_safe_identifier(name: Any, field: str = "column") -> str:
    """Return ``name`` unchanged or raise ValidationError."""
    if not is_safe_identifier(name):
        raise ValidationError.for_field(field, f"Invalid identifier: {name!r}")
    return name


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return _LIKE_SPECIAL.sub(r"\\\1", term)

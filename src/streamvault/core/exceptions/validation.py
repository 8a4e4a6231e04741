"""Validation exceptions for streamvault."""

from typing import Any, Dict, List, Optional

from .base import StreamVaultError


class ValidationError(StreamVaultError):
    """Raised when caller input fails validation.

    Every violated field is reported at once; ``errors`` holds one
    ``{"field": ..., "message": ...}`` entry per violation and is also
    exposed under ``details["errors"]``.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.errors = list(errors or [])
        details = dict(details or {})
        details["errors"] = self.errors
        super().__init__(message, details=details)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build a ValidationError carrying a single field violation."""
        return cls(message, errors=[{"field": field, "message": message}])

    @property
    def fields(self) -> List[str]:
        """Names of the fields that failed validation."""
        return [error["field"] for error in self.errors]


class ValidationErrorCollector:
    """Accumulates field violations and raises them together."""

    def __init__(self):
        self._errors: List[Dict[str, str]] = []

    def add(self, field: str, message: str) -> None:
        self._errors.append({"field": field, "message": message})

    def extend(self, error: ValidationError) -> None:
        self._errors.extend(error.errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def raise_if_errors(self, message: str = "Validation failed") -> None:
        if self._errors:
            raise ValidationError(message, errors=self._errors)

"""Database-related exceptions for streamvault."""

from typing import Any, Dict, List, Optional

from .base import StreamVaultError


class DatabaseError(StreamVaultError):
    """Base class for database-related errors."""
    pass


class DatabaseOperationError(DatabaseError):
    """Raised when a driver call fails.

    The message is generic; the SQL text and parameters are
    logged where the failure is caught and never placed on the exception.
    """

    def __init__(self, operation: str, message: str = "Database operation failed"):
        self.operation = operation
        super().__init__(message, details={"operation": operation})


class TransactionError(DatabaseError):
    """Raised when a transactional batch fails and is rolled back."""

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        super().__init__(
            f"Transaction for '{operation}' was rolled back",
            details={"operation": operation},
        )


class RowMappingError(DatabaseError):
    """Raised when a database row cannot be mapped to an entity.

    ``reason`` is logged by the caller and never included in ``message``.
    """

    def __init__(
        self,
        entity_type: str,
        missing_columns: Optional[List[str]] = None,
        reason: str = "",
    ):
        self.entity_type = entity_type
        self.missing_columns = list(missing_columns or [])
        self.reason = reason
        message = f"Cannot map row to {entity_type}"
        if self.missing_columns:
            message += f": missing columns {', '.join(self.missing_columns)}"
        super().__init__(
            message,
            details={"entity_type": entity_type, "missing_columns": self.missing_columns},
        )


class RepositoryError(DatabaseError):
    """Base class for repository-level errors."""
    pass


class EntityNotFoundError(RepositoryError):
    """Raised when an entity is required but does not exist."""

    def __init__(self, entity_type: str, identifier: Any):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(
            f"{entity_type} with identifier '{identifier}' not found",
            details={"entity_type": entity_type, "identifier": str(identifier)},
        )


class ConflictError(RepositoryError):
    """Raised when a write conflicts with existing data."""
    pass


class EntityAlreadyExistsError(ConflictError):
    """Raised when a unique constraint rejects an insert or update."""

    def __init__(
        self,
        entity_type: str,
        identifier: Any = None,
        constraint: Optional[str] = None,
    ):
        self.entity_type = entity_type
        self.identifier = identifier
        self.constraint = constraint
        message = f"{entity_type} already exists"
        if identifier is not None:
            message = f"{entity_type} with identifier '{identifier}' already exists"
        details: Dict[str, Any] = {"entity_type": entity_type}
        if constraint:
            details["constraint"] = constraint
        super().__init__(message, details=details)

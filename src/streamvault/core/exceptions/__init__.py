"""Exception hierarchy for streamvault."""

from .base import StreamVaultError, create_error_response, get_http_status_code
from .database import (
    ConflictError,
    DatabaseError,
    DatabaseOperationError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    RepositoryError,
    RowMappingError,
    TransactionError,
)
from .http_mapping import HTTP_STATUS_MAP
from .validation import ValidationError, ValidationErrorCollector

__all__ = [
    "StreamVaultError",
    "create_error_response",
    "get_http_status_code",
    "HTTP_STATUS_MAP",
    "ValidationError",
    "ValidationErrorCollector",
    "DatabaseError",
    "DatabaseOperationError",
    "TransactionError",
    "RowMappingError",
    "RepositoryError",
    "EntityNotFoundError",
    "ConflictError",
    "EntityAlreadyExistsError",
]

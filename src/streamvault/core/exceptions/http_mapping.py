"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .base import StreamVaultError
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
from .validation import ValidationError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,

    # 404 Not Found
    EntityNotFoundError: 404,

    # 409 Conflict
    ConflictError: 409,
    EntityAlreadyExistsError: 409,

    # 500 Internal Server Error
    DatabaseError: 500,
    DatabaseOperationError: 500,
    TransactionError: 500,
    RowMappingError: 500,
    RepositoryError: 500,

    # Default for StreamVaultError
    StreamVaultError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Resolve the HTTP status for an exception by walking its MRO."""
    for exc_type in type(exception).__mro__:
        if exc_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exc_type]
    return 500

"""Base exceptions for streamvault.

This module defines the root of the streamvault exception hierarchy.
All exceptions inherit from StreamVaultError and carry an error code and a
details mapping so that API layers can render them without inspecting types.
"""

from typing import Any, Dict, Optional


class StreamVaultError(Exception):
    """Base exception for all streamvault errors.

    All exceptions raised by the persistence layer inherit from this base class
    and include structured error information for logging and API responses.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as get_mapped_status_code
    return get_mapped_status_code(exception)


def create_error_response(exception: StreamVaultError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The streamvault exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }

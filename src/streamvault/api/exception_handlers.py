"""
Exception handlers for FastAPI applications built on streamvault.

Repository errors are translated to JSON bodies of the form
``{"error": {"code", "message", "details", "type"}}`` with the status code
from ``HTTP_STATUS_MAP``. Driver errors never reach the client.
"""
from typing import Any, Dict
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logging

from ..core.exceptions import StreamVaultError, create_error_response, get_http_status_code

logger = logging.getLogger(__name__)


class ExceptionHandlerRegistry:
    """Registers the streamvault exception handlers on an application."""

    def __init__(self, is_production: bool = True):
        """
        Initialize exception handler registry.

        Args:
            is_production: Hide messages of unexpected exceptions
        """
        self.is_production = is_production

    @staticmethod
    def _unexpected_error_body(message: str) -> Dict[str, Any]:
        return {
            "error": {
                "code": "InternalServerError",
                "message": message,
                "details": {},
                "type": "InternalServerError",
            }
        }

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(StreamVaultError)
        async def streamvault_exception_handler(request: Request, exc: StreamVaultError):
            """Handle repository and validation errors."""
            status_code = get_http_status_code(exc)
            if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.error(
                    f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}"
                )
            return JSONResponse(status_code=status_code, content=create_error_response(exc))

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)

            if self.is_production:
                message = "An unexpected error occurred"
            else:
                message = str(exc)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=self._unexpected_error_body(message),
            )


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """
    Register exception handlers for a FastAPI application.

    Args:
        app: FastAPI application instance
        is_production: Whether running in production mode
    """
    registry = ExceptionHandlerRegistry(is_production)
    registry.register_handlers(app)

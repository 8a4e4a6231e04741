"""Configuration for streamvault."""

from .logging_config import LogFormat, LoggingConfig, configure_logging
from .settings import AppSettings, DatabaseSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingConfig",
    "LogFormat",
    "configure_logging",
]

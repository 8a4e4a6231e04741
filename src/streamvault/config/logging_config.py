"""Centralized logging configuration for streamvault.

Provides consistent logging across the persistence layer with settings-based
control over verbosity, format and SQL logging.
"""

import logging
import logging.config
from enum import Enum
from typing import Any, Dict, Optional

from .settings import AppSettings


class LogFormat(str, Enum):
    """Supported log output formats."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


class LoggingConfig:
    """Logging configuration manager."""

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "asyncio",
    ]

    SQL_MODULES = [
        "streamvault.database",
        "streamvault.repositories",
    ]

    @classmethod
    def build(cls, settings: AppSettings) -> Dict[str, Any]:
        """Build a ``dictConfig`` mapping for the given settings."""
        log_level = settings.log_level.upper()
        enable_sql = settings.enable_sql_logging
        format_string = FORMAT_STRINGS[LogFormat(settings.log_format)]

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": "DEBUG" if enable_sql else log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": log_level,
                "handlers": ["console"],
            },
            "loggers": {},
        }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        logging_config["loggers"]["asyncpg"] = {
            "level": "DEBUG" if enable_sql else "WARNING",
            "handlers": ["console"],
            "propagate": False,
        }

        # SQL text is logged at DEBUG by these modules
        for module in cls.SQL_MODULES:
            logging_config["loggers"][module] = {
                "level": "DEBUG" if enable_sql else log_level,
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls, settings: Optional[AppSettings] = None) -> None:
        """Apply logging configuration."""
        settings = settings or AppSettings()
        logging.config.dictConfig(cls.build(settings))

        logger = logging.getLogger(__name__)
        logger.debug(
            f"Logging configured: level={settings.log_level.upper()}, format={settings.log_format}"
        )

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module."""
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """Convenience wrapper around ``LoggingConfig.configure``."""
    LoggingConfig.configure(settings)

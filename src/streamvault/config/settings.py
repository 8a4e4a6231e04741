"""
Configuration management for streamvault.

Settings are read from the environment (and an optional ``.env`` file) by
pydantic-settings. Nothing is cached at module level: the application builds
one ``AppSettings`` at startup and passes it to the components that need it.
"""
from typing import Any, Dict, Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection settings (``DB_*`` environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    host: str = Field(default="localhost")
    port: int = Field(default=5432, ge=1, le=65535)
    name: str = Field(default="spotify_api")
    user: str = Field(default="postgres")
    password: SecretStr = Field(default=SecretStr(""))
    ssl: bool = Field(default=False)

    # Pool Configuration
    pool_min: int = Field(default=2, ge=0)
    pool_max: int = Field(default=20, ge=1)
    max_inactive_connection_lifetime: float = Field(default=300.0)

    # Timeouts in milliseconds
    connection_timeout: int = Field(default=10000, ge=0)
    statement_timeout: int = Field(default=30000, ge=0)

    application_name: str = Field(default="streamvault")

    @model_validator(mode="after")
    def _check_pool_bounds(self) -> "DatabaseSettings":
        if not self.host or not self.name or not self.user:
            raise ValueError("Database host, name and user are required")
        if self.pool_min > self.pool_max:
            raise ValueError("DB_POOL_MIN must not exceed DB_POOL_MAX")
        return self

    @property
    def dsn(self) -> str:
        """PostgreSQL DSN without the password."""
        return f"postgresql://{self.user}@{self.host}:{self.port}/{self.name}"

    def pool_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``asyncpg.create_pool``."""
        return {
            "host": self.host,
            "port": self.port,
            "database": self.name,
            "user": self.user,
            "password": self.password.get_secret_value() or None,
            "ssl": "require" if self.ssl else None,
            "min_size": self.pool_min,
            "max_size": self.pool_max,
            "max_inactive_connection_lifetime": self.max_inactive_connection_lifetime,
            "timeout": self.connection_timeout / 1000,
            "command_timeout": self.statement_timeout / 1000,
            "server_settings": {
                "application_name": self.application_name,
                "statement_timeout": str(self.statement_timeout),
            },
        }


class AppSettings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    app_name: str = Field(default="streamvault")
    environment: str = Field(default="development")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: Literal["simple", "detailed", "json"] = Field(default="simple")
    enable_sql_logging: bool = Field(default=False)

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

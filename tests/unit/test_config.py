"""Tests for settings and logging configuration."""

import logging
import pytest
from pydantic import ValidationError as PydanticValidationError

from streamvault.config import AppSettings, DatabaseSettings, LoggingConfig


class TestDatabaseSettings:

    def test_defaults(self, monkeypatch):
        for name in ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER"):
            monkeypatch.delenv(name, raising=False)

        settings = DatabaseSettings(_env_file=None)

        assert settings.port == 5432
        assert settings.dsn == "postgresql://postgres@localhost:5432/spotify_api"

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_POOL_MAX", "5")
        monkeypatch.setenv("DB_PASSWORD", "s3cret")

        settings = DatabaseSettings(_env_file=None)

        assert settings.host == "db.internal"
        assert settings.pool_max == 5
        assert "s3cret" not in repr(settings)

    def test_pool_bounds(self):
        with pytest.raises(PydanticValidationError):
            DatabaseSettings(_env_file=None, pool_min=10, pool_max=5)

    def test_pool_kwargs(self):
        settings = DatabaseSettings(
            _env_file=None, password="pw", statement_timeout=5000, connection_timeout=2000
        )

        kwargs = settings.pool_kwargs()

        assert kwargs["password"] == "pw"
        assert kwargs["command_timeout"] == 5
        assert kwargs["timeout"] == 2
        assert kwargs["server_settings"]["statement_timeout"] == "5000"
        assert kwargs["ssl"] is None


class TestAppSettings:

    def test_page_size_env_is_ignored(self, monkeypatch):
        monkeypatch.setenv("MAX_PAGE_SIZE", "50")

        settings = AppSettings(_env_file=None)

        assert "max_page_size" not in AppSettings.model_fields
        assert "default_page_size" not in AppSettings.model_fields
        assert not hasattr(settings, "max_page_size")

    def test_is_production(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        assert AppSettings(_env_file=None, environment="Production").is_production
        assert not AppSettings(_env_file=None).is_production


class TestLoggingConfig:

    def test_sql_logging_disabled(self):
        config = LoggingConfig.build(AppSettings(_env_file=None, log_level="info"))

        assert config["root"]["level"] == "INFO"
        assert config["loggers"]["asyncpg"]["level"] == "WARNING"
        assert config["loggers"]["streamvault.repositories"]["level"] == "INFO"
        assert config["loggers"]["httpx"]["level"] == "ERROR"

    def test_sql_logging_enabled(self):
        config = LoggingConfig.build(
            AppSettings(_env_file=None, enable_sql_logging=True, log_format="json")
        )

        assert config["handlers"]["console"]["level"] == "DEBUG"
        assert config["loggers"]["asyncpg"]["level"] == "DEBUG"
        assert config["loggers"]["streamvault.database"]["level"] == "DEBUG"
        assert config["formatters"]["default"]["format"].startswith("{")

    def test_set_module_level(self):
        LoggingConfig.set_module_level("streamvault.tests.dummy", "warning")

        assert logging.getLogger("streamvault.tests.dummy").level == logging.WARNING

"""
Unit tests for Configuration module.
"""

import pytest
from pydantic import ValidationError

from taskify.core import config
from taskify.core.config import (
    DEFAULT_SECRET_KEY,
    ConfigValidator,
    EnvironmentEnum,
    LogFormatEnum,
    LogLevelEnum,
    Settings,
    get_config_summary,
)


class TestSettings:
    """Test cases for Settings configuration."""

    def test_default_settings(self, monkeypatch):
        for var in ("ENVIRONMENT", "SECRET_KEY", "BCRYPT_ROUNDS", "DATABASE_URL"):
            monkeypatch.delenv(var, raising=False)

        test_settings = Settings(_env_file=None)

        assert test_settings.app_name == "Taskify API"
        assert test_settings.environment == EnvironmentEnum.development
        assert test_settings.algorithm == "HS256"
        assert test_settings.access_token_expire_minutes == 60 * 24 * 7
        assert test_settings.bcrypt_rounds == 12
        assert test_settings.log_level == LogLevelEnum.INFO
        assert test_settings.log_format == LogFormatEnum.simple
        assert test_settings.secret_key == DEFAULT_SECRET_KEY
        assert test_settings.uses_default_secret is True

    def test_environment_aliases(self):
        assert Settings(environment="prod").environment == EnvironmentEnum.production
        assert Settings(environment="dev").environment == EnvironmentEnum.development
        assert Settings(environment="TEST").environment == EnvironmentEnum.testing
        assert Settings(environment="Staging").environment == EnvironmentEnum.staging

    def test_computed_properties(self):
        prod_settings = Settings(environment="production")
        assert prod_settings.is_production is True
        assert prod_settings.is_development is False

        testing_settings = Settings(environment="testing")
        assert testing_settings.is_testing is True

    def test_log_level_case_insensitive(self):
        assert Settings(log_level="debug").log_level == LogLevelEnum.DEBUG

    def test_log_format_case_insensitive(self):
        assert Settings(log_format="JSON").log_format == LogFormatEnum.json

    def test_allowed_origins_list(self):
        test_settings = Settings(allowed_origins="http://a.test, http://b.test,,")

        assert test_settings.allowed_origins_list == ["http://a.test", "http://b.test"]

    def test_invalid_bcrypt_rounds(self):
        with pytest.raises(ValidationError):
            Settings(bcrypt_rounds=2)

    def test_invalid_token_expiry(self):
        with pytest.raises(ValidationError):
            Settings(access_token_expire_minutes=0)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "from-env")
        monkeypatch.setenv("LOG_FORMAT", "json")

        test_settings = Settings()

        assert test_settings.secret_key == "from-env"
        assert test_settings.log_format == LogFormatEnum.json
        assert test_settings.uses_default_secret is False


class TestConfigValidator:
    """Test cases for the startup configuration checks."""

    def test_production_with_default_secret_rejected(self):
        cfg = Settings(
            _env_file=None,
            environment="production",
            secret_key=DEFAULT_SECRET_KEY,
            database_url="sqlite+aiosqlite://",
        )

        with pytest.raises(ValueError, match="SECRET_KEY"):
            ConfigValidator.validate_required_settings(cfg)

    def test_missing_database_url_rejected(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        cfg = Settings(_env_file=None, secret_key="s3cret")

        with pytest.raises(ValueError, match="DATABASE_URL"):
            ConfigValidator.validate_required_settings(cfg)

    def test_valid_production_settings(self):
        cfg = Settings(
            _env_file=None,
            environment="production",
            secret_key="s3cret",
            database_url="postgresql+asyncpg://db/taskify",
        )

        ConfigValidator.validate_required_settings(cfg)

    def test_default_secret_allowed_outside_production(self):
        cfg = Settings(_env_file=None, environment="development", database_url="sqlite+aiosqlite://")

        ConfigValidator.validate_required_settings(cfg)

    def test_config_summary_hides_secrets(self):
        summary = get_config_summary(Settings(_env_file=None, database_url="sqlite+aiosqlite://"))

        assert summary["app_name"] == "Taskify API"
        assert summary["database_configured"] is True
        assert "secret_key" not in summary
        assert "database_url" not in summary

    def test_config_summary_defaults_to_module_settings(self):
        assert get_config_summary()["environment"] == config.settings.environment.value

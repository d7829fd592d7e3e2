# taskify/core/config.py
"""Runtime configuration for the Taskify API.

Values come from the process environment, then ``.env``, then the defaults
below. Variable names are the field names upper-cased (``SECRET_KEY``,
``DATABASE_URL``, ``LOG_FORMAT``...).
"""
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production"

_ENVIRONMENT_ALIASES = {
    "dev": "development",
    "develop": "development",
    "test": "testing",
    "prod": "production",
}


class EnvironmentEnum(str, Enum):
    development = "development"
    testing = "testing"
    staging = "staging"
    production = "production"


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormatEnum(str, Enum):
    simple = "simple"
    json = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ----- application -----
    app_name: str = Field(default="Taskify API", description="Name shown in the API docs")
    environment: EnvironmentEnum = Field(default=EnvironmentEnum.development)
    debug: bool = Field(default=False, description="Echo SQL statements")
    version: str = Field(default="1.0.0")

    # ----- tokens and passwords -----
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, description="HMAC key for bearer tokens")
    algorithm: str = Field(default="HS256", description="Token signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7, description="Bearer token lifetime (7 days)"
    )
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")

    # ----- persistence -----
    database_url: str | None = Field(default=None, description="SQLAlchemy async URL")
    test_database_url: str | None = Field(default=None, description="URL used when TESTING=true")

    # ----- HTTP -----
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173",
        description="Comma-separated CORS origins",
    )
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000)

    # ----- logging -----
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO)
    log_format: LogFormatEnum = Field(default=LogFormatEnum.simple, description="simple or json")

    @property
    def allowed_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment == EnvironmentEnum.development

    @property
    def is_production(self) -> bool:
        return self.environment == EnvironmentEnum.production

    @property
    def is_testing(self) -> bool:
        return self.environment == EnvironmentEnum.testing

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == DEFAULT_SECRET_KEY

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        if isinstance(v, str) and v:
            v = v.lower()
            return _ENVIRONMENT_ALIASES.get(v, v)
        return v

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def normalize_case(cls, v, info):
        if isinstance(v, str) and v:
            return v.upper() if info.field_name == "log_level" else v.lower()
        return v

    @field_validator("access_token_expire_minutes")
    @classmethod
    def check_token_lifetime(cls, v):
        if v <= 0:
            raise ValueError("Token expiration must be positive")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def check_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        return v


settings = Settings()


class ConfigValidator:
    """Startup checks that a field validator cannot express on its own."""

    @staticmethod
    def validate_required_settings(cfg: Settings | None = None) -> None:
        cfg = cfg or settings
        problems = []
        if not cfg.database_url:
            problems.append("DATABASE_URL is required")
        if cfg.is_production and cfg.uses_default_secret:
            problems.append("SECRET_KEY must be set in production")
        if problems:
            raise ValueError(f"Configuration errors: {', '.join(problems)}")


def get_config_summary(cfg: Settings | None = None) -> dict:
    """Loggable view of the configuration; secrets and URLs are left out."""
    cfg = cfg or settings
    return {
        "app_name": cfg.app_name,
        "version": cfg.version,
        "environment": cfg.environment.value,
        "debug": cfg.debug,
        "database_configured": bool(cfg.database_url),
        "default_secret": cfg.uses_default_secret,
        "token_lifetime_minutes": cfg.access_token_expire_minutes,
    }


__all__ = [
    "settings",
    "Settings",
    "ConfigValidator",
    "get_config_summary",
    "DEFAULT_SECRET_KEY",
    "EnvironmentEnum",
    "LogLevelEnum",
    "LogFormatEnum",
]

# 📄 File: social_platform/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and hands them to the rest of the social platform in one organized place.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for database, paging, security and retention knobs.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.infrastructure.database.connection (engine parameters)
# - social_platform.shared.core.pagination (default and maximum page sizes)
# - Domain services (age limit, lockout policy, token lifetimes, retention)

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a default so the domain core can be imported and
    exercised without any environment at all. Values are read from the
    process environment first, then from an optional .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Social Platform", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json or text)")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: Optional[str] = Field(None, description="Async SQLAlchemy connection URL")
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="social_platform", description="Database name")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")

    # Connection Pool Settings
    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    BCRYPT_ROUNDS: int = Field(default=12, description="BCrypt hash rounds")
    MAX_FAILED_LOGIN_ATTEMPTS: int = Field(
        default=5,
        description="Failed logins before the account is locked"
    )
    LOCKOUT_MINUTES: int = Field(default=30, description="Account lockout duration")
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7, description="Refresh token lifetime")
    PASSWORD_RESET_TOKEN_EXPIRE_HOURS: int = Field(
        default=24,
        description="Password reset token lifetime"
    )
    SESSION_EXPIRE_HOURS: int = Field(default=24, description="User session lifetime")

    # =========================================================================
    # DOMAIN RULES
    # =========================================================================

    MIN_USER_AGE: int = Field(default=13, description="Minimum age implied by a birth date")
    DEFAULT_PAGE_SIZE: int = Field(default=20, description="Default page size for listings")
    DEFAULT_COMMENT_PAGE_SIZE: int = Field(
        default=50,
        description="Default page size for comment listings"
    )
    DEFAULT_LIKE_PAGE_SIZE: int = Field(
        default=50,
        description="Default page size for like listings"
    )
    MAX_PAGE_SIZE: int = Field(default=100, description="Upper bound on any page size")
    NOTIFICATION_ARCHIVE_RETENTION_DAYS: int = Field(
        default=90,
        description="Days archived notifications are kept before cleanup"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format value."""
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()

    @field_validator("DEFAULT_PAGE_SIZE", "DEFAULT_COMMENT_PAGE_SIZE", "DEFAULT_LIKE_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Page sizes must be positive."""
        if v <= 0:
            raise ValueError("Page sizes must be greater than zero")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Get the database URL, preferring explicit DATABASE_URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_sqlite(self) -> bool:
        """True when the configured database is SQLite (tests, local runs)."""
        return self.database_url.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()

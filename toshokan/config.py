"""Configuration management using pydantic-settings.

All environment variables are loaded and validated here. Every variable is
prefixed with ``TOKYOTOSHO_`` so generic host variables such as
``ENVIRONMENT`` or ``LOG_LEVEL`` are never picked up, and every field has a
default so the provider can be imported by a host without any setup.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provider settings loaded from ``TOKYOTOSHO_*`` variables or a `.env` file."""

    model_config = SettingsConfigDict(
        env_prefix="TOKYOTOSHO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Tokyo Toshokan site configuration
    base_url: str = Field(
        default="https://www.tokyotosho.info",
        description="Site origin used for search, homepage and details links",
    )

    variant: str = Field(
        default="full",
        description="Provider variant: 'anime' (basic) or 'full' (smart search + name tags)",
    )

    request_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    environment: str = Field(
        default="production",
        description="Environment name (development, production)",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store the origin without a trailing slash."""
        return v.rstrip("/")

    @field_validator("variant")
    @classmethod
    def validate_variant(cls, v: str) -> str:
        """Validate the provider variant name."""
        allowed = {"anime", "full"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"variant must be one of {allowed}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is development or production."""
        allowed = {"development", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v_lower

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


# Global settings instance
settings = Settings()

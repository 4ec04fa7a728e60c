"""Application configuration settings."""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CeligoSettings(BaseSettings):
    """Integration platform API configuration."""

    model_config = SettingsConfigDict(env_prefix="CELIGO_", env_file=".env", extra="ignore")

    api_base: str = Field(default="https://api.integrator.io/v1", description="Platform API base URL")
    token: str = Field(default="", description="Bearer token used for every request")
    timeout_seconds: float = Field(default=30.0, description="Total timeout for one request/response exchange")

    @field_validator("api_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = Field(default="INFO")
    format: str = Field(default="console")
    file_path: Optional[str] = Field(default=None)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v.lower() not in ("json", "console"):
            raise ValueError("Log format must be 'json' or 'console'")
        return v.lower()


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    name: str = Field(default="Celigo Connector", validation_alias="APP_NAME")
    version: str = Field(default="1.0.0", validation_alias="APP_VERSION")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    # Sub-settings
    celigo: CeligoSettings = Field(default_factory=CeligoSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get application settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None

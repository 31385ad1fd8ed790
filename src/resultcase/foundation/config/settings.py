"""Environment-based configuration using pydantic-settings.

Example:
    >>> from resultcase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # RESULTCASE_LOG_LEVEL=DEBUG
    # RESULTCASE_RENDER_MAX_PAYLOAD_LENGTH=200
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveInt, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force colors on/off, unset = auto-detect")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class RenderSettings(BaseSettings):
    """How payloads are rendered inside extraction-error messages."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_RENDER_",
        extra="ignore",
    )

    max_payload_length: PositiveInt | None = Field(
        default=None,
        description="Truncate rendered payloads beyond this many characters",
    )
    sort_keys: bool = Field(default=False, description="Sort mapping keys in rendered payloads")


class ResultcaseSettings(BaseSettings):
    """Root settings.

    Loads configuration from environment variables with RESULTCASE_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        RESULTCASE_DEBUG=true
        RESULTCASE_LOG_FORMAT=json
        RESULTCASE_RENDER_SORT_KEYS=true
    """

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> ResultcaseSettings:
    """Get the global settings instance (cached)."""
    return ResultcaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()

"""Configuration loaded from RESULTCASE_* environment variables."""

from .settings import (
    LoggingSettings,
    RenderSettings,
    ResultcaseSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ResultcaseSettings",
    "LoggingSettings",
    "RenderSettings",
    "get_settings",
    "clear_settings_cache",
]

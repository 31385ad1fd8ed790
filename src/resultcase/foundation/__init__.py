"""Foundation layer: error signals and configuration."""

from .config import ResultcaseSettings, clear_settings_cache, get_settings
from .errors import ErrorCode, InvariantError, PanicInfo, ResultcaseError, UnwrapError, render_payload

__all__ = [
    "ResultcaseSettings", "get_settings", "clear_settings_cache",
    "ErrorCode", "PanicInfo", "ResultcaseError", "UnwrapError", "InvariantError", "render_payload",
]

"""resultcase: a Result type with a Rust-style combinator API, plus its async counterpart.

Example:
    >>> from resultcase import Ok, Err
    >>> Ok(9).unwrap_or(2)
    9
    >>> Err("error").unwrap_or(2)
    2
"""

from .foundation import (
    ErrorCode,
    InvariantError,
    PanicInfo,
    ResultcaseError,
    ResultcaseSettings,
    UnwrapError,
    clear_settings_cache,
    get_settings,
)
from .monads import (
    AsyncResult,
    AsyncState,
    Err,
    ErrAsync,
    Ok,
    OkAsync,
    Result,
    Variant,
    collect_results,
    deep_equal,
    structural_hash,
    from_promise,
    from_promise_unknown,
    sequence,
    traverse,
    try_fn,
)
from .observability import configure_from_settings, configure_logging, get_logger

__version__ = "1.0.2"

__all__ = [
    # Result
    "Result", "Variant", "Ok", "Err",
    # AsyncResult
    "AsyncResult", "AsyncState", "OkAsync", "ErrAsync", "from_promise", "from_promise_unknown",
    # Helpers
    "deep_equal", "structural_hash", "try_fn", "sequence", "traverse", "collect_results",
    # Errors
    "ErrorCode", "PanicInfo", "ResultcaseError", "UnwrapError", "InvariantError",
    # Settings & logging
    "ResultcaseSettings", "get_settings", "clear_settings_cache",
    "configure_logging", "configure_from_settings", "get_logger",
]

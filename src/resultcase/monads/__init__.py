"""Result and AsyncResult: explicit, typed error propagation.

Example:
    >>> from resultcase.monads import Result, Ok, Err
    >>>
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     if b == 0:
    ...         return Err("division by zero")
    ...     return Ok(a / b)
    >>>
    >>> divide(10, 2).map(lambda x: x * 2).and_then(lambda x: Ok(x + 1)).unwrap()
    11.0
"""

from .async_result import AsyncResult, AsyncState, ErrAsync, OkAsync, from_promise, from_promise_unknown
from .equality import deep_equal, structural_hash
from .result import (
    Err,
    Ok,
    Result,
    Variant,
    collect_results,
    sequence,
    traverse,
    try_fn,
)

__all__ = [
    # Core types
    "Result",
    "Variant",
    "Ok",
    "Err",
    # Async
    "AsyncResult",
    "AsyncState",
    "OkAsync",
    "ErrAsync",
    "from_promise",
    "from_promise_unknown",
    # Helpers
    "deep_equal",
    "structural_hash",
    "try_fn",
    # Collection operations
    "sequence",
    "traverse",
    "collect_results",
]

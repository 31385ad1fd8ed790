"""Programming-error signals and payload rendering.

- ErrorCode: Codes for extraction misuse and invariant violations
- PanicInfo: Structured description of a failed extraction
- ResultcaseError/UnwrapError/InvariantError: Raised exceptions
- render_payload: JSON rendering of payloads for error messages
"""

from .errors import ErrorCode, InvariantError, PanicInfo, ResultcaseError, UnwrapError
from .render import render_payload

__all__ = [
    "ErrorCode", "PanicInfo",
    "ResultcaseError", "UnwrapError", "InvariantError",
    "render_payload",
]

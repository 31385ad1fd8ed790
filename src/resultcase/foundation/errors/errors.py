"""Programming-error signals raised by Result extraction and invariant checks.

Expected failures travel as Err payloads and are never raised. The classes
here cover the other kind: misuse of an extraction operation on the wrong
variant, and a Result whose variant tag has been corrupted.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Machine-readable codes for programming-error signals."""
    UNWRAP_ON_ERR = "UNWRAP_ON_ERR"
    UNWRAP_ERR_ON_OK = "UNWRAP_ERR_ON_OK"
    EXPECT_FAILED = "EXPECT_FAILED"
    EXPECT_ERR_FAILED = "EXPECT_ERR_FAILED"
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"


class PanicInfo(BaseModel):
    """Structured description of a failed extraction.

    Attributes:
        code: Which misuse occurred
        operation: Name of the extractor that was called (e.g. "unwrap")
        variant: Variant the Result actually held ("ok" or "err")
        payload: Rendered payload of the variant that was found
        context: Caller-supplied message for expect/expect_err
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "title": "Panic Info",
            "examples": [{
                "code": "UNWRAP_ON_ERR",
                "operation": "unwrap",
                "variant": "err",
                "payload": '"boom"',
                "context": None,
            }],
        },
    )

    code: ErrorCode
    operation: str = Field(min_length=1)
    variant: str
    payload: str
    context: str | None = None

    @computed_field
    @property
    def message(self) -> str:
        """Human-readable message, prefixed by the caller context when given."""
        if self.context is not None:
            return f"{self.context}: {self.payload}"
        found = "an Err" if self.variant == "err" else "an Ok"
        return f"Called Result.{self.operation}() on {found} value: {self.payload}"


class ResultcaseError(RuntimeError):
    """Base class for programming errors raised by this package."""

    code: ErrorCode = ErrorCode.INVARIANT_VIOLATION

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class UnwrapError(ResultcaseError):
    """Raised when unwrap/expect (or their Err twins) hit the wrong variant.

    Keeps the raw payload for callers that need more than the message.
    """

    def __init__(self, info: PanicInfo, payload: Any) -> None:
        super().__init__(info.message, code=info.code)
        self.info = info
        self.payload = payload


class InvariantError(ResultcaseError):
    """Raised when a Result is built or found without a valid variant tag."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVARIANT_VIOLATION)

"""Result type for explicit error propagation without exceptions.

A discriminated union of two variants:
- Ok: success, holding a value of type T
- Err: failure, holding an error of type E

Expected failures are Err values threaded through combinators. Only misuse
(extracting the wrong variant, or a corrupted variant tag) raises.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any, Callable, Generic, NoReturn, TypeVar, cast

from resultcase.foundation.config import get_settings
from resultcase.foundation.errors import ErrorCode, InvariantError, PanicInfo, UnwrapError, render_payload

from .equality import deep_equal, structural_hash

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from .async_result import AsyncResult

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type


class Variant(StrEnum):
    """The two cases of a Result."""
    OK = "ok"
    ERR = "err"


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Err("fail").map(lambda x: x * 2).unwrap_err()
        'fail'

        Railway-oriented chaining:
        >>> def validate_positive(x: int) -> Result[int, str]:
        ...     return Ok(x) if x > 0 else Err("must be positive")
        >>> Ok(5).and_then(validate_positive).map(lambda x: x * 2).unwrap()
        10

        Pattern matching:
        >>> match Ok(3):
        ...     case Result(Variant.OK, value):
        ...         print(value)
        3

    Notes:
        - Build with Ok() / Err(); the class constructor is private
        - Immutable: every combinator returns a new Result
    """

    __slots__ = ("_value", "_variant")
    __match_args__ = ("variant", "value")

    def __init__(self, value: T | E, variant: Variant) -> None:
        """Private constructor. Use Ok() or Err() instead."""
        if not isinstance(variant, Variant):
            raise InvariantError(f"Result must be constructed as exactly one of Ok or Err, got variant {variant!r}")
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_variant", variant)

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"Result is immutable, cannot set {name!r}")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"Result is immutable, cannot delete {name!r}")

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def value(self) -> T | E:
        """Payload of whichever variant this is."""
        return self._value

    # ─────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is Ok variant.

        Raises:
            InvariantError: If the variant tag is not Ok or Err
        """
        variant = self._variant
        if variant is Variant.OK:
            return True
        if variant is Variant.ERR:
            return False
        raise InvariantError(f"Result holds an invalid variant tag: {variant!r}")

    def is_err(self) -> bool:
        """Check if Result is Err variant."""
        return not self.is_ok()

    def is_ok_and(self, predicate: Callable[[T], bool]) -> bool:
        """True if Ok and the predicate holds for the value. Predicate is not called on Err."""
        return self.is_ok() and bool(predicate(cast(T, self._value)))

    def is_err_and(self, predicate: Callable[[E], bool]) -> bool:
        """True if Err and the predicate holds for the error. Predicate is not called on Ok."""
        return not self.is_ok() and bool(predicate(cast(E, self._value)))

    # ─────────────────────────────────────────────────────────────────
    # Transformation
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to the Ok value, leave an Err untouched.

        f is expected not to fail. Exceptions it raises propagate to the
        caller; use and_then for fallible steps.
        """
        if self.is_ok():
            return Ok(f(cast(T, self._value)))
        return Err(cast(E, self._value))

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to the Err value, leave an Ok untouched."""
        if self.is_ok():
            return Ok(cast(T, self._value))
        return Err(f(cast(E, self._value)))

    def map_or(self, alternative: U, f: Callable[[T], U]) -> U:
        """Return f(value) if Ok, otherwise the (eagerly evaluated) alternative."""
        return f(cast(T, self._value)) if self.is_ok() else alternative

    def map_or_else(self, on_err: Callable[[E], U], on_ok: Callable[[T], U]) -> U:
        """Return on_ok(value) if Ok, otherwise on_err(error). Only one branch runs."""
        if self.is_ok():
            return on_ok(cast(T, self._value))
        return on_err(cast(E, self._value))

    # ─────────────────────────────────────────────────────────────────
    # Chaining
    # ─────────────────────────────────────────────────────────────────

    def and_(self, other: Result[U, E]) -> Result[U, E]:
        """Return other if self is Ok, otherwise self's Err.

        other is not inspected when self is Err.
        """
        return other if self.is_ok() else Err(cast(E, self._value))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain an operation that can fail.

        If Ok, returns f(value) as-is. If Err, returns the error without
        calling f, so a pipeline of and_then calls halts at the first Err.

        Example:
            >>> def parse_int(s: str) -> Result[int, str]:
            ...     return Ok(int(s)) if s.isdigit() else Err(f"invalid int: {s}")
            >>> Ok("42").and_then(parse_int).unwrap()
            42
            >>> Ok("x").and_then(parse_int).and_then(parse_int).unwrap_err()
            'invalid int: x'
        """
        if self.is_ok():
            return f(cast(T, self._value))
        return Err(cast(E, self._value))

    def or_(self, other: Result[T, E]) -> Result[T, E]:
        """Return self if Ok, otherwise other."""
        return self if self.is_ok() else other

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from Err by calling f(error). An Ok passes through."""
        if self.is_ok():
            return Ok(cast(T, self._value))
        return f(cast(E, self._value))

    # ─────────────────────────────────────────────────────────────────
    # Extraction
    # ─────────────────────────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            UnwrapError: If Result is Err, with the rendered error in the message
        """
        if self.is_ok():
            return cast(T, self._value)
        self._panic(ErrorCode.UNWRAP_ON_ERR, "unwrap")

    def unwrap_err(self) -> E:
        """Extract Err value.

        Raises:
            UnwrapError: If Result is Ok, with the rendered value in the message
        """
        if not self.is_ok():
            return cast(E, self._value)
        self._panic(ErrorCode.UNWRAP_ERR_ON_OK, "unwrap_err")

    def expect(self, message: str) -> T:
        """Extract Ok value, failing with "<message>: <error>" on Err."""
        if self.is_ok():
            return cast(T, self._value)
        self._panic(ErrorCode.EXPECT_FAILED, "expect", message)

    def expect_err(self, message: str) -> E:
        """Extract Err value, failing with "<message>: <value>" on Ok."""
        if not self.is_ok():
            return cast(E, self._value)
        self._panic(ErrorCode.EXPECT_ERR_FAILED, "expect_err", message)

    def unwrap_or(self, alternative: T) -> T:
        """Extract Ok value or return the alternative."""
        return cast(T, self._value) if self.is_ok() else alternative

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Extract Ok value or compute one from the error."""
        return cast(T, self._value) if self.is_ok() else f(cast(E, self._value))

    def _panic(self, code: ErrorCode, operation: str, context: str | None = None) -> NoReturn:
        render = get_settings().render
        info = PanicInfo(
            code=code,
            operation=operation,
            variant=self._variant.value,
            payload=render_payload(self._value, max_length=render.max_payload_length, sort_keys=render.sort_keys),
            context=context,
        )
        raise UnwrapError(info, self._value)

    # ─────────────────────────────────────────────────────────────────
    # Containment
    # ─────────────────────────────────────────────────────────────────

    def contains(self, x: object) -> bool:
        """True if Ok and the value is structurally equal to x."""
        return self.is_ok() and deep_equal(self._value, x)

    def contains_err(self, x: object) -> bool:
        """True if Err and the error is structurally equal to x."""
        return not self.is_ok() and deep_equal(self._value, x)

    # ─────────────────────────────────────────────────────────────────
    # Inspection & Utilities
    # ─────────────────────────────────────────────────────────────────

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call f with the Ok value for side effects, return self."""
        if self.is_ok():
            f(cast(T, self._value))
        return self

    def inspect_err(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call f with the Err value for side effects, return self."""
        if not self.is_ok():
            f(cast(E, self._value))
        return self

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive case analysis over both variants.

        Example:
            >>> Ok(42).match(ok=lambda x: f"success: {x}", err=lambda e: f"failed: {e}")
            'success: 42'
        """
        if self.is_ok():
            return ok(cast(T, self._value))
        return err(cast(E, self._value))

    def flatten(self: Result[Result[T, E], E]) -> Result[T, E]:
        """Result[Result[T, E], E] -> Result[T, E]"""
        if self.is_ok():
            return cast(Result[T, E], self._value)
        return Err(cast(E, self._value))

    # ─────────────────────────────────────────────────────────────────
    # Async bridging
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def from_promise(awaitable: Awaitable[U]) -> AsyncResult[U, Any]:
        """Wrap an awaitable: Ok(value) when it completes, Err(exception) when it raises.

        The error side is untyped since the awaitable's failures are.
        """
        from .async_result import from_promise
        return from_promise(awaitable)

    @staticmethod
    def from_promise_unknown(awaitable: Awaitable[Any], ok_type: type[U] | None = None) -> AsyncResult[U, Any]:
        """Like from_promise, for untyped sources; pass ok_type or annotate the target to assert the Ok type."""
        from .async_result import from_promise_unknown
        return from_promise_unknown(awaitable, ok_type)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        """Truthy if Ok."""
        return self.is_ok()

    def __repr__(self) -> str:
        variant = "Ok" if self.is_ok() else "Err"
        return f"{variant}({self._value!r})"

    def __str__(self) -> str:
        return repr(self)

    def __eq__(self, other: object) -> bool:
        """Structural equality: same variant and deeply equal payloads."""
        if not isinstance(other, Result):
            return NotImplemented
        return self._variant is other._variant and deep_equal(self._value, other._value)

    def __hash__(self) -> int:
        return hash((self._variant, structural_hash(self._value)))

    def __reduce__(self) -> tuple[type[Result[T, E]], tuple[T | E, Variant]]:
        # __setattr__ is blocked, so copy/pickle rebuild through the constructor
        return (Result, (self._value, self._variant))


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> Result[T, Any]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, Variant.OK)


def Err(error: E) -> Result[Any, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, Variant.ERR)


def try_fn(f: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T, Exception]:
    """Call f, returning Ok(result) or Err(exception) if it raises.

    Example:
        >>> try_fn(int, "42")
        Ok(42)
        >>> try_fn(int, "nope").is_err()
        True
    """
    try:
        return Ok(f(*args, **kwargs))
    except Exception as e:
        return Err(e)


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def sequence(results: list[Result[T, E]]) -> Result[list[T], E]:
    """Convert list of Results to Result of list, failing fast on the first Err.

    Example:
        >>> sequence([Ok(1), Ok(2), Ok(3)]).unwrap()
        [1, 2, 3]
        >>> sequence([Ok(1), Err("fail"), Ok(3)]).unwrap_err()
        'fail'
    """
    values: list[T] = []
    for result in results:
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())
    return Ok(values)


def traverse(items: list[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map a Result-returning function over items and collect, stopping at the first Err.

    Unlike sequence([f(x) for x in items]), f is not called past the first Err.
    """
    values: list[U] = []
    for item in items:
        result = f(item)
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())
    return Ok(values)


def collect_results(results: list[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect all Results, accumulating every error if any fail.

    Example:
        >>> collect_results([Ok(1), Err("e1"), Ok(3), Err("e2")]).unwrap_err()
        ['e1', 'e2']
    """
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        if result.is_ok():
            values.append(result.unwrap())
        else:
            errors.append(result.unwrap_err())
    return Ok(values) if not errors else Err(errors)

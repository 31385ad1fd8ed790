"""AsyncResult: Result combinators across an await boundary.

AsyncResult owns one awaitable that produces a Result and exposes only map,
map_err and and_then on top of it. Awaiting it yields the plain Result.

Unlike the synchronous Result.map, callbacks registered here are fully
guarded: an exception raised by a callback, or by the awaitable it returns,
becomes the Err payload of the stage instead of escaping the chain.

Example:
    >>> async def fetch(n: int) -> int:
    ...     await asyncio.sleep(0.01)
    ...     return n
    >>>
    >>> async def main() -> Result[int, Any]:
    ...     return await (
    ...         Result.from_promise(fetch(3))
    ...         .map(lambda x: x * 2)
    ...         .map(lambda x: fetch(x + 3))
    ...     )
    >>> asyncio.run(main())
    Ok(9)
"""

from __future__ import annotations

import asyncio
import inspect
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from resultcase.observability import get_logger

from .result import Err, Ok, Result, Variant

if TYPE_CHECKING:
    from collections.abc import Awaitable, Generator

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

_log = get_logger("resultcase.async")


class AsyncState(StrEnum):
    """Settlement state of an AsyncResult. Leaves PENDING exactly once."""
    PENDING = "pending"
    SETTLED_OK = "settled_ok"
    SETTLED_ERR = "settled_err"


class AsyncResult(Generic[T, E]):
    """Deferred Result, settled by awaiting the awaitable it owns.

    The owned awaitable runs at most once. The first await schedules it as an
    asyncio future; every later or concurrent await shares that outcome.
    An exception from the awaitable settles the AsyncResult to Err(exception);
    producing anything other than a Result settles it to Err(TypeError).

    Each combinator returns a new AsyncResult whose stage starts only once the
    previous stage has settled. After an Err, later callbacks are skipped and
    nothing they would have produced is awaited.
    """

    __slots__ = ("_source", "_future", "_settled")

    def __init__(self, source: Awaitable[Result[T, E]] | Result[T, E]) -> None:
        self._future: asyncio.Future[Result[T, E]] | None = None
        if isinstance(source, Result):
            self._source: Awaitable[Result[T, E]] | None = None
            self._settled: Result[T, E] | None = source
        else:
            self._source = source
            self._settled = None

    @property
    def state(self) -> AsyncState:
        settled = self._settled
        if settled is None:
            return AsyncState.PENDING
        return AsyncState.SETTLED_OK if settled.is_ok() else AsyncState.SETTLED_ERR

    def __await__(self) -> Generator[Any, None, Result[T, E]]:
        return self._resolve().__await__()

    async def _resolve(self) -> Result[T, E]:
        if self._settled is not None:
            return self._settled
        if self._future is None:
            self._future = asyncio.ensure_future(self._settle())
        # Cancelling one awaiter must not cancel the shared settlement
        return await asyncio.shield(self._future)

    async def _settle(self) -> Result[T, E]:
        source = cast("Awaitable[Result[T, E]]", self._source)
        try:
            outcome: Any = await source
        except Exception as e:
            outcome = Err(e)
        if not isinstance(outcome, Result):
            outcome = Err(TypeError(f"AsyncResult source produced {type(outcome).__name__}, expected Result"))
        self._settled = outcome
        self._source = None
        _log.debug("async result settled", variant=outcome.variant.value)
        return outcome

    # ─────────────────────────────────────────────────────────────────
    # Combinators
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[T], U | Awaitable[U]]) -> AsyncResult[U, Any]:
        """Transform the Ok value once settled. f may return a value or an awaitable.

        On Err, f is never called and the error passes through untouched.
        Exceptions from f (or from the awaitable it returns) become the Err.
        """
        return AsyncResult(self._map_stage(f))

    async def _map_stage(self, f: Callable[[T], U | Awaitable[U]]) -> Result[U, Any]:
        result = await self
        if result.variant is Variant.ERR:
            _log.debug("async stage short-circuited", stage="map")
            return Err(result.unwrap_err())
        try:
            value = await _call(f, result.unwrap())
        except Exception as e:
            _log.debug("async callback failed", stage="map", error=repr(e))
            return Err(e)
        return Ok(value)

    def map_err(self, f: Callable[[E], F | Awaitable[F]]) -> AsyncResult[T, Any]:
        """Transform the Err value once settled. An Ok passes through, f not called.

        Exceptions from f (or from the awaitable it returns) become the new Err.
        """
        return AsyncResult(self._map_err_stage(f))

    async def _map_err_stage(self, f: Callable[[E], F | Awaitable[F]]) -> Result[T, Any]:
        result = await self
        if result.variant is Variant.OK:
            return Ok(result.unwrap())
        try:
            error = await _call(f, result.unwrap_err())
        except Exception as e:
            _log.debug("async callback failed", stage="map_err", error=repr(e))
            return Err(e)
        return Err(error)

    def and_then(
        self,
        f: Callable[[T], Result[U, F] | Awaitable[Result[U, F]]],
    ) -> AsyncResult[U, Any]:
        """Chain a fallible step once settled and adopt the Result it produces.

        f may return a Result, a coroutine/future producing one, or another
        AsyncResult. On Err, f is never called. Exceptions from f become Err,
        and a product that is not a Result becomes Err(TypeError).
        """
        return AsyncResult(self._and_then_stage(f))

    async def _and_then_stage(
        self,
        f: Callable[[T], Result[U, F] | Awaitable[Result[U, F]]],
    ) -> Result[U, Any]:
        result = await self
        if result.variant is Variant.ERR:
            _log.debug("async stage short-circuited", stage="and_then")
            return Err(result.unwrap_err())
        try:
            produced: Any = await _call(f, result.unwrap())
        except Exception as e:
            _log.debug("async callback failed", stage="and_then", error=repr(e))
            return Err(e)
        if not isinstance(produced, Result):
            return Err(TypeError(f"and_then callback produced {type(produced).__name__}, expected Result"))
        return produced

    def __repr__(self) -> str:
        if self._settled is not None:
            return f"AsyncResult({self._settled!r})"
        return f"AsyncResult(<{AsyncState.PENDING.value}>)"


async def _call(f: Callable[[Any], Any], arg: Any) -> Any:
    """Call f and, if it hands back an awaitable, wait for it."""
    value = f(arg)
    if inspect.isawaitable(value):
        value = await value
    return value


# ═════════════════════════════════════════════════════════════════════════════
# Constructors
# ═════════════════════════════════════════════════════════════════════════════


def OkAsync(value: T) -> AsyncResult[T, Any]:  # noqa: N802
    """Already-settled AsyncResult holding Ok(value)."""
    return AsyncResult(Ok(value))


def ErrAsync(error: E) -> AsyncResult[Any, E]:  # noqa: N802
    """Already-settled AsyncResult holding Err(error)."""
    return AsyncResult(Err(error))


async def _ok_after(awaitable: Awaitable[T]) -> Result[T, Any]:
    return Ok(await awaitable)


def from_promise(awaitable: Awaitable[T]) -> AsyncResult[T, Any]:
    """Wrap an awaitable: Ok(value) on completion, Err(exception) if it raises.

    The error channel is Any, since nothing constrains what the awaitable raises.
    """
    return AsyncResult(_ok_after(awaitable))


def from_promise_unknown(
    awaitable: Awaitable[Any],
    ok_type: type[T] | None = None,
) -> AsyncResult[T, Any]:
    """Like from_promise for untyped sources.

    The Ok type is asserted by the caller, either through the annotation of
    the target or by passing ok_type. Nothing is checked at runtime.

    Example:
        >>> raw: Awaitable[Any] = some_untyped_call()
        >>> ar = from_promise_unknown(raw, int)   # AsyncResult[int, Any]
    """
    return cast("AsyncResult[T, Any]", AsyncResult(_ok_after(awaitable)))

"""Tests for the synchronous Result type.

Validates:
- Variant discipline and immutability
- Functor/monad laws for map and and_then
- Chaining short-circuit behaviour
- Extraction failures and their messages
- Structural containment
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pytest
from hypothesis import given, strategies as st

from resultcase import (
    Err,
    ErrorCode,
    InvariantError,
    Ok,
    Result,
    UnwrapError,
    Variant,
    collect_results,
    sequence,
    traverse,
    try_fn,
)

ErrorMessage = dict[str, str]


# ═════════════════════════════════════════════════════════════════════════════
# Variant Discipline
# ═════════════════════════════════════════════════════════════════════════════


@given(st.one_of(st.integers(), st.text(), st.none()), st.booleans())
def test_variants_are_exclusive(payload: object, ok: bool) -> None:
    """Exactly one of is_ok/is_err holds, always complementary."""
    result: Result[object, object] = Ok(payload) if ok else Err(payload)
    assert result.is_ok() != result.is_err()
    assert result.is_ok() is ok


def test_construction_requires_a_variant() -> None:
    """The private constructor rejects anything but Ok or Err."""
    with pytest.raises(InvariantError) as exc_info:
        Result(1, "both")  # type: ignore[arg-type]
    assert exc_info.value.code == ErrorCode.INVARIANT_VIOLATION


def test_corrupted_tag_is_fatal() -> None:
    """A tag tampered with after construction is detected on query."""
    result: Result[int, str] = Ok(1)
    object.__setattr__(result, "_variant", None)
    with pytest.raises(InvariantError):
        result.is_ok()
    with pytest.raises(InvariantError):
        result.is_err()


def test_result_is_immutable() -> None:
    """Attributes cannot be reassigned or deleted."""
    result: Result[int, str] = Ok(1)
    with pytest.raises(AttributeError):
        result._value = 2  # type: ignore[misc]
    with pytest.raises(AttributeError):
        del result._variant
    assert result.unwrap() == 1


def test_pattern_matching() -> None:
    """Results destructure with match statements."""
    def describe(result: Result[int, str]) -> str:
        match result:
            case Result(Variant.OK, value):
                return f"ok {value}"
            case Result(Variant.ERR, error):
                return f"err {error}"
        return "unreachable"

    assert describe(Ok(3)) == "ok 3"
    assert describe(Err("x")) == "err x"


# ═════════════════════════════════════════════════════════════════════════════
# Queries
# ═════════════════════════════════════════════════════════════════════════════


def test_is_ok_and() -> None:
    assert Ok(2).is_ok_and(lambda x: x > 1)
    assert not Ok(0).is_ok_and(lambda x: x > 1)
    assert Ok([1]).is_ok_and(lambda v: v) is True
    assert Ok([]).is_ok_and(lambda v: v) is False


def test_is_ok_and_skips_predicate_on_err() -> None:
    calls: list[object] = []
    result: Result[int, str] = Err("hey")
    assert not result.is_ok_and(lambda x: calls.append(x) is None)
    assert calls == []


def test_is_err_and() -> None:
    assert Err("bad").is_err_and(lambda e: e == "bad")
    assert not Err("bad").is_err_and(lambda e: e == "good")
    assert not Ok(2).is_err_and(lambda e: True)
    assert Err("bad").is_err_and(lambda e: e) is True


# ═════════════════════════════════════════════════════════════════════════════
# Functor & Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """fmap id = id"""
    result: Result[int, str] = Ok(42)
    assert result.map(lambda x: x) == result

    err_result: Result[int, str] = Err("fail")
    assert err_result.map(lambda x: x) == err_result


def test_functor_composition() -> None:
    """fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    result: Result[int, str] = Ok(5)
    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


def test_monad_left_identity() -> None:
    """return a >>= f = f a"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert Ok(42).and_then(f) == f(42)


def test_monad_associativity() -> None:
    """(m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    m: Result[int, str] = Ok(5)
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x + 1)
    g: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert m.and_then(f).and_then(g) == m.and_then(lambda x: f(x).and_then(g))


@given(st.text())
def test_map_on_err_keeps_error(error: str) -> None:
    """Err(e).map(f) equals Err(e) but is a new instance."""
    original: Result[int, str] = Err(error)
    mapped = original.map(lambda x: x + 1)
    assert mapped == original
    assert mapped is not original


@given(st.integers())
def test_map_then_map_err_round_trip(x: int) -> None:
    """map_err never touches an Ok."""
    assert Ok(x).map(lambda v: v * 3).map_err(lambda e: f"never {e}") == Ok(x * 3)


# ═════════════════════════════════════════════════════════════════════════════
# Transformation
# ═════════════════════════════════════════════════════════════════════════════


def test_map_changes_type() -> None:
    assert Ok("1234").map(len) == Ok(4)
    assert Ok(12).map(str).unwrap() == "12"


def test_map_does_not_catch_callback_errors() -> None:
    """Synchronous map lets exceptions from f propagate."""
    def explode(_: int) -> int:
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        Ok(1).map(explode)


def test_map_err() -> None:
    assert Err("fail").map_err(lambda e: f"Error: {e}") == Err("Error: fail")
    assert Ok(42).map_err(lambda e: f"Error: {e}") == Ok(42)


def test_map_or() -> None:
    assert Ok("foo").map_or(42, len) == 3
    assert Err("bar").map_or(42, len) == 42


def test_map_or_else_is_lazy() -> None:
    calls: list[str] = []

    def on_err(e: str) -> int:
        calls.append("err")
        return 42

    def on_ok(v: str) -> int:
        calls.append("ok")
        return len(v)

    assert Ok("foo").map_or_else(on_err, on_ok) == 3
    assert calls == ["ok"]
    assert Err("bar").map_or_else(on_err, on_ok) == 42
    assert calls == ["ok", "err"]


# ═════════════════════════════════════════════════════════════════════════════
# Chaining
# ═════════════════════════════════════════════════════════════════════════════


def _validate_string_type(data: object) -> Result[str, ErrorMessage]:
    if isinstance(data, str):
        return Ok(data)
    return Err({
        "error": "InvalidDataType",
        "detail": f"The datatype provided was supposed to be 'str' but was given: '{type(data).__name__}'",
    })


def _capitalize(chars: str) -> Result[str, ErrorMessage]:
    return Ok(chars[:1].upper() + chars[1:])


def _validate_equals(chars: str, expected: str) -> Result[str, ErrorMessage]:
    if chars == expected:
        return Ok(chars)
    return Err({
        "error": "InvalidCharSequenceError",
        "detail": f"Was expecting the char sequence: '{expected}' but got: '{chars}'",
    })


def test_and_then_pipeline_succeeds() -> None:
    result = (
        _validate_string_type("banana")
        .and_then(_capitalize)
        .and_then(lambda s: _validate_equals(s, "Banana"))
    )
    assert result == Ok("Banana")


def test_and_then_pipeline_fails_at_last_step() -> None:
    result = (
        _validate_string_type("pineapple")
        .and_then(_capitalize)
        .and_then(lambda s: _validate_equals(s, "Banana"))
    )
    assert result.unwrap_err() == {
        "error": "InvalidCharSequenceError",
        "detail": "Was expecting the char sequence: 'Banana' but got: 'Pineapple'",
    }


def test_and_then_pipeline_halts_early() -> None:
    calls: list[str] = []

    def tracked(chars: str) -> Result[str, ErrorMessage]:
        calls.append(chars)
        return _capitalize(chars)

    result = _validate_string_type(12345).and_then(tracked).and_then(tracked)
    assert result.unwrap_err()["error"] == "InvalidDataType"
    assert "'int'" in result.unwrap_err()["detail"]
    assert calls == []


@given(st.text())
def test_and_then_skips_callback_on_err(error: str) -> None:
    calls = 0

    def step(x: int) -> Result[int, str]:
        nonlocal calls
        calls += 1
        return Ok(x)

    assert Err(error).and_then(step) == Err(error)
    assert calls == 0


def test_and_() -> None:
    assert Ok(2).and_(Err("late error")) == Err("late error")
    assert Err("early error").and_(Ok("foo")) == Err("early error")
    assert Err("not a 2").and_(Err("late error")) == Err("not a 2")
    assert Ok(2).and_(Ok("different result type")) == Ok("different result type")


def test_or_() -> None:
    ok: Result[int, str] = Ok(2)
    assert ok.or_(Err("late error")) is ok
    assert Err("early error").or_(Ok(2)) == Ok(2)
    assert Err("not a 2").or_(Err("late error")) == Err("late error")
    assert Ok(2).or_(Ok(100)) == Ok(2)


def test_or_else() -> None:
    def sq(x: int) -> Result[int, int]:
        return Ok(x * x)

    def err(x: int) -> Result[int, int]:
        return Err(x)

    assert Ok(2).or_else(sq).or_else(sq) == Ok(2)
    assert Ok(2).or_else(err).or_else(sq) == Ok(2)
    assert Err(3).or_else(sq).or_else(err) == Ok(9)
    assert Err(3).or_else(err).or_else(err) == Err(3)


# ═════════════════════════════════════════════════════════════════════════════
# Extraction
# ═════════════════════════════════════════════════════════════════════════════


def test_unwrap_on_err_renders_payload() -> None:
    with pytest.raises(UnwrapError, match='"boom"') as exc_info:
        Err("boom").unwrap()
    assert str(exc_info.value) == 'Called Result.unwrap() on an Err value: "boom"'
    assert exc_info.value.code == ErrorCode.UNWRAP_ON_ERR
    assert exc_info.value.payload == "boom"


def test_unwrap_on_err_renders_records_as_json() -> None:
    result: Result[int, ErrorMessage] = Err({"error": "SuperBadError", "detail": "Error was thrown here today!"})
    with pytest.raises(UnwrapError) as exc_info:
        result.unwrap()
    assert str(exc_info.value) == (
        'Called Result.unwrap() on an Err value: {"error":"SuperBadError","detail":"Error was thrown here today!"}'
    )


def test_unwrap_err_on_ok() -> None:
    with pytest.raises(UnwrapError, match="5") as exc_info:
        Ok(5).unwrap_err()
    assert str(exc_info.value) == "Called Result.unwrap_err() on an Ok value: 5"
    assert exc_info.value.info.variant == "ok"


def test_extractors_return_payload() -> None:
    assert Ok(2).unwrap() == 2
    assert Err("emergency failure").unwrap_err() == "emergency failure"
    assert Ok(123).expect("Testing expect") == 123
    assert Err("Some Error").expect_err("Testing expect_err") == "Some Error"


def test_expect_prefixes_message() -> None:
    with pytest.raises(UnwrapError) as exc_info:
        Err("emergency failure").expect("Testing expect")
    assert str(exc_info.value) == 'Testing expect: "emergency failure"'
    assert exc_info.value.code == ErrorCode.EXPECT_FAILED


def test_expect_err_prefixes_message() -> None:
    with pytest.raises(UnwrapError) as exc_info:
        Ok({"name": "bob", "age": 12}).expect_err("Testing expect_err")
    assert str(exc_info.value) == 'Testing expect_err: {"name":"bob","age":12}'
    assert exc_info.value.code == ErrorCode.EXPECT_ERR_FAILED


def test_unwrap_error_is_runtime_error() -> None:
    """Extraction misuse is a programming error, catchable as RuntimeError."""
    with pytest.raises(RuntimeError):
        Err("x").unwrap()


def test_unwrap_or() -> None:
    assert Ok(9).unwrap_or(2) == 9
    assert Err("error").unwrap_or(2) == 2


def test_unwrap_or_else() -> None:
    assert Ok(9).unwrap_or_else(len) == 9
    assert Err("foo").unwrap_or_else(len) == 3


def test_render_settings_apply(settings_env: pytest.MonkeyPatch) -> None:
    """RESULTCASE_RENDER_* settings shape extraction messages."""
    from resultcase.foundation.config import clear_settings_cache

    settings_env.setenv("RESULTCASE_RENDER_MAX_PAYLOAD_LENGTH", "8")
    settings_env.setenv("RESULTCASE_RENDER_SORT_KEYS", "true")
    clear_settings_cache()

    with pytest.raises(UnwrapError) as exc_info:
        Err({"b": 1, "a": 2}).unwrap()
    assert str(exc_info.value) == 'Called Result.unwrap() on an Err value: {"a":2,"...'


# ═════════════════════════════════════════════════════════════════════════════
# Containment & Equality
# ═════════════════════════════════════════════════════════════════════════════


def test_contains() -> None:
    assert Ok(2).contains(2)
    assert not Ok(3).contains(2)
    assert not Err("Some error message").contains(2)


def test_contains_is_structural() -> None:
    assert Ok({"data": 123}).contains({"data": 123})
    assert not Ok({"data": 123}).contains({"data": "123"})
    assert Ok([{"a": [1, 2]}]).contains([{"a": [1, 2]}])


def test_contains_err() -> None:
    assert not Ok(2).contains_err("Some error message")
    assert Err("Some error message").contains_err("Some error message")
    assert not Err("Some other error message").contains_err("Some error message")
    assert Err({"code": 1}).contains_err({"code": 1})


def test_contains_dataclass_payload() -> None:
    @dataclass
    class Point:
        x: int
        y: int

    assert Ok(Point(1, 2)).contains(Point(1, 2))
    assert not Ok(Point(1, 2)).contains(Point(1, 3))


def test_equality_is_variant_aware() -> None:
    assert Ok(1) != Err(1)
    assert Ok(1) != Ok(True)
    assert Ok([1]) == Ok([1])
    assert Ok(1) != 1


def test_hash_and_repr() -> None:
    assert hash(Ok(1)) == hash(Ok(1))
    assert {Ok(1), Ok(1), Err(1)} == {Ok(1), Err(1)}
    assert repr(Ok("x")) == "Ok('x')"
    assert str(Err(2)) == "Err(2)"


def test_hash_follows_structural_equality() -> None:
    assert hash(Err(ValueError("boom"))) == hash(Err(ValueError("boom")))
    assert len({Err(ValueError("boom")), Err(ValueError("boom"))}) == 1
    nan = float("nan")
    assert hash(Ok(nan)) == hash(Ok(float("nan")))
    assert len({Ok(nan), Ok(float("nan"))}) == 1
    assert len({Ok([1, 2]), Ok([1, 2]), Ok([1.0, 2.0])}) == 2


def test_truthiness() -> None:
    assert Ok(0)
    assert not Err("x")


# ═════════════════════════════════════════════════════════════════════════════
# Utilities
# ═════════════════════════════════════════════════════════════════════════════


def test_match() -> None:
    assert Ok(42).match(ok=lambda x: f"success: {x}", err=lambda e: f"failed: {e}") == "success: 42"
    assert Err("fail").match(ok=lambda x: f"success: {x}", err=lambda e: f"failed: {e}") == "failed: fail"


def test_inspect() -> None:
    seen: list[object] = []
    result: Result[int, str] = Ok(42)
    assert result.inspect(seen.append) is result
    assert Err("fail").inspect(seen.append) == Err("fail")
    assert seen == [42]


def test_inspect_err() -> None:
    seen: list[object] = []
    result: Result[int, str] = Err("fail")
    assert result.inspect_err(seen.append) is result
    Ok(1).inspect_err(seen.append)
    assert seen == ["fail"]


def test_flatten() -> None:
    assert Ok(Ok(5)).flatten() == Ok(5)
    assert Ok(Err("inner")).flatten() == Err("inner")
    assert Err("outer").flatten() == Err("outer")


def test_try_fn() -> None:
    assert try_fn(int, "42") == Ok(42)
    result = try_fn(int, "nope")
    assert result.is_err_and(lambda e: isinstance(e, ValueError))


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def test_sequence() -> None:
    assert sequence([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])
    assert sequence([Ok(1), Err("fail"), Err("later")]) == Err("fail")
    assert sequence([]) == Ok([])


def test_traverse_stops_at_first_err() -> None:
    calls: list[str] = []

    def parse_int(s: str) -> Result[int, str]:
        calls.append(s)
        return Ok(int(s)) if s.isdigit() else Err(f"invalid: {s}")

    assert traverse(["1", "2", "3"], parse_int) == Ok([1, 2, 3])
    calls.clear()
    assert traverse(["1", "bad", "3"], parse_int) == Err("invalid: bad")
    assert calls == ["1", "bad"]


def test_collect_results() -> None:
    assert collect_results([Ok(1), Err("e1"), Ok(3), Err("e2")]) == Err(["e1", "e2"])
    assert collect_results([Ok(1), Ok(2)]) == Ok([1, 2])

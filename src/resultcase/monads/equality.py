"""Strict structural equality used by Result.contains and Result.__eq__.

Plain ``==`` is too loose for payload comparison: ``1 == True == 1.0`` holds in
Python. deep_equal requires matching types at every level, including mapping
keys and set members, and recurses into containers, dataclasses, pydantic
models and the attributes of plain objects. Self-referencing payloads are
compared without unbounded recursion.

structural_hash is the matching hash: values that are deep_equal hash equal.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping, Set
from types import ModuleType
from typing import Any

from pydantic import BaseModel

_NAN_HASH = hash("nan")


def deep_equal(a: Any, b: Any) -> bool:
    """Recursive value equality with exact type matching.

    Example:
        >>> deep_equal({"data": 123}, {"data": 123})
        True
        >>> deep_equal({"data": 123}, {"data": "123"})
        False
        >>> deep_equal([1, 2], [1.0, 2.0])
        False
    """
    return _equal(a, b, set())


def _equal(a: Any, b: Any, memo: set[tuple[int, int]]) -> bool:
    if a is b:
        return True
    if type(a) is not type(b):
        return False

    if isinstance(a, float):
        return a == b or (math.isnan(a) and math.isnan(b))
    if isinstance(a, (str, bytes, int)):
        return a == b

    # A pair seen again is a cycle; it is equal unless proven otherwise elsewhere
    pair = (id(a), id(b))
    if pair in memo:
        return True
    memo.add(pair)

    if isinstance(a, Mapping):
        if len(a) != len(b):
            return False
        counterparts = _counterparts(b)
        for key in a:
            if key not in counterparts or not _equal(key, counterparts[key], memo):
                return False
            if not _equal(a[key], b[counterparts[key]], memo):
                return False
        return True
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_equal(x, y, memo) for x, y in zip(a, b))
    if isinstance(a, Set):
        if len(a) != len(b):
            return False
        counterparts = _counterparts(b)
        return all(m in counterparts and _equal(m, counterparts[m], memo) for m in a)
    if isinstance(a, BaseException):
        return _equal(a.args, b.args, memo)
    if isinstance(a, BaseModel):
        return _equal(a.model_dump(), b.model_dump(), memo)
    if dataclasses.is_dataclass(a):
        return all(
            _equal(getattr(a, f.name), getattr(b, f.name), memo)
            for f in dataclasses.fields(a)
            if f.compare
        )
    if type(a).__eq__ is object.__eq__ and not callable(a) and not isinstance(a, ModuleType):
        return _equal(_attributes(a), _attributes(b), memo)

    # Result defines __eq__ in terms of deep_equal on its payload
    return bool(a == b)


def _counterparts(items: Any) -> dict[Any, Any]:
    """Map each hashable element to the element object itself, for typed lookups."""
    return {item: item for item in items}


def _attributes(obj: Any) -> dict[str, Any]:
    """Instance attributes of a plain object: __dict__ entries plus filled slots."""
    attrs: dict[str, Any] = dict(getattr(obj, "__dict__", {}))
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if name in ("__dict__", "__weakref__") or name in attrs:
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{cls.__name__.lstrip('_')}{name}"
            try:
                attrs[name] = getattr(obj, name)
            except AttributeError:
                continue
    return attrs


def structural_hash(value: Any) -> int:
    """Hash consistent with deep_equal.

    Scalars hash by value. Everything else hashes by type and size only, which
    keeps equal values on equal hashes even when their own hash is identity-based
    (exceptions, plain objects) or missing (lists, dicts).

    Example:
        >>> structural_hash(ValueError("x")) == structural_hash(ValueError("x"))
        True
    """
    kind = type(value)
    if kind is float and math.isnan(value):
        return hash((kind, _NAN_HASH))
    if isinstance(value, (str, bytes, int, float)):
        return hash((kind, value))
    try:
        size = len(value)
    except TypeError:
        size = -1
    return hash((kind, size))

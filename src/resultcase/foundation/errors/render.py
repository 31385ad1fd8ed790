"""Payload rendering for extraction-error messages.

Payloads are rendered as compact JSON so messages read the same regardless of
the payload's Python type: ``"boom"`` for a string, ``5`` for an int,
``{"error":"X","detail":"Y"}`` for a dict. Values orjson cannot encode fall
back to ``repr``.
"""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel

_TRUNCATION_MARK = "..."


def _default(obj: Any) -> Any:
    """orjson hook for types it does not serialize natively."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, BaseException):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def render_payload(value: Any, *, max_length: int | None = None, sort_keys: bool = False) -> str:
    """Render a Result payload for display inside an error message.

    Args:
        value: Payload to render
        max_length: Truncate rendered text beyond this many characters
        sort_keys: Emit mapping keys in sorted order

    Example:
        >>> render_payload({"error": "Bad", "detail": "oops"})
        '{"error":"Bad","detail":"oops"}'
        >>> render_payload("boom")
        '"boom"'
    """
    option = orjson.OPT_NON_STR_KEYS
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS
    try:
        text = orjson.dumps(value, default=_default, option=option).decode()
    except orjson.JSONEncodeError:
        text = repr(value)
    if max_length is not None and len(text) > max_length:
        return text[:max_length] + _TRUNCATION_MARK
    return text

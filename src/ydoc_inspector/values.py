"""
JSON-like values.

Everything that leaves the decoder and enters the tree model is one of
``None``, ``bool``, ``int``, ``float``, ``str``, ``list`` or ``dict`` with
string keys.  :func:`to_json_value` folds whatever the CRDT library hands
back into that closed set.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Literal, TypeAlias

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]

# Above this an integral double may not be the integer it prints as.
MAX_SAFE_INTEGER = 2**53 - 1

ValueType = Literal["null", "boolean", "number", "string", "array", "object"]


def to_json_value(obj: Any) -> JSONValue:
    """
    Normalize *obj* into a canonical JSON-like value.

    * integral floats up to ``MAX_SAFE_INTEGER`` become ``int`` (Yjs stores
      every number as a double); larger ones stay ``float``
    * ``NaN`` and infinities become ``None``
    * mapping keys are stringified, insertion order is kept
    * binary content becomes a list of byte values
    * objects with ``to_py()`` (nested CRDT types) are materialized first
    * anything else falls back to ``str(obj)``
    """
    return _normalize(obj, set())


def _normalize(obj: Any, active: set[int]) -> JSONValue:
    if obj is None or isinstance(obj, (bool, str)):
        return obj
    if isinstance(obj, int):
        return int(obj)
    if isinstance(obj, float):
        if not math.isfinite(obj):
            return None
        if obj.is_integer() and abs(obj) <= MAX_SAFE_INTEGER:
            return int(obj)
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return list(bytes(obj))

    if hasattr(obj, "to_py") and not isinstance(obj, (Mapping, list, tuple)):
        return _normalize(obj.to_py(), active)

    # Containers already being walked would make the output cyclic.
    if id(obj) in active:
        return None

    if isinstance(obj, Mapping):
        active.add(id(obj))
        try:
            return {str(k): _normalize(v, active) for k, v in obj.items()}
        finally:
            active.discard(id(obj))

    if isinstance(obj, (list, tuple)):
        active.add(id(obj))
        try:
            return [_normalize(item, active) for item in obj]
        finally:
            active.discard(id(obj))

    return str(obj)


def is_container(value: JSONValue) -> bool:
    """True for arrays and objects."""
    return isinstance(value, (list, dict))


def container_size(value: JSONValue) -> int:
    """Number of entries in an array or object, 0 for scalars."""
    if isinstance(value, (list, dict)):
        return len(value)
    return 0


def value_type(value: JSONValue) -> ValueType:
    """Classify a JSON-like value."""
    if value is None:
        return "null"
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON-like value: {type(value).__name__}")


def format_literal(value: JSONScalar) -> str:
    """
    Render a scalar as its JSON literal.

    >>> format_literal("hi")
    '"hi"'
    >>> format_literal(1.5)
    '1.5'
    >>> format_literal(1e300)
    '1e+300'
    >>> format_literal(None)
    'null'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return "null"
        return _format_number(value)
    return json.dumps(value, ensure_ascii=False)


def format_key(key: str) -> str:
    """Quote an object key the way it appears in JSON text."""
    return json.dumps(key, ensure_ascii=False)


def _format_number(value: float) -> str:
    """Shortest round-trip digits, laid out as JavaScript prints a number."""
    if value == 0:
        return "0"
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(repr(value)).normalize(), "f")
    mantissa, _, exponent = repr(value).partition("e")
    return f"{mantissa}e{int(exponent):+d}"

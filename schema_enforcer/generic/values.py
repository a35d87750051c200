"""JSON Value Helpers

Utilities shared by the enforcers for working with JSON-compatible Python
data (None, bool, int, float, str, list, dict):

- Deep equivalence that keeps booleans distinct from numbers
- Explicit cloning bounded to JSON-compatible data
- Document-style number casting
- JSON type names for arbitrary values
- Label stringification
"""
from __future__ import annotations

import json
import math
import re
from typing import Any

from pydantic import JsonValue, TypeAdapter, ValidationError

from schema_enforcer.errors import UnclonableValueError, unclonable_value

_JSON_VALUE_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def is_equivalent_to(a: Any, b: Any) -> bool:
    """Deep equality over dicts and lists.

    Dicts must share the same key set, lists the same length, and all nested
    members must be equivalent. Booleans never equal numbers.
    """
    if a is b:
        return True
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(is_equivalent_to(a[key], b[key]) for key in a)
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(is_equivalent_to(x, y) for x, y in zip(a, b))
    if isinstance(a, (dict, list)) or isinstance(b, (dict, list)):
        return False
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def ensure_json_compatible(value: Any, origin: str = "") -> Any:
    """Check that value is JSON-compatible data and return it unchanged.

    Raises:
        UnclonableValueError: if value (or anything nested in it) is not
            JSON-compatible, including self-referencing containers.
    """
    try:
        _JSON_VALUE_ADAPTER.validate_python(value)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        raise UnclonableValueError(
            unclonable_value(value, first.get("msg", ""), origin=origin, cause=e)
        ) from e
    return value


def clone_json_value(value: Any) -> Any:
    """Deep copy JSON-compatible data.

    Containers are rebuilt recursively; scalars are immutable and returned
    as-is.

    Raises:
        UnclonableValueError: on data outside the JSON value space.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, list):
        return [clone_json_value(item) for item in value]
    if isinstance(value, dict):
        return {key: clone_json_value(item) for key, item in value.items()}
    raise UnclonableValueError(unclonable_value(value, origin="clone_json_value"))


def to_number(value: Any) -> int | float:
    """Cast a value to a number the way document formats do.

    None and unparsable data become NaN, booleans become 0/1, blank strings
    become 0. Decimal integer strings stay integers. Only plain ASCII decimal
    notation is read: "inf", "1_000" and non-ASCII digits are unparsable, as
    is a fractional or exponent form too large for a float.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _INTEGER_PATTERN.fullmatch(text):
            try:
                return int(text)
            except ValueError:  # past the interpreter's digit limit
                return math.nan
        if _DECIMAL_PATTERN.fullmatch(text):
            num = float(text)
            return num if math.isfinite(num) else math.nan
        return math.nan
    if isinstance(value, list):
        if not value:
            return 0
        if len(value) == 1:
            return to_number(value[0])
    return math.nan


def get_expanded_type_of(value: Any) -> str:
    """Return the JSON type name of a value.

    Falls back to the Python type name for data outside the JSON value space.
    """
    if value is None:
        return "null"
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
    return type(value).__name__


def stringify_value(value: Any) -> str:
    """Render a value as display text: strings as-is, everything else as compact JSON."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)

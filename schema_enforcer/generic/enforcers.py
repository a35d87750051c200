"""Primitive Type Enforcers

Validation and coercion for each JSON value category. Coercion is lossy
by nature but never raises: malformed input degrades to a fallback value
(a default, an empty container, or a wrapped value).

Each type enforcer accepts:
- default_value: returned (or deep copied) when there is nothing to coerce
- value_property: a key used to unwrap a payload before coercion,
  e.g. {"_value": 1} coerces as 1
"""
from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, TypeVar

from schema_enforcer.config import get_settings

from .constraints import CoercingConstraint
from .values import clone_json_value, ensure_json_compatible, is_equivalent_to, to_number

T = TypeVar("T")

_INDEX_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class ValueTypeEnforcer(CoercingConstraint[Any, bool, T]):
    """Base class for enforcers of a single value type."""
    default_value: T | None = None
    value_property: str | None = None

    def unwrap(self, value: Any) -> Any:
        """Extract the payload stored under value_property, if there is one."""
        if (
            self.value_property is not None
            and isinstance(value, dict)
            and self.value_property in value
        ):
            return value[self.value_property]
        return value


@dataclass(frozen=True, slots=True)
class ArrayEnforcer(ValueTypeEnforcer[list]):
    """Checks for and converts to a list."""

    def __post_init__(self):
        if self.default_value is not None:
            ensure_json_compatible(self.default_value, origin=type(self).__name__)

    def validate(self, value: Any) -> bool:
        return isinstance(value, list)

    def coerce(self, value: Any) -> list:
        unwrapped = self.unwrap(value)
        if isinstance(unwrapped, str):
            try:
                parsed = json.loads(unwrapped)
            except ValueError:
                pass
            else:
                if isinstance(parsed, list):
                    return parsed
        elif isinstance(unwrapped, list):
            return unwrapped
        elif isinstance(unwrapped, dict):
            return self._from_indexed_keys(unwrapped)
        if unwrapped is None and self.default_value is not None:
            return clone_json_value(self.default_value)
        return [unwrapped]

    @staticmethod
    def _from_indexed_keys(source: dict) -> list:
        """Rebuild a list from index keys. Indices at or past MAX_ARRAY_INDEX are dropped."""
        limit = get_settings().MAX_ARRAY_INDEX
        indexed: dict[int, Any] = {}
        for key, item in source.items():
            if isinstance(key, int) and not isinstance(key, bool):
                index = key if key >= 0 else None
            elif isinstance(key, str) and _INDEX_PATTERN.fullmatch(key):
                index = int(key)
            else:
                index = None
            if index is not None and index < limit:
                indexed[index] = item
        if not indexed:
            return []
        values: list = [None] * (max(indexed) + 1)
        for index, item in indexed.items():
            values[index] = item
        return values


@dataclass(frozen=True, slots=True)
class BooleanEnforcer(ValueTypeEnforcer[bool]):
    """Checks for and converts to a boolean."""

    def validate(self, value: Any) -> bool:
        return isinstance(value, bool)

    def coerce(self, value: Any) -> bool:
        unwrapped = self.unwrap(value)
        if unwrapped is None and self.default_value is not None:
            return self.default_value
        return bool(unwrapped)


@dataclass(frozen=True, slots=True)
class NumberEnforcer(ValueTypeEnforcer[float]):
    """Checks for and converts to a number. Booleans are not numbers."""

    def validate(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def coerce(self, value: Any) -> int | float:
        num = to_number(self.unwrap(value))
        if isinstance(num, float) and math.isnan(num):
            return self.default_value if self.default_value is not None else 0
        return num


@dataclass(frozen=True, slots=True)
class SteppedNumberEnforcer(NumberEnforcer):
    """Applies multiplier constraints to a NumberEnforcer.

    A step of 0 disables the multiplier check. Coercion rounds half up to the
    nearest multiple of step. Integers are checked and rounded with exact
    rational arithmetic, so ints of any size keep every digit.
    """
    step: float = 1

    def validate(self, value: Any) -> bool:
        if not NumberEnforcer.validate(self, value):
            return False
        if self.step == 0:
            return True
        if isinstance(value, int):
            return Fraction(value) % Fraction(self.step) == 0
        return value % self.step == 0

    def coerce(self, value: Any) -> int | float:
        num = NumberEnforcer.coerce(self, value)
        if self.step == 0:
            return num
        if isinstance(num, int):
            step = Fraction(self.step)
            rounded = math.floor(num / step + Fraction(1, 2)) * step
            return int(rounded) if rounded.denominator == 1 else float(rounded)
        if not math.isfinite(num):
            return num
        return math.floor(num / self.step + 0.5) * self.step


@dataclass(frozen=True, slots=True)
class ObjectEnforcer(ValueTypeEnforcer[dict]):
    """Checks for and converts to a dict."""

    def __post_init__(self):
        if self.default_value is not None:
            ensure_json_compatible(self.default_value, origin=type(self).__name__)

    def validate(self, value: Any) -> bool:
        return isinstance(value, dict)

    def coerce(self, value: Any) -> dict:
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except ValueError:
                pass
            else:
                if self.validate(parsed):
                    return parsed
        elif isinstance(value, list):
            return {str(i): item for i, item in enumerate(value) if item is not None}
        elif isinstance(value, dict):
            return value
        if self.default_value is not None:
            return clone_json_value(self.default_value)
        if self.value_property is not None:
            return {self.value_property: value}
        return {}


@dataclass(frozen=True, slots=True)
class StringEnforcer(ValueTypeEnforcer[str]):
    """Checks for and converts to a string."""

    def validate(self, value: Any) -> bool:
        return isinstance(value, str)

    def coerce(self, value: Any) -> str:
        unwrapped = self.unwrap(value)
        if isinstance(unwrapped, str):
            return unwrapped
        if unwrapped is None and self.default_value is not None:
            return self.default_value
        try:
            return json.dumps(unwrapped, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError):
            # cyclic or non-serializable data
            return str(unwrapped)


@dataclass(frozen=True, slots=True)
class StrictEqualityEnforcer(CoercingConstraint[Any, bool, Any]):
    """Accepts only the configured value, or data deeply equivalent to it."""
    value: Any

    def validate(self, value: Any) -> bool:
        return value is self.value or is_equivalent_to(value, self.value)

    def coerce(self, value: Any) -> Any:
        return self.value


class AnyValueEnforcer(CoercingConstraint[Any, bool, Any]):
    """Accepts any value and applies no changes on coercion."""

    def validate(self, value: Any) -> bool:
        return True

    def coerce(self, value: Any) -> Any:
        return value

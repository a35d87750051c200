"""Constraint Interfaces

Every rule and enforcer in the library is a ValueConstraint: a validate
operation plus an optional coerce operation. Factories (ConversionFactory)
turn schemas into constraints, and rules (ValueConstraintRule) produce
constraints only for schemas meeting their criteria.

Coercion functions compose sequentially through merge_coerce_steps.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Sequence, TypeVar

S = TypeVar("S")
V = TypeVar("V")
T = TypeVar("T")
C = TypeVar("C")


def echo_value(value: T) -> T:
    """Return the provided value unchanged."""
    return value


def merge_coerce_steps(steps: Sequence[Callable[[Any], Any]]) -> Callable[[Any], Any]:
    """Combine coercion functions, passing the result of each into the next."""
    steps = tuple(steps)

    def coerce(value: Any) -> Any:
        converted = value
        for step in steps:
            converted = step(converted)
        return converted

    return coerce


class ValueConstraint(ABC, Generic[S, V, T]):
    """Validation with optional coercion.

    coerce is either None or a callable returning a version of the source
    value that satisfies this constraint. Applying it to an already-valid
    value must not invalidate that value.
    """
    coerce: Callable[[S], T] | None = None

    @abstractmethod
    def validate(self, source: S) -> V:
        """Check if the source value follows this constraint."""


class CoercingConstraint(ValueConstraint[S, V, T]):
    """ValueConstraint that always supports coercion."""

    @abstractmethod
    def coerce(self, source: S) -> T:
        """Return a version of the source value that follows this constraint."""


class SchemaEnforcer(ValueConstraint[Any, V, T]):
    """Constraint derived from, and tagged with, a schema."""
    schema: Any = None


class ConversionFactory(ABC, Generic[S, T, C]):
    """Converts a source (typically a schema) into another form."""

    @abstractmethod
    def process(self, source: S, context: C | None = None) -> T:
        """Convert the source, using the optional context."""


class ValueConstraintRule(ABC, Generic[S, C]):
    """Generates constraints for schemas that meet certain criteria."""

    @abstractmethod
    def get_enforcer_for(self, schema: S, context: C | None = None) -> ValueConstraint | None:
        """Return a constraint if the schema meets the rule's criteria."""

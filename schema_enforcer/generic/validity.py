"""Validity Interpretation

A validation result can be a plain boolean or a structured error log.
ValidationParsers abstract over the result type: whether it counts as
valid, what the canonical valid result is, and how valid it is as a number
used to rank alternatives.

merge_validate_steps composes validation functions with short-circuit
semantics: the first step reporting an invalid result decides the outcome.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Sequence, TypeVar

V = TypeVar("V")
ErrorType = TypeVar("ErrorType")


@dataclass(slots=True)
class ErrorLog(Generic[ErrorType]):
    """Wrapper for a list of encountered errors. No errors means valid."""
    errors: list[ErrorType] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "valid": self.is_valid,
            "errors": [e.to_dict() if hasattr(e, "to_dict") else e for e in self.errors],
        }


class ValidationParser(ABC, Generic[V]):
    """Reads validation results of a particular shape."""

    @abstractmethod
    def is_valid(self, validation: V) -> bool:
        """Check if the validation result reports success."""

    @abstractmethod
    def get_valid(self) -> V:
        """Produce a validation result that reports success."""

    @abstractmethod
    def rate_validity(self, validation: V) -> float:
        """Return the result's validity as a number. Higher is more valid."""


class BooleanValidationParser(ValidationParser[bool]):
    """Treats booleans as validation results."""

    def is_valid(self, validation: bool) -> bool:
        return validation

    def get_valid(self) -> bool:
        return True

    def rate_validity(self, validation: bool) -> float:
        return 1 if validation else 0


class ErrorLogValidationParser(ValidationParser[ErrorLog]):
    """Treats error logs as validation results; each error lowers the rating."""

    def is_valid(self, validation: ErrorLog) -> bool:
        return len(validation.errors) < 1

    def get_valid(self) -> ErrorLog:
        return ErrorLog()

    def rate_validity(self, validation: ErrorLog) -> float:
        return 1 - len(validation.errors)


def merge_validate_steps(
    steps: Sequence[Callable[[Any], V]],
    validation_parser: ValidationParser[V],
) -> Callable[[Any], V]:
    """Combine validation functions, returning the first invalid result.

    Steps run in order. If every step passes, the parser's canonical valid
    result is returned.
    """
    steps = tuple(steps)

    def validate(value: Any) -> V:
        for step in steps:
            validation = step(value)
            if not validation_parser.is_valid(validation):
                return validation
        return validation_parser.get_valid()

    return validate

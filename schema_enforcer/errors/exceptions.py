"""Build-time exceptions.

Raised only while constructing enforcers. Each exception carries the
AppError describing it so callers using try_process receive the same code
and metadata.
"""
from __future__ import annotations

from dataclasses import dataclass

from .types import AppError


@dataclass(eq=False)
class SchemaProcessingError(Exception):
    """An enforcer could not be built for a schema."""
    app_error: AppError

    def __post_init__(self):
        super().__init__(self.app_error.message)

    def __str__(self) -> str:
        return str(self.app_error)

    @property
    def code(self):
        return self.app_error.code

    def to_dict(self) -> dict:
        return self.app_error.to_dict()


class SchemaDepthError(SchemaProcessingError):
    """Schema nesting exceeded the configured maximum depth."""


class CyclicSchemaError(SchemaProcessingError):
    """Schema contains itself."""


class UnclonableValueError(SchemaProcessingError):
    """A configured default or constant is not JSON-compatible data."""

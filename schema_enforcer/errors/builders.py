"""Schema Error Builders

Ergonomic constructors for the AppErrors raised while building enforcers.
Each builder creates an AppError with the appropriate code and metadata.
"""
from typing import Any

from .types import AppError, ErrorCode


def schema_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_SCHEMA_GENERIC,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> AppError:
    """Create a schema processing error."""
    return AppError(
        code=code,
        message=message,
        origin=origin,
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    )


def schema_too_deep(depth: int, max_depth: int, origin: str = "") -> AppError:
    return schema_error(
        f"Schema nesting depth {depth} exceeds limit of {max_depth}",
        code=ErrorCode.E2030_SCHEMA_TOO_DEEP,
        origin=origin,
        depth=depth,
        max_depth=max_depth,
    )


def cyclic_schema(depth: int, origin: str = "") -> AppError:
    return schema_error(
        f"Schema refers back to itself at depth {depth}",
        code=ErrorCode.E2031_CYCLIC_SCHEMA,
        origin=origin,
        depth=depth,
    )


def unclonable_value(
    value: Any,
    reason: str = "",
    origin: str = "",
    cause: Exception | None = None,
) -> AppError:
    msg = f"Value of type {type(value).__name__} is not JSON-compatible"
    if reason:
        msg += f": {reason}"
    return schema_error(
        msg,
        code=ErrorCode.E2032_UNCLONABLE_VALUE,
        origin=origin,
        cause=cause,
        value_type=type(value).__name__,
    )

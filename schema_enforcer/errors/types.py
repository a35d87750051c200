"""Build Error Types

Validation never fails loudly: a value that does not fit its schema gets an
ErrorLog. What can fail is turning a schema into an enforcer, and those
failures are described here as AppError values, optionally carried in an
Ok/Err Result for callers that prefer values over exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union, final

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound="AppError")

_CATEGORY_BY_THOUSAND = {2: "schema", 9: "internal"}


class ErrorCode(Enum):
    """Numbered failure kinds.

    E2xxx: the schema (or a value inside it) cannot be compiled
    E9xxx: anything else
    """
    E2000_SCHEMA_GENERIC = 2000
    E2001_INVALID_SCHEMA = 2001
    E2030_SCHEMA_TOO_DEEP = 2030
    E2031_CYCLIC_SCHEMA = 2031
    E2032_UNCLONABLE_VALUE = 2032

    E9000_INTERNAL_GENERIC = 9000
    E9001_UNEXPECTED_ERROR = 9001

    @property
    def category(self) -> str:
        return _CATEGORY_BY_THOUSAND.get(self.value // 1000, "internal")


@dataclass(frozen=True, slots=True)
class AppError:
    """Why an enforcer could not be built.

    origin names the component that gave up (usually a factory or rule
    class); metadata holds the structured details, e.g. depth limits or the
    offending value's type; cause keeps the underlying exception, if any.
    """
    code: ErrorCode
    message: str
    origin: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def with_metadata(self, **details: Any) -> AppError:
        return replace(self, metadata={**self.metadata, **details})

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.name,
            "category": self.code.category,
            "message": self.message,
            "origin": self.origin,
            "metadata": dict(self.metadata),
        }

    def __str__(self) -> str:
        where = f" in {self.origin}" if self.origin else ""
        return f"{self.code.name}{where}: {self.message}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successfully built value."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def and_then(self, f: Callable[[T], Result[U, AppError]]) -> Result[U, AppError]:
        return f(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed build, holding the AppError that explains it."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"unwrap() called on {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        return self


Result = Union[Ok[T], Err[E]]


def from_exception(
    exc: Exception,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    message: str | None = None,
    origin: str = "",
    **metadata: Any,
) -> Err[AppError]:
    """Describe an exception as an Err.

    An exception that already carries an AppError (SchemaProcessingError and
    its subclasses) is reported with that error unchanged.
    """
    app_error = getattr(exc, "app_error", None)
    if isinstance(app_error, AppError):
        return Err(app_error)
    return Err(AppError(
        code=code,
        message=message or str(exc) or type(exc).__name__,
        origin=origin,
        metadata=metadata,
        cause=exc,
    ))


def try_result(
    f: Callable[[], T],
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    origin: str = "",
) -> Result[T, AppError]:
    """Call f, returning Ok(result) or the raised exception as an Err."""
    try:
        return Ok(f())
    except Exception as e:
        return from_exception(e, code=code, origin=origin)

"""Tests for build-time error types."""

import pytest

from schema_enforcer.errors import (
    AppError,
    CyclicSchemaError,
    Err,
    ErrorCode,
    Ok,
    SchemaDepthError,
    SchemaProcessingError,
    UnclonableValueError,
    cyclic_schema,
    from_exception,
    schema_error,
    schema_too_deep,
    try_result,
    unclonable_value,
)


def test_error_code_category() -> None:
    assert ErrorCode.E2031_CYCLIC_SCHEMA.category == "schema"
    assert ErrorCode.E9001_UNEXPECTED_ERROR.category == "internal"


def test_app_error_rendering() -> None:
    error = schema_error("bad schema", origin="Factory", keyword="type", ignored=None)

    assert str(error) == "E2000_SCHEMA_GENERIC in Factory: bad schema"
    assert error.metadata == {"keyword": "type"}
    assert error.to_dict() == {
        "code": "E2000_SCHEMA_GENERIC",
        "category": "schema",
        "message": "bad schema",
        "origin": "Factory",
        "metadata": {"keyword": "type"},
    }


def test_with_metadata_returns_new_error() -> None:
    error = AppError(code=ErrorCode.E2000_SCHEMA_GENERIC, message="x")
    extended = error.with_metadata(depth=2)

    assert extended.metadata == {"depth": 2}
    assert error.metadata == {}


def test_builders_set_codes() -> None:
    assert schema_too_deep(5, 4).code == ErrorCode.E2030_SCHEMA_TOO_DEEP
    assert cyclic_schema(2).metadata == {"depth": 2}
    assert unclonable_value(object(), "not json").message.endswith(": not json")


def test_exceptions_carry_app_error() -> None:
    error = cyclic_schema(1, origin="Factory")
    exc = CyclicSchemaError(error)

    assert isinstance(exc, SchemaProcessingError)
    assert exc.app_error is error
    assert exc.code == ErrorCode.E2031_CYCLIC_SCHEMA
    assert str(exc) == str(error)
    assert exc.to_dict() == error.to_dict()

    with pytest.raises(SchemaProcessingError):
        raise SchemaDepthError(schema_too_deep(3, 2))


def test_result_variants() -> None:
    success = Ok(2)
    failure = Err(schema_error("nope"))

    assert success.map(lambda v: v * 2).unwrap() == 4
    assert success.and_then(lambda v: Ok(v + 1)).unwrap() == 3
    assert failure.map(lambda v: v * 2) is failure
    assert failure.unwrap_or(0) == 0
    assert failure.unwrap_err().message == "nope"
    assert success.is_ok() and failure.is_err()
    assert success.unwrap_or(0) == 2

    with pytest.raises(ValueError):
        failure.unwrap()


def test_try_result_keeps_processing_error_codes() -> None:
    def build():
        raise UnclonableValueError(unclonable_value(object(), origin="Rule"))

    result = try_result(build)

    assert isinstance(result, Err)
    assert result.error.code == ErrorCode.E2032_UNCLONABLE_VALUE
    assert result.error.origin == "Rule"


def test_try_result_wraps_other_exceptions() -> None:
    def build():
        raise KeyError("missing")

    result = try_result(build, origin="Factory")

    assert result.error.code == ErrorCode.E9001_UNEXPECTED_ERROR
    assert isinstance(result.error.cause, KeyError)
    assert try_result(lambda: 1) == Ok(1)


def test_from_exception_uses_message_override() -> None:
    result = from_exception(RuntimeError("boom"), message="failed", origin="X", step=1)

    assert result.error.message == "failed"
    assert result.error.metadata == {"step": 1}

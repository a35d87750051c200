"""Enforcer Build Errors

Checking a value never raises; it returns an ErrorLog. The errors here are
for the step before that, compiling a schema into an enforcer, which can fail
on malformed, cyclic or overly deep schemas and on constants that are not
JSON data.

Two ways to consume them:

    try:
        enforcer = factory.process(schema)
    except SchemaProcessingError as exc:
        report(exc.app_error.to_dict())

    match factory.try_process(schema):
        case Ok(enforcer):
            ...
        case Err(error):
            report(error.to_dict())
"""
from .types import AppError, Err, ErrorCode, Ok, Result, from_exception, try_result
from .builders import cyclic_schema, schema_error, schema_too_deep, unclonable_value
from .exceptions import (
    CyclicSchemaError,
    SchemaDepthError,
    SchemaProcessingError,
    UnclonableValueError,
)

__all__ = [
    # values
    "AppError",
    "ErrorCode",
    "Result",
    "Ok",
    "Err",
    "from_exception",
    "try_result",
    # builders
    "schema_error",
    "schema_too_deep",
    "cyclic_schema",
    "unclonable_value",
    # exceptions
    "SchemaProcessingError",
    "SchemaDepthError",
    "CyclicSchemaError",
    "UnclonableValueError",
]

"""schema_enforcer

Schema-driven validation and coercion of JSON-like data.

A schema is compiled once into an enforcer. The enforcer reports why a
value does not conform (an ErrorLog of prioritized KeywordErrors) and can
coerce a non-conforming value into a conforming one. Schemas can also be
split into labeled options so an editor can show which alternative a
value most plausibly represents.

Usage:
    from schema_enforcer import JSONSchemaEnforcerFactory, configure_logging

    configure_logging()
    enforcer = JSONSchemaEnforcerFactory().process({"type": "integer"})
    enforcer.validate(1.5).is_valid  # False
    enforcer.coerce("2.5")           # 3
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .logging import configure_logging, get_logger
from .errors import (
    AppError,
    ErrorCode,
    SchemaProcessingError,
    SchemaDepthError,
    CyclicSchemaError,
    UnclonableValueError,
)
from .generic import (
    ErrorLog,
    KeywordError,
    SchemaEnforcer,
    LabeledValue,
)
from .json_schema import (
    JSONSchemaEnforcerFactory,
    JSONSchemaOptionsFactory,
    create_json_schema_options_parser,
)

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "AppError",
    "ErrorCode",
    "SchemaProcessingError",
    "SchemaDepthError",
    "CyclicSchemaError",
    "UnclonableValueError",
    "ErrorLog",
    "KeywordError",
    "SchemaEnforcer",
    "LabeledValue",
    "JSONSchemaEnforcerFactory",
    "JSONSchemaOptionsFactory",
    "create_json_schema_options_parser",
]

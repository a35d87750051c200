"""JSON Schema Bindings

Enforcers and options for JSON Schema documents, built on the generic
keyword engine.

Usage:
    from schema_enforcer.json_schema import (
        JSONSchemaEnforcerFactory, create_json_schema_options_parser,
    )

    enforcer = JSONSchemaEnforcerFactory().process({"type": ["number", "string"]})
    enforcer.validate(True).errors  # type error, priority 100

    parser = create_json_schema_options_parser()
    options = parser.get_options_for({"enum": ["a", 1]})
    parser.get_most_valid_option(options, 1).label  # "1"
"""

from .keyword_values import (
    TypeName,
    TypeNameList,
    JSONValue,
    Absent,
    KeywordValue,
    read_keyword_value,
    read_type_names,
)

from .enforcers import (
    CONST_KEYWORD_PRIORITY,
    FlagOrObject,
    BooleanFork,
    create_json_schema_type_rules,
    JSONSchemaTypeRule,
    JSONSchemaConstRule,
    JSONSchemaAllOfRule,
    JSONSchemaAnyValueEnforcer,
    JSONSchemaNoValueEnforcer,
    JSONSchemaEnforcerFactory,
)

from .options import (
    JSON_SCHEMA_LABEL_PROPERTIES,
    ANY_VALUE_JSON_SCHEMA,
    NO_VALUE_JSON_SCHEMA,
    JSONSchemaLabeler,
    JSONSchemaSplitter,
    JSONSchemaOptionsFactory,
    create_json_schema_options_parser,
)

__all__ = [
    "TypeName",
    "TypeNameList",
    "JSONValue",
    "Absent",
    "KeywordValue",
    "read_keyword_value",
    "read_type_names",
    "CONST_KEYWORD_PRIORITY",
    "FlagOrObject",
    "BooleanFork",
    "create_json_schema_type_rules",
    "JSONSchemaTypeRule",
    "JSONSchemaConstRule",
    "JSONSchemaAllOfRule",
    "JSONSchemaAnyValueEnforcer",
    "JSONSchemaNoValueEnforcer",
    "JSONSchemaEnforcerFactory",
    "JSON_SCHEMA_LABEL_PROPERTIES",
    "ANY_VALUE_JSON_SCHEMA",
    "NO_VALUE_JSON_SCHEMA",
    "JSONSchemaLabeler",
    "JSONSchemaSplitter",
    "JSONSchemaOptionsFactory",
    "create_json_schema_options_parser",
]

"""JSON Schema Options

Splits a JSON schema into labeled subschema options:
- true expands to one option per value type, false to a schema that can
  never validate
- enum expands to one const subschema per value
- oneOf / anyOf supply their branch schemas
- a list of types expands to one single-type schema per entry
"""
from __future__ import annotations

import copy
from typing import Callable, Sequence

from schema_enforcer.config import get_settings
from schema_enforcer.generic.constraints import ConversionFactory, SchemaEnforcer
from schema_enforcer.generic.keywords import KeywordErrorLogValidationParser
from schema_enforcer.generic.options import (
    KeyedSchemaLabeler,
    SchemaOptionsFactory,
    SchemaOptionsParser,
)

from .enforcers import BooleanFork, FlagOrObject, JSONSchemaEnforcerFactory

JSON_SCHEMA_LABEL_PROPERTIES: list[str] = [
    "title",
    "$id",
    "$ref",
    "description",
    "$comment",
    "const",
    "format",
    "type",
]

ANY_VALUE_JSON_SCHEMA: dict = {
    "title": "ANY_VALUE_JSON_SCHEMA",
    "oneOf": [
        {"type": "null"},
        {"type": "boolean"},
        {"type": "string"},
        {"type": "number"},
        {"type": "integer"},
        {"type": "array", "items": True},
        {"type": "object", "additionalProperties": True},
    ],
}

# two conflicting types, so nothing ever validates
NO_VALUE_JSON_SCHEMA: dict = {
    "title": "NO_VALUE_JSON_SCHEMA",
    "allOf": [
        {"type": "boolean"},
        {"type": "string"},
    ],
}


class JSONSchemaLabeler(ConversionFactory[FlagOrObject, str, None]):
    """Generates labels for boolean and object JSON schemas."""

    def __init__(self, key_handler: KeyedSchemaLabeler | None = None):
        self.key_handler = key_handler or KeyedSchemaLabeler(
            JSON_SCHEMA_LABEL_PROPERTIES,
            get_settings().LABEL_DELIMITER,
        )
        self.boolean_labels = BooleanFork(
            true=ANY_VALUE_JSON_SCHEMA["title"],
            false=NO_VALUE_JSON_SCHEMA["title"],
        )

    def process(self, source: FlagOrObject, context: None = None) -> str:
        if isinstance(source, bool):
            label = self.boolean_labels.true if source else self.boolean_labels.false
            translate = self.key_handler.translate
            return translate(label) if translate is not None else label
        return self.key_handler.process(source)


class JSONSchemaSplitter(ConversionFactory[FlagOrObject, list, None]):
    """Produces the subschema branches of a JSON schema.

    Args:
        subschema_keys: Keywords that can hold subschema lists, checked in order.
            Defaults to SUBSCHEMA_KEYWORDS.
        boolean_schemas: Subschemas for the true and false schemas.
    """
    enum_key = "enum"

    def __init__(
        self,
        subschema_keys: Sequence[str] | None = None,
        boolean_schemas: BooleanFork[list[dict]] | None = None,
    ):
        self.subschema_keys = tuple(
            subschema_keys if subschema_keys is not None else get_settings().SUBSCHEMA_KEYWORDS
        )
        self.boolean_schemas = boolean_schemas or BooleanFork(
            true=copy.deepcopy(ANY_VALUE_JSON_SCHEMA["oneOf"]),
            false=[copy.deepcopy(NO_VALUE_JSON_SCHEMA)],
        )

    def process(self, source: FlagOrObject, context: None = None) -> list[FlagOrObject]:
        if isinstance(source, bool):
            return list(self.boolean_schemas.true if source else self.boolean_schemas.false)
        if self.enum_key:
            enum_values = source.get(self.enum_key)
            if isinstance(enum_values, list):
                return [{"const": item} for item in enum_values]
        for keyword in self.subschema_keys:
            branches = source.get(keyword)
            if isinstance(branches, list):
                return [item for item in branches if isinstance(item, (bool, dict))]
        type_value = source.get("type")
        if isinstance(type_value, list):
            return [{"type": name} for name in type_value if isinstance(name, str)]
        return [source]


class JSONSchemaOptionsFactory(SchemaOptionsFactory):
    """Generates labeled subschema options for a JSON schema."""

    def __init__(
        self,
        enforcer_factory: ConversionFactory[FlagOrObject, SchemaEnforcer, None] | None = None,
        translate: Callable[[str], str] | None = None,
    ):
        super().__init__(
            enforcer_factory or JSONSchemaEnforcerFactory(),
            JSONSchemaLabeler(KeyedSchemaLabeler(
                JSON_SCHEMA_LABEL_PROPERTIES,
                get_settings().LABEL_DELIMITER,
                translate,
            )),
            JSONSchemaSplitter(),
        )


def create_json_schema_options_parser(
    options_factory: SchemaOptionsFactory | None = None,
) -> SchemaOptionsParser:
    """Build an options parser that ranks JSON schema options by keyword error priority."""
    return SchemaOptionsParser(
        options_factory or JSONSchemaOptionsFactory(),
        KeywordErrorLogValidationParser(),
    )

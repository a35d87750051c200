"""Tests for schema options generation and selection."""

import pytest
from structlog.testing import capture_logs

from schema_enforcer.generic.constraints import ConversionFactory, SchemaEnforcer
from schema_enforcer.generic.options import KeyedSchemaLabeler, SchemaOptionsFactory
from schema_enforcer.json_schema import (
    ANY_VALUE_JSON_SCHEMA,
    NO_VALUE_JSON_SCHEMA,
    JSONSchemaEnforcerFactory,
    JSONSchemaLabeler,
    JSONSchemaOptionsFactory,
    JSONSchemaSplitter,
    create_json_schema_options_parser,
)


class TruthinessEnforcer(SchemaEnforcer):
    def __init__(self, schema):
        self.schema = schema

    def validate(self, value):
        return bool(value)


class TruthinessFactory(ConversionFactory):
    def process(self, source, context=None):
        return TruthinessEnforcer(source)


@pytest.fixture
def options_factory() -> JSONSchemaOptionsFactory:
    return JSONSchemaOptionsFactory()


def test_true_schema_offers_every_type(options_factory) -> None:
    options = options_factory.process(True)

    assert [option.label for option in options] == [
        item["type"] for item in ANY_VALUE_JSON_SCHEMA["oneOf"]
    ]


def test_false_schema_offers_unmatchable_option(options_factory) -> None:
    options = options_factory.process(False)

    assert [option.label for option in options] == ["NO_VALUE_JSON_SCHEMA"]
    assert not options[0].value.validate(None).is_valid


def test_enum_generates_const_subschemas(options_factory) -> None:
    options = options_factory.process({"enum": ["a", 1]})

    assert [option.label for option in options] == ["a", "1"]
    assert options[0].value.schema == {"const": "a"}
    assert options[0].value.coerce(None) == "a"


def test_one_of_branches_become_options(options_factory) -> None:
    options = options_factory.process({
        "oneOf": [{"title": "Name", "type": "string"}, {"type": "number"}, 5],
    })

    assert [option.label for option in options] == ["Name", "number"]


def test_any_of_branches_become_options(options_factory) -> None:
    options = options_factory.process({"anyOf": [{"type": "null"}, False]})

    assert [option.label for option in options] == ["null", "NO_VALUE_JSON_SCHEMA"]


def test_type_list_splits_per_type(options_factory) -> None:
    options = options_factory.process({"type": ["string", "null"]})

    assert [option.value.schema for option in options] == [{"type": "string"}, {"type": "null"}]


def test_plain_schema_is_single_option(options_factory) -> None:
    schema = {"type": "string"}
    options = options_factory.process(schema)

    assert len(options) == 1
    assert options[0].value.schema is schema


def test_translate_applies_to_labels() -> None:
    options_factory = JSONSchemaOptionsFactory(translate=str.upper)

    assert [option.label for option in options_factory.process({"enum": ["a", "b"]})] == ["A", "B"]
    assert options_factory.label_factory.process(True) == "ANY_VALUE_JSON_SCHEMA"


def test_custom_options_factory() -> None:
    options_factory = SchemaOptionsFactory(
        TruthinessFactory(),
        JSONSchemaLabeler(),
        JSONSchemaSplitter(),
    )
    options = options_factory.process({"enum": [True, False]})

    assert [option.label for option in options] == ["true", "false"]
    assert options[0].value.validate(1) is True


def test_options_factory_without_splitter() -> None:
    options = SchemaOptionsFactory(TruthinessFactory(), KeyedSchemaLabeler(["title"])).process(
        {"title": "Only"}
    )

    assert [option.label for option in options] == ["Only"]


def test_most_valid_option_picks_matching_type() -> None:
    parser = create_json_schema_options_parser()
    options = parser.get_options_for(True)

    assert parser.get_most_valid_option(options, "x").label == "string"
    assert parser.get_most_valid_option(options, None).label == "null"
    assert parser.get_most_valid_option(options, [1]).label == "array"


def test_most_valid_option_keeps_first_on_ties() -> None:
    parser = create_json_schema_options_parser()
    options = parser.get_options_for(True)

    # 5 satisfies both number and integer
    assert parser.get_most_valid_option(options, 5).label == "number"


def test_most_valid_option_prefers_lower_priority_failures() -> None:
    parser = create_json_schema_options_parser()
    options = parser.get_options_for({
        "oneOf": [
            {"title": "wrong type", "type": "number"},
            {"title": "wrong value", "type": "string", "const": "a"},
        ],
    })

    assert parser.get_most_valid_option(options, "b").label == "wrong type"


def test_most_valid_option_with_no_options() -> None:
    parser = create_json_schema_options_parser()

    assert parser.get_most_valid_option([], 1) is None


def test_option_selection_is_logged() -> None:
    parser = create_json_schema_options_parser()
    options = parser.get_options_for({"enum": ["a", 1]})

    with capture_logs() as logs:
        parser.get_most_valid_option(options, 1)

    selected = [entry for entry in logs if entry["event"] == "option_selected"]
    assert len(selected) == 1
    assert selected[0]["log_level"] == "debug"
    assert selected[0]["value_type"] == "number"
    assert selected[0]["label"] == "1"
    assert selected[0]["validity"] == 1


def test_splitter_returns_copies_of_boolean_schemas() -> None:
    splitter = JSONSchemaSplitter()

    false_branches = splitter.process(False)
    assert false_branches == [NO_VALUE_JSON_SCHEMA]
    false_branches[0]["title"] = "changed"
    assert NO_VALUE_JSON_SCHEMA["title"] == "NO_VALUE_JSON_SCHEMA"

    true_branches = splitter.process(True)
    assert true_branches == ANY_VALUE_JSON_SCHEMA["oneOf"]
    assert true_branches[0] is not ANY_VALUE_JSON_SCHEMA["oneOf"][0]


def test_splitter_prefers_enum_over_subschemas() -> None:
    splitter = JSONSchemaSplitter()

    assert splitter.process({"enum": [1], "oneOf": [True]}) == [{"const": 1}]


def test_splitter_subschema_keys_are_configurable() -> None:
    splitter = JSONSchemaSplitter(subschema_keys=["anyOf"])

    schema = {"oneOf": [True], "anyOf": [False]}
    assert splitter.process(schema) == [False]


def test_keyed_labeler() -> None:
    labeler = KeyedSchemaLabeler(["title", "type"], delimiter="|")

    assert labeler.process({"type": ["string", "null"]}) == "string|null"
    assert labeler.process({"title": [], "type": "x"}) == "x"
    assert labeler.process({"other": 1}) == '{"other":1}'
    assert labeler.process({"title": {"a": 1}}) == '{"a":1}'


def test_labeler_uses_enforcer_free_defaults() -> None:
    assert JSONSchemaLabeler().process({"$id": "#/defs/a", "title": "A"}) == "A"
    assert JSONSchemaLabeler().process(False) == "NO_VALUE_JSON_SCHEMA"


def test_options_factory_accepts_custom_enforcer_factory() -> None:
    enforcer_factory = JSONSchemaEnforcerFactory(max_depth=1)
    options_factory = JSONSchemaOptionsFactory(enforcer_factory)

    assert options_factory.enforcer_factory is enforcer_factory

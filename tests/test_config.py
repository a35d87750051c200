"""Tests for environment-driven settings."""

import logging

from schema_enforcer.config import get_settings
from schema_enforcer.json_schema import (
    JSONSchemaEnforcerFactory,
    JSONSchemaSplitter,
    create_json_schema_options_parser,
)
from schema_enforcer.logging import configure_logging


def test_defaults() -> None:
    settings = get_settings()

    assert settings.MAX_SCHEMA_DEPTH == 64
    assert settings.MAX_ARRAY_INDEX == 10_000
    assert settings.LABEL_DELIMITER == "/"
    assert settings.SUBSCHEMA_KEYWORDS == ["oneOf", "anyOf"]
    assert settings.LOG_JSON is False


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SCHEMA_ENFORCER_MAX_SCHEMA_DEPTH", "3")
    monkeypatch.setenv("SCHEMA_ENFORCER_SUBSCHEMA_KEYWORDS", '["anyOf"]')
    monkeypatch.setenv("SCHEMA_ENFORCER_LABEL_DELIMITER", " | ")

    assert JSONSchemaEnforcerFactory().max_depth == 3
    assert JSONSchemaSplitter().subschema_keys == ("anyOf",)
    assert get_settings().LABEL_DELIMITER == " | "


def test_explicit_arguments_win_over_settings(monkeypatch) -> None:
    monkeypatch.setenv("SCHEMA_ENFORCER_MAX_SCHEMA_DEPTH", "3")

    assert JSONSchemaEnforcerFactory(max_depth=10).max_depth == 10


def test_configure_logging(restore_logging) -> None:
    configure_logging(level="debug", json_logs=True)

    assert restore_logging.level == logging.DEBUG
    assert restore_logging.propagate is False
    assert len(restore_logging.handlers) == 1


def test_configure_logging_reads_settings(monkeypatch, restore_logging) -> None:
    monkeypatch.setenv("SCHEMA_ENFORCER_LOG_LEVEL", "WARNING")

    configure_logging()

    assert restore_logging.level == logging.WARNING


def test_unconfigured_library_writes_nothing(capsys) -> None:
    JSONSchemaEnforcerFactory().process({"type": "string", "allOf": [{"const": "a"}]})
    parser = create_json_schema_options_parser()
    parser.get_most_valid_option(parser.get_options_for({"enum": ["a", 1]}), 1)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_library_events_reach_host_handlers(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="schema_enforcer")

    JSONSchemaEnforcerFactory().process({"type": "string"})

    assert any(
        record.name == "schema_enforcer.enforcer" and "keyword_enforcer_built" in record.getMessage()
        for record in caplog.records
    )

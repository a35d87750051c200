"""Tests for validation parsers and validation merging."""

from schema_enforcer.generic.validity import (
    BooleanValidationParser,
    ErrorLog,
    ErrorLogValidationParser,
    merge_validate_steps,
)


def test_boolean_parser() -> None:
    parser = BooleanValidationParser()

    assert parser.is_valid(True)
    assert not parser.is_valid(False)
    assert parser.get_valid() is True
    assert parser.rate_validity(True) == 1
    assert parser.rate_validity(False) == 0


def test_error_log_parser_rates_by_error_count() -> None:
    parser = ErrorLogValidationParser()

    assert parser.is_valid(ErrorLog())
    assert not parser.is_valid(ErrorLog(["x"]))
    assert parser.get_valid() == ErrorLog()
    assert parser.rate_validity(ErrorLog()) == 1
    assert parser.rate_validity(ErrorLog(["x", "y", "z"])) == -2


def test_error_log_to_dict() -> None:
    assert ErrorLog().to_dict() == {"valid": True, "errors": []}
    assert ErrorLog(["bad"]).to_dict() == {"valid": False, "errors": ["bad"]}


def test_merged_steps_return_first_failure() -> None:
    calls = []

    def step(name, result):
        def run(value):
            calls.append(name)
            return result
        return run

    validate = merge_validate_steps(
        [step("a", ErrorLog()), step("b", ErrorLog(["b"])), step("c", ErrorLog(["c"]))],
        ErrorLogValidationParser(),
    )

    assert validate(None).errors == ["b"]
    assert calls == ["a", "b"]


def test_merged_steps_return_canonical_valid_result() -> None:
    validate = merge_validate_steps([lambda v: v > 0, lambda v: v < 10], BooleanValidationParser())

    assert validate(5) is True
    assert validate(50) is False


def test_no_steps_is_valid() -> None:
    validate = merge_validate_steps([], ErrorLogValidationParser())
    assert validate("anything").is_valid

"""Keyword Rule Engine

Turns a schema's keywords into named constraints and merges them into a
single enforcer reporting an ErrorLog of KeywordErrors.

Two conflict policies coexist:
- Within one schema, keyword validations run in rule order and the first
  failing rule decides the result (SequentialKeywordEnforcerFactory).
- Across alternative branches of a union, the branch whose most
  authoritative complaint has the lowest priority wins (KeywordEnforcerFork).

Priorities: higher means more authoritative. Type checks use 100, so type
mismatches dominate sibling keyword failures.
"""
from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Sequence

from schema_enforcer.logging import enforcer_logger

from .constraints import (
    CoercingConstraint,
    ConversionFactory,
    SchemaEnforcer,
    ValueConstraint,
    ValueConstraintRule,
    merge_coerce_steps,
)
from .validity import ErrorLog, ErrorLogValidationParser, merge_validate_steps

TYPE_KEYWORD_PRIORITY = 100


@dataclass(frozen=True, slots=True)
class KeywordError:
    """A failure reported by a single schema keyword.

    keyword and value are None when the whole schema rejected the target.
    coerce, when present, attempts to fix this specific failure.
    """
    keyword: str | None = None
    value: Any = None
    target: Any = None
    priority: float = 0
    coerce: Callable[[Any], Any] | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "keyword": self.keyword,
            "value": self.value,
            "target": self.target,
            "priority": self.priority,
        }


class KeywordValueEnforcer(ValueConstraint[Any, ErrorLog, Any]):
    """Converts a value check into a keyword error log with at most one entry."""

    def __init__(
        self,
        keyword: str,
        value: Any,
        check: Callable[[Any], bool],
        coerce: Callable[[Any], Any] | None = None,
        priority: float = 0,
    ):
        self.keyword = keyword
        self.value = value
        self.check = check
        self.coerce = coerce
        self.priority = priority

    def validate(self, target: Any) -> ErrorLog[KeywordError]:
        if self.check(target):
            return ErrorLog()
        return ErrorLog([
            KeywordError(
                keyword=self.keyword,
                value=self.value,
                target=target,
                priority=self.priority,
                coerce=self.coerce,
            )
        ])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keyword={self.keyword!r}, value={self.value!r}, priority={self.priority})"


class KeywordErrorLogValidationParser(ErrorLogValidationParser):
    """Rates keyword error logs by the priority of their worst error.

    A failing log rates as the negative of its highest error priority, so
    among failures the one whose most authoritative complaint is weakest
    ranks best. Valid logs rate 1.
    """

    def rate_validity(self, validation: ErrorLog) -> float:
        if validation.errors:
            max_error_priority = 0
            for error in validation.errors:
                priority = getattr(error, "priority", None)
                if priority is not None and priority > max_error_priority:
                    max_error_priority = priority
            return -max_error_priority
        return 1


class KeywordEnforcerFork(ValueConstraint[Any, ErrorLog, Any]):
    """Applies the first matching constraint within a set of branches."""

    def __init__(
        self,
        branches: Sequence[ValueConstraint[Any, ErrorLog, Any]],
        default_coerce: Callable[[Any], Any],
    ):
        self.branches = tuple(branches)
        self.default_coerce = default_coerce
        self.coerce = self._coerce

    def _coerce(self, value: Any) -> Any:
        validation = self.validate(value)
        error = validation.errors[0] if validation.errors else None
        if error is not None and error.coerce is not None:
            return error.coerce(value)
        return self.default_coerce(value)

    @staticmethod
    def get_highest_priority_error(errors: Sequence[KeywordError]) -> KeywordError | None:
        """Return the error with the greatest priority, the first one on ties."""
        highest: KeywordError | None = None
        highest_priority = float("-inf")
        for error in errors:
            priority = error.priority if error.priority is not None else 0
            if highest is None or priority > highest_priority:
                highest = error
                highest_priority = priority
        return highest

    def validate(self, target: Any) -> ErrorLog[KeywordError]:
        result: ErrorLog[KeywordError] | None = None
        lowest_priority = float("inf")
        for branch in self.branches:
            validation = branch.validate(target)
            if not validation.errors:
                return validation
            worst = self.get_highest_priority_error(validation.errors)
            priority = worst.priority if worst is not None and worst.priority is not None else 0
            if result is None or priority < lowest_priority:
                result = validation
                lowest_priority = priority
        return result if result is not None else ErrorLog()


@dataclass(slots=True)
class KeywordEnforcerContext:
    """Shared state for rules building constraints from one schema.

    enforcers maps keywords to the sibling constraints already built in the
    current pass. subschema_factory, when set, is the root factory so rules
    holding nested schemas can build enforcers for them.
    """
    enforcers: dict[str, ValueConstraint] = field(default_factory=dict)
    subschema_factory: ConversionFactory | None = None


class KeywordRule(ValueConstraintRule[dict, KeywordEnforcerContext]):
    """Generates a constraint when the target schema uses the rule's keyword."""
    keyword: str

    @abstractmethod
    def get_enforcer_for(
        self,
        schema: dict,
        context: KeywordEnforcerContext | None = None,
    ) -> ValueConstraint[Any, ErrorLog, Any] | None:
        """Return a constraint if the rule applies to the schema."""


class KeywordRulesEnforcer(SchemaEnforcer[ErrorLog, Any]):
    """Schema enforcer built from keyword rules, with the per-keyword constraints attached."""

    def __init__(
        self,
        schema: dict,
        validate: Callable[[Any], ErrorLog[KeywordError]],
        enforcers: dict[str, ValueConstraint],
        coerce: Callable[[Any], Any] | None = None,
    ):
        self.schema = schema
        self._validate = validate
        self.enforcers = enforcers
        self.coerce = coerce

    def validate(self, value: Any) -> ErrorLog[KeywordError]:
        return self._validate(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keywords={list(self.enforcers)!r})"


class SequentialKeywordEnforcerFactory(
    ConversionFactory[dict, KeywordRulesEnforcer, KeywordEnforcerContext]
):
    """Chains an ordered set of keyword rules into a single enforcer.

    Rule order is fixed at construction. with_rule returns a new factory
    rather than mutating this one.
    """

    def __init__(self, rules: Sequence[KeywordRule] = ()):
        self.rules: tuple[KeywordRule, ...] = tuple(rules)
        self.validation_parser = KeywordErrorLogValidationParser()

    def with_rule(self, rule: KeywordRule) -> SequentialKeywordEnforcerFactory:
        """Return a factory with the rule appended, leaving this one unchanged."""
        return type(self)((*self.rules, rule))

    def process(
        self,
        schema: dict,
        context: KeywordEnforcerContext | None = None,
    ) -> KeywordRulesEnforcer:
        enforcers: dict[str, ValueConstraint] = {}
        rule_context = (
            replace(context, enforcers=enforcers)
            if context is not None
            else KeywordEnforcerContext(enforcers=enforcers)
        )
        validate_queue: list[Callable[[Any], ErrorLog]] = []
        coerce_queue: list[Callable[[Any], Any]] = []
        for rule in self.rules:
            rule_enforcer = rule.get_enforcer_for(schema, rule_context)
            if rule_enforcer is None:
                continue
            validate_queue.append(rule_enforcer.validate)
            if rule_enforcer.coerce is not None:
                coerce_queue.append(rule_enforcer.coerce)
            enforcers[rule.keyword] = rule_enforcer

        enforcer_logger().debug(
            "keyword_enforcer_built",
            keywords=list(enforcers),
            coercing=bool(coerce_queue),
        )
        return KeywordRulesEnforcer(
            schema=schema,
            validate=merge_validate_steps(validate_queue, self.validation_parser),
            enforcers=enforcers,
            coerce=merge_coerce_steps(coerce_queue) if coerce_queue else None,
        )


class TypeKeywordEnforcer(KeywordValueEnforcer):
    """Type check that defers to type-scoped keyword constraints once the type matches."""

    def __init__(
        self,
        keyword: str,
        value: Any,
        check: Callable[[Any], bool],
        coerce_type: Callable[[Any], Any],
        rules_enforcer: KeywordRulesEnforcer | None = None,
        priority: float = 0,
    ):
        super().__init__(keyword, value, check, None, priority)
        self.coerce_type = coerce_type
        self.rules_enforcer = rules_enforcer
        self.coerce = self._coerce_typed

    def _coerce_typed(self, value: Any) -> Any:
        typed_value = self.coerce_type(value)
        if self.rules_enforcer is not None and self.rules_enforcer.coerce is not None:
            return self.rules_enforcer.coerce(typed_value)
        return typed_value

    def validate(self, target: Any) -> ErrorLog[KeywordError]:
        type_check = super().validate(target)
        if self.rules_enforcer is not None and not type_check.errors:
            return self.rules_enforcer.validate(target)
        return type_check


class TypeKeywordRule(KeywordRule):
    """Builds a TypeKeywordEnforcer for one value type.

    typed_keywords, when given, produces the constraints that only apply
    once the value is known to be of this type.
    """

    def __init__(
        self,
        keyword: str,
        type_enforcer: CoercingConstraint[Any, bool, Any],
        typed_keywords: SequentialKeywordEnforcerFactory | None = None,
    ):
        self.keyword = keyword
        self.type_enforcer = type_enforcer
        self.typed_keywords = typed_keywords

    def get_enforcer_for(
        self,
        schema: dict,
        context: KeywordEnforcerContext | None = None,
    ) -> TypeKeywordEnforcer:
        typed_enforcer = (
            self.typed_keywords.process(schema, context)
            if self.typed_keywords is not None
            else None
        )
        return TypeKeywordEnforcer(
            self.keyword,
            schema.get(self.keyword),
            self.type_enforcer.validate,
            self.type_enforcer.coerce,
            typed_enforcer,
            TYPE_KEYWORD_PRIORITY,
        )

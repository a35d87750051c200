"""JSON Schema Keyword Bindings

Concrete keyword rules for JSON Schema and the factory that turns a schema
document into a SchemaEnforcer.

Supported vocabulary:
- Boolean schemas: true accepts everything, false rejects everything
- type: a type name or a list of type names, over
  any | array | boolean | integer | null | number | object | string
- const: deep equality with a fixed value
- allOf: every listed subschema must validate

Other keywords are ignored unless a rule for them is added with with_rule().
"""
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar, Union

from schema_enforcer.config import get_settings
from schema_enforcer.errors import (
    AppError,
    CyclicSchemaError,
    ErrorCode,
    Result,
    SchemaDepthError,
    SchemaProcessingError,
    cyclic_schema,
    schema_error,
    schema_too_deep,
    try_result,
)
from schema_enforcer.generic.constraints import (
    ConversionFactory,
    SchemaEnforcer,
    ValueConstraint,
    echo_value,
    merge_coerce_steps,
)
from schema_enforcer.generic.enforcers import (
    AnyValueEnforcer,
    ArrayEnforcer,
    BooleanEnforcer,
    NumberEnforcer,
    ObjectEnforcer,
    SteppedNumberEnforcer,
    StrictEqualityEnforcer,
    StringEnforcer,
)
from schema_enforcer.generic.keywords import (
    KeywordEnforcerContext,
    KeywordEnforcerFork,
    KeywordError,
    KeywordErrorLogValidationParser,
    KeywordRule,
    KeywordRulesEnforcer,
    KeywordValueEnforcer,
    SequentialKeywordEnforcerFactory,
    TypeKeywordRule,
)
from schema_enforcer.generic.validity import ErrorLog, merge_validate_steps
from schema_enforcer.generic.values import clone_json_value, ensure_json_compatible, is_equivalent_to
from schema_enforcer.logging import enforcer_logger

from .keyword_values import JSONValue, TypeName, TypeNameList, read_keyword_value, read_type_names

T = TypeVar("T")

FlagOrObject = Union[bool, dict]

CONST_KEYWORD_PRIORITY = 150

# ids of the dict schemas currently being processed, outermost first
_processing_chain: ContextVar[tuple[int, ...]] = ContextVar("schema_processing_chain", default=())


def create_json_schema_type_rules(
    keyword: str = "type",
    value_property: str | None = None,
) -> dict[str, TypeKeywordRule]:
    """Build the rules for each value of the JSON Schema type keyword.

    Args:
        keyword: Schema property holding the type.
        value_property: Unwrapping property passed on to each type enforcer.
    """
    return {
        "any": TypeKeywordRule(keyword, AnyValueEnforcer()),
        "array": TypeKeywordRule(keyword, ArrayEnforcer(value_property=value_property)),
        "boolean": TypeKeywordRule(keyword, BooleanEnforcer(False, value_property)),
        "integer": TypeKeywordRule(
            keyword, SteppedNumberEnforcer(0, value_property, step=1)
        ),
        "null": TypeKeywordRule(keyword, StrictEqualityEnforcer(None)),
        "number": TypeKeywordRule(keyword, NumberEnforcer(0, value_property)),
        "object": TypeKeywordRule(keyword, ObjectEnforcer(value_property=value_property)),
        "string": TypeKeywordRule(keyword, StringEnforcer("", value_property)),
    }


class JSONSchemaTypeRule(KeywordRule):
    """Handles the JSON Schema type keyword.

    A list of types becomes a fork over the known type names; values that
    match no branch are left unchanged by coercion.
    """

    def __init__(
        self,
        keyword: str = "type",
        type_rules: dict[str, TypeKeywordRule] | None = None,
    ):
        self.keyword = keyword
        self.type_rules = type_rules if type_rules is not None else create_json_schema_type_rules(keyword)

    def get_enforcer_for(
        self,
        schema: dict,
        context: KeywordEnforcerContext | None = None,
    ) -> ValueConstraint[Any, ErrorLog, Any] | None:
        match read_type_names(schema, self.keyword):
            case TypeName(name):
                type_rule = self.type_rules.get(name)
                return type_rule.get_enforcer_for(schema, context) if type_rule is not None else None
            case TypeNameList(names):
                branches = [
                    self.type_rules[name].get_enforcer_for(schema, context)
                    for name in names
                    if name in self.type_rules
                ]
                return KeywordEnforcerFork(branches, echo_value)
        return None


class JSONSchemaConstRule(KeywordRule):
    """Handles the JSON Schema const keyword. A const of None still applies."""

    def __init__(self, keyword: str = "const"):
        self.keyword = keyword

    def get_enforcer_for(
        self,
        schema: dict,
        context: KeywordEnforcerContext | None = None,
    ) -> KeywordValueEnforcer | None:
        match read_keyword_value(schema, self.keyword):
            case JSONValue(value):
                ensure_json_compatible(value, origin=type(self).__name__)
                return KeywordValueEnforcer(
                    self.keyword,
                    value,
                    lambda target: is_equivalent_to(target, value),
                    lambda target: clone_json_value(value),
                    CONST_KEYWORD_PRIORITY,
                )
        return None


class JSONSchemaAllOfRule(KeywordRule):
    """Handles the JSON Schema allOf keyword.

    Branches are built through the context's subschema factory and checked
    in order; the first failing branch decides the result. Without a
    subschema factory the keyword is ignored.
    """

    def __init__(self, keyword: str = "allOf"):
        self.keyword = keyword

    def get_enforcer_for(
        self,
        schema: dict,
        context: KeywordEnforcerContext | None = None,
    ) -> KeywordRulesEnforcer | None:
        factory = context.subschema_factory if context is not None else None
        if factory is None:
            return None
        match read_keyword_value(schema, self.keyword):
            case JSONValue(list() as branches):
                enforcers = {
                    str(index): factory.process(branch)
                    for index, branch in enumerate(branches)
                    if isinstance(branch, (bool, dict))
                }
                coerce_steps = [e.coerce for e in enforcers.values() if e.coerce is not None]
                return KeywordRulesEnforcer(
                    schema=branches,
                    validate=merge_validate_steps(
                        [e.validate for e in enforcers.values()],
                        KeywordErrorLogValidationParser(),
                    ),
                    enforcers=enforcers,
                    coerce=merge_coerce_steps(coerce_steps) if coerce_steps else None,
                )
        return None


class JSONSchemaAnyValueEnforcer(SchemaEnforcer[ErrorLog, Any]):
    """Enforcer for the true schema: accepts any value unchanged."""
    schema = True

    def validate(self, value: Any) -> ErrorLog[KeywordError]:
        return ErrorLog()

    def coerce(self, value: Any) -> Any:
        return value


class JSONSchemaNoValueEnforcer(SchemaEnforcer[ErrorLog, Any]):
    """Enforcer for the false schema: rejects every value, with no coercion."""
    schema = False

    def validate(self, value: Any) -> ErrorLog[KeywordError]:
        return ErrorLog([KeywordError(target=value)])


@dataclass(frozen=True, slots=True)
class BooleanFork(Generic[T]):
    """Values for the true and false branches of a boolean schema."""
    true: T
    false: T


class JSONSchemaEnforcerFactory(
    ConversionFactory[FlagOrObject, SchemaEnforcer, KeywordEnforcerContext]
):
    """Builds enforcers for boolean and object JSON schemas.

    Object schemas go through the keyword handler (type, const and allOf rules by
    default). Nested processing through the same factory is bounded by
    max_depth, and a schema that contains itself is rejected.
    """

    def __init__(
        self,
        keyword_handler: SequentialKeywordEnforcerFactory | None = None,
        boolean_enforcers: BooleanFork[SchemaEnforcer] | None = None,
        max_depth: int | None = None,
    ):
        self.keyword_handler = keyword_handler or SequentialKeywordEnforcerFactory(
            [JSONSchemaTypeRule(), JSONSchemaConstRule(), JSONSchemaAllOfRule()]
        )
        self.boolean_enforcers = boolean_enforcers or BooleanFork(
            true=JSONSchemaAnyValueEnforcer(),
            false=JSONSchemaNoValueEnforcer(),
        )
        self.max_depth = max_depth if max_depth is not None else get_settings().MAX_SCHEMA_DEPTH

    def with_rule(self, rule: KeywordRule) -> JSONSchemaEnforcerFactory:
        """Return a factory whose keyword handler has the rule appended."""
        return type(self)(
            self.keyword_handler.with_rule(rule),
            self.boolean_enforcers,
            self.max_depth,
        )

    def process(
        self,
        schema: FlagOrObject,
        context: KeywordEnforcerContext | None = None,
    ) -> SchemaEnforcer:
        """Build an enforcer for the schema.

        Raises:
            SchemaProcessingError: if the schema is neither a boolean nor a dict.
            CyclicSchemaError: if the schema is nested inside itself.
            SchemaDepthError: if nesting exceeds max_depth.
            UnclonableValueError: if a const value is not JSON-compatible.
        """
        if isinstance(schema, bool):
            return self.boolean_enforcers.true if schema else self.boolean_enforcers.false

        origin = type(self).__name__
        if not isinstance(schema, dict):
            raise SchemaProcessingError(schema_error(
                "Schema must be a boolean or an object",
                code=ErrorCode.E2001_INVALID_SCHEMA,
                origin=origin,
                schema_type=type(schema).__name__,
            ))

        chain = _processing_chain.get()
        if id(schema) in chain:
            enforcer_logger().warning("cyclic_schema", depth=len(chain))
            raise CyclicSchemaError(cyclic_schema(len(chain), origin=origin))
        if len(chain) >= self.max_depth:
            enforcer_logger().warning("schema_too_deep", depth=len(chain) + 1, max_depth=self.max_depth)
            raise SchemaDepthError(schema_too_deep(len(chain) + 1, self.max_depth, origin=origin))

        token = _processing_chain.set((*chain, id(schema)))
        try:
            keyword_context = (
                replace(context, subschema_factory=self)
                if context is not None
                else KeywordEnforcerContext(subschema_factory=self)
            )
            return self.keyword_handler.process(schema, keyword_context)
        finally:
            _processing_chain.reset(token)

    def try_process(self, schema: FlagOrObject) -> Result[SchemaEnforcer, AppError]:
        """Build an enforcer, reporting build failures as Err instead of raising."""
        return try_result(lambda: self.process(schema), origin=type(self).__name__)

"""Schema-Agnostic Enforcement Primitives

Interfaces and building blocks that do not depend on any particular schema
language.

Key Features:
- ValueConstraint / SchemaEnforcer interfaces (validate + optional coerce)
- Primitive type enforcers with lossy, non-raising coercion
- Validation parsers for boolean and error log results
- Keyword rule engine with priority-ranked errors
- Schema options: split, label and rank alternatives

Usage:
    from schema_enforcer.generic import (
        SequentialKeywordEnforcerFactory, TypeKeywordRule, StringEnforcer,
    )

    factory = SequentialKeywordEnforcerFactory([
        TypeKeywordRule("type", StringEnforcer("")),
    ])
    enforcer = factory.process({"type": "string"})
    enforcer.coerce(5)  # "5"
"""

# Interfaces
from .constraints import (
    ValueConstraint,
    CoercingConstraint,
    SchemaEnforcer,
    ConversionFactory,
    ValueConstraintRule,
    echo_value,
    merge_coerce_steps,
)

# Validation results
from .validity import (
    ErrorLog,
    ValidationParser,
    BooleanValidationParser,
    ErrorLogValidationParser,
    merge_validate_steps,
)

# Value helpers
from .values import (
    is_equivalent_to,
    ensure_json_compatible,
    clone_json_value,
    to_number,
    get_expanded_type_of,
    stringify_value,
)

# Type enforcers
from .enforcers import (
    ValueTypeEnforcer,
    ArrayEnforcer,
    BooleanEnforcer,
    NumberEnforcer,
    SteppedNumberEnforcer,
    ObjectEnforcer,
    StringEnforcer,
    StrictEqualityEnforcer,
    AnyValueEnforcer,
)

# Keyword rules
from .keywords import (
    TYPE_KEYWORD_PRIORITY,
    KeywordError,
    KeywordValueEnforcer,
    KeywordErrorLogValidationParser,
    KeywordEnforcerFork,
    KeywordEnforcerContext,
    KeywordRule,
    KeywordRulesEnforcer,
    SequentialKeywordEnforcerFactory,
    TypeKeywordEnforcer,
    TypeKeywordRule,
)

# Options
from .options import (
    LabeledValue,
    SchemaOptionsFactory,
    KeyedSchemaLabeler,
    SchemaOptionsParser,
)

__all__ = [
    # Interfaces
    "ValueConstraint",
    "CoercingConstraint",
    "SchemaEnforcer",
    "ConversionFactory",
    "ValueConstraintRule",
    "echo_value",
    "merge_coerce_steps",
    # Validation results
    "ErrorLog",
    "ValidationParser",
    "BooleanValidationParser",
    "ErrorLogValidationParser",
    "merge_validate_steps",
    # Value helpers
    "is_equivalent_to",
    "ensure_json_compatible",
    "clone_json_value",
    "to_number",
    "get_expanded_type_of",
    "stringify_value",
    # Type enforcers
    "ValueTypeEnforcer",
    "ArrayEnforcer",
    "BooleanEnforcer",
    "NumberEnforcer",
    "SteppedNumberEnforcer",
    "ObjectEnforcer",
    "StringEnforcer",
    "StrictEqualityEnforcer",
    "AnyValueEnforcer",
    # Keyword rules
    "TYPE_KEYWORD_PRIORITY",
    "KeywordError",
    "KeywordValueEnforcer",
    "KeywordErrorLogValidationParser",
    "KeywordEnforcerFork",
    "KeywordEnforcerContext",
    "KeywordRule",
    "KeywordRulesEnforcer",
    "SequentialKeywordEnforcerFactory",
    "TypeKeywordEnforcer",
    "TypeKeywordRule",
    # Options
    "LabeledValue",
    "SchemaOptionsFactory",
    "KeyedSchemaLabeler",
    "SchemaOptionsParser",
]

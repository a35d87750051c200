"""Schema Options

A schema can often be read as a set of alternatives: the values of an enum,
the branches of a union, the members of a type list. This module turns a
schema into labeled options, each paired with its own enforcer, and picks
the option a given value most plausibly represents.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from schema_enforcer.logging import options_logger

from .constraints import ConversionFactory, SchemaEnforcer
from .validity import ValidationParser
from .values import get_expanded_type_of, stringify_value

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class LabeledValue(Generic[T]):
    """A named alternative."""
    label: str
    value: T


class SchemaOptionsFactory(ConversionFactory[Any, list[LabeledValue[SchemaEnforcer]], None]):
    """Generates labeled options from a schema.

    Args:
        enforcer_factory: Produces an enforcer for each subschema.
        label_factory: Produces a label for each subschema.
        splitter: Converts the schema into its subschemas. Without one, the
            schema is its own sole option.
    """

    def __init__(
        self,
        enforcer_factory: ConversionFactory[Any, SchemaEnforcer, Any],
        label_factory: ConversionFactory[Any, str, Any],
        splitter: ConversionFactory[Any, list, Any] | None = None,
    ):
        self.enforcer_factory = enforcer_factory
        self.label_factory = label_factory
        self.splitter = splitter

    def process(self, schema: Any, context: None = None) -> list[LabeledValue[SchemaEnforcer]]:
        sources = self.splitter.process(schema) if self.splitter is not None else [schema]
        options = [
            LabeledValue(
                label=self.label_factory.process(source),
                value=self.enforcer_factory.process(source),
            )
            for source in sources
        ]
        options_logger().debug("options_built", labels=[option.label for option in options])
        return options


class KeyedSchemaLabeler(ConversionFactory[dict, str, None]):
    """Generates a label from the first of a prioritized list of schema properties.

    List values produce one sublabel per item joined by delimiter; empty lists
    are skipped. translate, when provided, is applied to each label text.
    """

    def __init__(
        self,
        keywords: Sequence[str] = (),
        delimiter: str = "/",
        translate: Callable[[str], str] | None = None,
        stringify: Callable[[Any], str] = stringify_value,
    ):
        self.keywords = tuple(keywords)
        self.delimiter = delimiter
        self.translate = translate
        self.stringify = stringify

    def process(self, source: dict, context: None = None) -> str:
        for keyword in self.keywords:
            if keyword not in source:
                continue
            value = source[keyword]
            if isinstance(value, list):
                item_names = [self.stringify(item) for item in value]
                if not item_names:
                    continue
                if self.translate is not None:
                    item_names = [self.translate(name) for name in item_names]
                return self.delimiter.join(item_names)
            text = self.stringify(value)
            return self.translate(text) if self.translate is not None else text
        return self.stringify(source)


class SchemaOptionsParser(Generic[T]):
    """Generates schema options and ranks them against values."""

    def __init__(
        self,
        options_factory: SchemaOptionsFactory,
        validation_parser: ValidationParser[T],
    ):
        self.options_factory = options_factory
        self.validation_parser = validation_parser

    def get_options_for(self, schema: Any) -> list[LabeledValue[SchemaEnforcer]]:
        return self.options_factory.process(schema)

    def get_most_valid_option(
        self,
        options: Sequence[LabeledValue[SchemaEnforcer]],
        value: Any,
    ) -> LabeledValue[SchemaEnforcer] | None:
        """Return the option rating highest for the value.

        Ties keep the earliest option. Returns None when there are no options.
        """
        best_option: LabeledValue[SchemaEnforcer] | None = None
        max_validity = float("-inf")
        for option in options:
            validation = option.value.validate(value)
            validity = self.validation_parser.rate_validity(validation)
            if validity > max_validity:
                best_option = option
                max_validity = validity
        options_logger().debug(
            "option_selected",
            value_type=get_expanded_type_of(value),
            label=best_option.label if best_option is not None else None,
            validity=max_validity if best_option is not None else None,
        )
        return best_option

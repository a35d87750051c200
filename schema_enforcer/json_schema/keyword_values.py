"""Tagged variants for schema keyword values.

Rules pattern-match on these instead of probing raw schema values:

    match read_type_names(schema, "type"):
        case TypeName(name):
            ...
        case TypeNameList(names):
            ...
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class TypeName:
    """A single type name, e.g. "string"."""
    name: str


@dataclass(frozen=True, slots=True)
class TypeNameList:
    """A list of type names. Non-string entries of the source list are dropped."""
    names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class JSONValue:
    """Any other keyword value, kept as-is."""
    value: Any


@dataclass(frozen=True, slots=True)
class Absent:
    """The keyword is not present in the schema."""


KeywordValue = Union[TypeName, TypeNameList, JSONValue, Absent]


def read_keyword_value(schema: dict, keyword: str) -> JSONValue | Absent:
    """Read a keyword holding arbitrary data. A None value still counts as present."""
    if keyword not in schema:
        return Absent()
    return JSONValue(schema[keyword])


def read_type_names(schema: dict, keyword: str) -> KeywordValue:
    """Read a keyword holding a type name or a list of type names."""
    match read_keyword_value(schema, keyword):
        case JSONValue(str() as name):
            return TypeName(name)
        case JSONValue(list() as items):
            return TypeNameList(tuple(item for item in items if isinstance(item, str)))
        case other:
            return other

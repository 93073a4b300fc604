"""
typesafe-object: schema-driven object parsing.

Public API surface:

- ``create_registry(field_types)`` -- build an immutable ``Registry`` of
  named conversion functions. ``Registry.extend()`` returns a new
  registry with more (or overriding) entries.

- ``Registry.build_parser(schema)`` -- compile a schema into an
  ``ObjectParser``. Unknown type names fail here, all at once.

- ``ObjectParser.parse(input)`` -- convert a mapping into a new dict.
  Every field is attempted; failures are bundled into one
  ``AggregateParseError``.

- ``build_parser(schema)`` -- same as above without a registry, for
  schemas made only of inline callables and nested parsers.

Examples::

    from typesafe_object.field_types import capitalized_string, rounded_integer

    registry = create_registry({
        "int": rounded_integer,
        "upper": capitalized_string,
    })
    person = registry.build_parser({"name": "upper", "age": "int"})
    person.parse({"name": "Arthur", "age": "53.7"})
    # -> {"name": "ARTHUR", "age": 54}

See also ``typesafe_object.config`` for YAML schema files and
``typesafe_object.frames`` for parsing DataFrame rows.
"""

from __future__ import annotations

from typesafe_object.exceptions import (
    AggregateParseError,
    FieldConversionError,
    FieldError,
    InputTypeError,
    SchemaError,
    TypesafeObjectError,
)
from typesafe_object.field_types import DEFAULT_FIELD_TYPES, default_registry, optional
from typesafe_object.outcome import MISSING, Failure, Outcome
from typesafe_object.parser import ObjectParser, build_parser
from typesafe_object.registry import Registry, create_registry

__all__ = [
    "AggregateParseError",
    "DEFAULT_FIELD_TYPES",
    "Failure",
    "FieldConversionError",
    "FieldError",
    "InputTypeError",
    "MISSING",
    "ObjectParser",
    "Outcome",
    "Registry",
    "SchemaError",
    "TypesafeObjectError",
    "build_parser",
    "create_registry",
    "default_registry",
    "optional",
]

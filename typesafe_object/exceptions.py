"""
Custom exception hierarchy for typesafe-object.

Callers can catch the whole family via ``TypesafeObjectError`` or pick
the construction-time (``SchemaError``) and parse-time
(``InputTypeError``, ``AggregateParseError``) failures apart.
"""

from __future__ import annotations

from dataclasses import dataclass


class TypesafeObjectError(Exception):
    """Base exception for all typesafe-object errors."""


class SchemaError(TypesafeObjectError):
    """Raised when a parser cannot be built from a schema.

    This can happen if:
    - A field references a type name that is not registered.
    - A schema value is neither a type name, a callable, a parser nor a
      nested mapping.
    - A registry is given a non-string name or a non-callable field type.
    - A YAML schema file is empty.
    """


class InputTypeError(TypesafeObjectError):
    """Raised when ``parse()`` receives something that is not a mapping."""


class FieldConversionError(TypesafeObjectError):
    """Raised by a field type to reject a single raw value.

    Never escapes ``parse()`` on its own; it is collected into an
    ``AggregateParseError``.
    """


@dataclass(frozen=True)
class FieldError:
    """One failed field from a single ``parse()`` call."""
    field: str
    message: str
    type_label: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message} ({self.type_label})"


class AggregateParseError(TypesafeObjectError):
    """Raised when one or more fields failed to convert.

    The message lists every failure in schema order; the structured
    records are available as ``errors``.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = tuple(errors)
        super().__init__(
            f"Invalid input. {', '.join(str(e) for e in self.errors)}."
        )

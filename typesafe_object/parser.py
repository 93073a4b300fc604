"""
Object parser: compiles a schema against a field-type registry and
converts input mappings field by field.

A schema maps each output key to one of:
- a registered field-type name (``"int"``),
- an inline conversion function (any callable),
- a parser-like object (anything with a callable ``parse``),
- a nested mapping, compiled into a nested ``ObjectParser`` against the
  same registry.

Construction is eager: every type name is checked up front and all
unknown references are reported together. Each entry is then resolved
once into a uniform ``convert(raw) -> Outcome`` so ``parse()`` never
re-inspects the schema.

Parsers hold no mutable state and may be shared between threads,
provided the conversion functions themselves are pure and reentrant.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from typesafe_object.exceptions import (
    AggregateParseError,
    FieldError,
    InputTypeError,
    SchemaError,
)
from typesafe_object.outcome import MISSING, Failure, Outcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

Converter = Callable[[Any], Any]


def _is_parser_like(value: object) -> bool:
    return not isinstance(value, type) and callable(getattr(value, "parse", None))


def _describe(exc: Exception) -> str:
    """Message of a conversion failure; class name when the text is empty."""
    return str(exc) or type(exc).__name__


def find_unknown_types(
    schema: Mapping[str, Any],
    field_types: Mapping[str, Converter],
    prefix: str = "",
) -> list[tuple[str, str]]:
    """Return ``(key, type_name)`` for every unresolvable type reference.

    Nested mappings are walked recursively and reported with dotted keys.
    Order follows schema iteration order.
    """
    unknown: list[tuple[str, str]] = []
    for key, spec in schema.items():
        path = f"{prefix}{key}"
        if isinstance(spec, str):
            if spec not in field_types:
                unknown.append((path, spec))
        elif isinstance(spec, Mapping):
            unknown.extend(find_unknown_types(spec, field_types, prefix=f"{path}."))
    return unknown


def _check_supported(schema: Mapping[str, Any], prefix: str = "") -> None:
    for key, spec in schema.items():
        path = f"{prefix}{key}"
        if isinstance(spec, Mapping):
            _check_supported(spec, prefix=f"{path}.")
        elif not (isinstance(spec, str) or callable(spec) or _is_parser_like(spec)):
            raise SchemaError(
                f"Invalid schema: unsupported field spec for key '{path}' "
                f"(got {type(spec).__name__}); expected a type name, a callable, "
                "a parser or a nested mapping."
            )


def check_schema(schema: Mapping[str, Any], field_types: Mapping[str, Converter]) -> None:
    """Raise ``SchemaError`` for unsupported values or unknown type references.

    Unsupported values are reported first. Unknown references are all
    listed together, nested keys in dotted form.

    Raises:
        SchemaError: If a value is neither a type name, a callable, a
            parser nor a nested mapping, or if at least one string value
            is not a registered name.
    """
    _check_supported(schema)
    unknown = find_unknown_types(schema, field_types)
    if not unknown:
        return
    details = ". ".join(
        f"Unknown field type '{type_name}' for key '{key}'" for key, type_name in unknown
    )
    valid = ", ".join(f"'{name}'" for name in sorted(field_types))
    raise SchemaError(f"Invalid schema: {details}. Valid types are: {valid}.")


@dataclass(frozen=True)
class _ResolvedField:
    """A schema entry reduced to its name, label and conversion function."""
    name: str
    type_label: str
    fn: Converter

    def convert(self, raw: Any) -> Outcome:
        try:
            value = self.fn(raw)
        except Exception as e:
            return Outcome.failure(_describe(e))
        if isinstance(value, Outcome):
            return value
        if isinstance(value, Failure):
            return Outcome.failure(value.message)
        return Outcome.success(value)


def _resolve_field(
    key: str, spec: Any, field_types: Mapping[str, Converter]
) -> _ResolvedField:
    if isinstance(spec, str):
        return _ResolvedField(key, spec, field_types[spec])
    if isinstance(spec, Mapping):
        nested = ObjectParser(spec, field_types, name=key)
        return _ResolvedField(key, nested.name, nested.parse)
    if _is_parser_like(spec):
        label = getattr(spec, "name", None) or type(spec).__name__
        return _ResolvedField(key, str(label), spec.parse)
    return _ResolvedField(key, getattr(spec, "__name__", None) or type(spec).__name__, spec)


class ObjectParser(Generic[T]):
    """Validates and converts input mappings according to a schema.

    Build through ``Registry.build_parser()`` or the top-level
    ``build_parser()``; the result type may be declared by annotating
    the parser, e.g. ``ObjectParser[Person]`` for a ``TypedDict``.

    Args:
        schema: Output key -> type name, callable, parser or nested mapping.
        field_types: Registered field types that string references resolve
            against. Defaults to none.
        name: Label used when this parser is nested in another schema.

    Raises:
        SchemaError: On any unknown type reference or unsupported value.
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        field_types: Mapping[str, Converter] | None = None,
        name: str | None = None,
    ) -> None:
        if not isinstance(schema, Mapping):
            raise SchemaError(
                f"Invalid schema: expected a mapping but got {type(schema).__name__}."
            )
        field_types = field_types if field_types is not None else {}
        check_schema(schema, field_types)
        self._fields = tuple(
            _resolve_field(key, spec, field_types) for key, spec in schema.items()
        )
        self._name = name or type(self).__name__
        logger.debug("Built parser %s with %d field(s)", self._name, len(self._fields))

    @property
    def name(self) -> str:
        return self._name

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self._fields)

    @property
    def type_labels(self) -> dict[str, str]:
        """Field name -> label used in error messages."""
        return {f.name: f.type_label for f in self._fields}

    def parse(self, input: Any) -> T:
        """Convert ``input`` into a new dict.

        Every field is attempted even when earlier ones fail. Fields
        converting to ``MISSING`` are left out; ``None`` is kept.

        Raises:
            InputTypeError: If ``input`` is not a mapping. No field is
                converted in that case.
            AggregateParseError: If any field failed.
        """
        if not isinstance(input, Mapping):
            kind = "missing" if input is MISSING else type(input).__name__
            raise InputTypeError(f"Invalid input: expected object but got {kind}.")

        result: dict[str, Any] = {}
        errors: list[FieldError] = []
        for field in self._fields:
            outcome = field.convert(input.get(field.name, MISSING))
            if not outcome.ok:
                errors.append(FieldError(field.name, outcome.error, field.type_label))
            elif outcome.value is not MISSING:
                result[field.name] = outcome.value

        if errors:
            logger.debug("%s: %d field(s) failed", self._name, len(errors))
            raise AggregateParseError(errors)
        return result

    __call__ = parse

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r} fields={list(self.field_names)}>"


def build_parser(schema: Mapping[str, Any], name: str | None = None) -> ObjectParser[Any]:
    """Build a parser without a registry.

    Only inline callables, parsers and nested mappings of those are
    usable; any string reference fails with ``SchemaError``.
    """
    return ObjectParser(schema, {}, name=name)

"""
Field-type registry for typesafe-object.

A ``Registry`` is an immutable mapping of field-type name -> conversion
function. It never changes after creation: ``extend()`` returns a new
registry holding the union of both sets, with the newer entries winning
on name collisions. Parsers built from a registry resolve their string
references against it once, at construction.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from typesafe_object.exceptions import SchemaError
from typesafe_object.parser import Converter, ObjectParser

logger = logging.getLogger(__name__)


def _validate_entries(field_types: Mapping[str, Any]) -> dict[str, Converter]:
    """Copy ``field_types`` into a plain dict, rejecting bad entries."""
    entries: dict[str, Converter] = {}
    for name, fn in field_types.items():
        if not isinstance(name, str) or not name:
            raise SchemaError(f"Invalid field type name: {name!r}. Names must be non-empty strings.")
        if not callable(fn):
            raise SchemaError(
                f"Invalid field type '{name}': expected a callable but got {type(fn).__name__}."
            )
        entries[name] = fn
    return entries


class Registry(Mapping[str, Converter]):
    """Immutable collection of named field types.

    Supports the read-only mapping protocol (``registry["int"]``,
    ``"int" in registry``, ``registry.get("int")``, iteration).
    """

    def __init__(self, field_types: Mapping[str, Converter] | None = None) -> None:
        self._entries = MappingProxyType(_validate_entries(field_types or {}))

    def __getitem__(self, name: str) -> Converter:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Registry({list(self.names)})"

    @property
    def names(self) -> list[str]:
        """Registered names, sorted."""
        return sorted(self._entries)

    def extend(self, more: Mapping[str, Converter]) -> Registry:
        """Return a new registry with the entries of ``more`` added.

        ``more`` may be a plain mapping or another ``Registry``. On a
        name collision the entry from ``more`` wins. ``self`` is left
        untouched.
        """
        overridden = sorted(set(self._entries) & set(more))
        if overridden:
            logger.debug("Overriding field type(s): %s", ", ".join(overridden))
        return Registry({**self._entries, **more})

    def build_parser(
        self, schema: Mapping[str, Any], name: str | None = None
    ) -> ObjectParser[Any]:
        """Compile ``schema`` into an ``ObjectParser`` against this registry.

        Raises:
            SchemaError: If any type name is unknown (all are listed) or a
                schema value is unsupported.
        """
        return ObjectParser(schema, self._entries, name=name)


def create_registry(field_types: Mapping[str, Converter] | None = None) -> Registry:
    """Create a registry from a mapping of name -> conversion function."""
    registry = Registry(field_types)
    logger.debug("Created registry with %d field type(s)", len(registry))
    return registry

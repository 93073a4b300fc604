"""
YAML schema files for typesafe-object.

A schema file names the parser and maps each output field to a
registered field-type name, or to a nested mapping of the same shape::

    name: person
    description: A person record
    fields:
      first_name: capitalized_string
      age: rounded_integer
      address:
        street: string
        zip: rounded_integer

Key models / functions:
- SchemaConfig: Pydantic model mirroring the file.
- load_schema(path) -> SchemaConfig: Load and validate from YAML.
- save_schema(config, path): Serialize to YAML.
- parser_from_config(registry, config_or_path) -> ObjectParser.

Only type names can be expressed in YAML; inline callables and parser
objects are composed in Python via ``Registry.build_parser()``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from typesafe_object.exceptions import SchemaError
from typesafe_object.parser import ObjectParser
from typesafe_object.registry import Registry

logger = logging.getLogger(__name__)


def _check_field_specs(fields: dict[str, Any], prefix: str = "") -> None:
    if not fields:
        raise ValueError(f"Schema '{prefix.rstrip('.') or '<root>'}' has no fields.")
    for key, spec in fields.items():
        if not isinstance(key, str):
            # YAML reads bare yes/no/on/off keys as booleans
            raise ValueError(
                f"Field name {key!r} under '{prefix.rstrip('.') or '<root>'}' "
                "must be a string; quote it in YAML."
            )
        path = f"{prefix}{key}"
        if isinstance(spec, dict):
            _check_field_specs(spec, prefix=f"{path}.")
        elif not isinstance(spec, str):
            raise ValueError(
                f"Field '{path}' must be a type name or a nested mapping, "
                f"got {type(spec).__name__}."
            )


class SchemaConfig(BaseModel):
    """A parser schema as stored in a YAML file."""

    name: str | None = Field(None, description="Parser name used in nested error labels")
    description: str = ""
    fields: dict[str, str | dict[str, Any]] = Field(
        ...,
        description="Output field -> registered type name, or a nested mapping",
    )

    @field_validator("fields")
    @classmethod
    def _check_fields(cls, value: dict[str, Any]) -> dict[str, Any]:
        """Every key must be a string, every leaf a type name; no mapping may be empty."""
        _check_field_specs(value)
        return value


def load_schema(path: str | Path) -> SchemaConfig:
    """Load and validate a YAML schema file.

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaError: If the file is empty.
        pydantic.ValidationError: If the content fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise SchemaError(f"Schema file is empty: {path}")
    logger.info("Loaded schema from %s", path)
    return SchemaConfig.model_validate(raw)


def save_schema(config: SchemaConfig, path: str | Path) -> None:
    """Serialize a SchemaConfig to YAML, keeping field order."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json", exclude_none=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# typesafe-object schema\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved schema to %s", path)


def parser_from_config(
    registry: Registry, config: SchemaConfig | str | Path
) -> ObjectParser[Any]:
    """Build a parser from a SchemaConfig or a path to a YAML schema file.

    Raises:
        SchemaError: If the schema references unknown field types.
    """
    if not isinstance(config, SchemaConfig):
        config = load_schema(config)
    return registry.build_parser(config.fields, name=config.name)

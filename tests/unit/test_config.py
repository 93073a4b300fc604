"""
Unit tests for YAML schema files (typesafe_object.config).

Tests Pydantic model validation, YAML round-trip, and building parsers
from stored schemas.
"""

import pytest
from pydantic import ValidationError

from typesafe_object import SchemaError
from typesafe_object.config import (
    SchemaConfig,
    load_schema,
    parser_from_config,
    save_schema,
)

PERSON_YAML = """\
name: person
description: A person record
fields:
  first_name: capitalized_string
  age: rounded_integer
  address:
    street: string
    zip: rounded_integer
"""


def _write(tmp_path, text: str, filename: str = "schema.yaml"):
    path = tmp_path / filename
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# SchemaConfig
# ---------------------------------------------------------------------------

class TestSchemaConfig:
    """Tests for SchemaConfig validation."""

    def test_minimal(self):
        cfg = SchemaConfig(fields={"a": "int"})
        assert cfg.name is None
        assert cfg.description == ""
        assert cfg.fields == {"a": "int"}

    def test_nested_fields(self):
        cfg = SchemaConfig(fields={"a": {"b": "int"}})
        assert cfg.fields["a"] == {"b": "int"}

    def test_missing_fields(self):
        with pytest.raises(ValidationError, match="fields"):
            SchemaConfig(name="x")

    def test_empty_fields(self):
        with pytest.raises(ValidationError, match="has no fields"):
            SchemaConfig(fields={})

    def test_empty_nested_fields(self):
        with pytest.raises(ValidationError, match="Schema 'a' has no fields"):
            SchemaConfig(fields={"a": {}})

    def test_non_string_nested_key(self):
        with pytest.raises(ValidationError, match="Field name True under 'a.b' must be a string"):
            SchemaConfig(fields={"a": {"b": {True: "int"}}})

    def test_invalid_leaf(self):
        with pytest.raises(ValidationError, match="Field 'a.b' must be a type name"):
            SchemaConfig(fields={"a": {"b": 3}})


# ---------------------------------------------------------------------------
# load_schema / save_schema
# ---------------------------------------------------------------------------

class TestLoadSchema:
    """Tests for load_schema()."""

    def test_load(self, tmp_path):
        cfg = load_schema(_write(tmp_path, PERSON_YAML))
        assert cfg.name == "person"
        assert list(cfg.fields) == ["first_name", "age", "address"]
        assert cfg.fields["address"] == {"street": "string", "zip": "rounded_integer"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Schema file not found"):
            load_schema(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        with pytest.raises(SchemaError, match="Schema file is empty"):
            load_schema(_write(tmp_path, ""))

    def test_unquoted_boolean_keys_rejected(self, tmp_path):
        text = "fields:\n  flags:\n    inner:\n      on: boolean\n"
        with pytest.raises(ValidationError, match="must be a string; quote it in YAML"):
            load_schema(_write(tmp_path, text))

    def test_unquoted_top_level_boolean_key_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            load_schema(_write(tmp_path, "fields:\n  yes: boolean\n"))

    def test_quoted_boolean_key_accepted(self, tmp_path):
        cfg = load_schema(_write(tmp_path, "fields:\n  \"yes\": boolean\n"))
        assert cfg.fields == {"yes": "boolean"}

    def test_malformed(self, tmp_path):
        with pytest.raises(ValidationError):
            load_schema(_write(tmp_path, "name: x\nfields: [a, b]\n"))


class TestSaveSchema:
    """Tests for save_schema()."""

    def test_round_trip(self, tmp_path):
        original = load_schema(_write(tmp_path, PERSON_YAML))
        out = tmp_path / "nested" / "copy.yaml"
        save_schema(original, out)
        assert out.read_text(encoding="utf-8").startswith("# typesafe-object schema")
        assert load_schema(out) == original

    def test_preserves_field_order(self, tmp_path):
        cfg = SchemaConfig(fields={"z": "int", "a": "int", "m": "int"})
        out = tmp_path / "order.yaml"
        save_schema(cfg, out)
        assert list(load_schema(out).fields) == ["z", "a", "m"]

    def test_omits_unset_name(self, tmp_path):
        out = tmp_path / "noname.yaml"
        save_schema(SchemaConfig(fields={"a": "int"}), out)
        assert "name:" not in out.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# parser_from_config
# ---------------------------------------------------------------------------

class TestParserFromConfig:
    """Tests for parser_from_config()."""

    def test_from_model(self, typesafe):
        parser = parser_from_config(typesafe, SchemaConfig(name="v", fields={"value": "int"}))
        assert parser.name == "v"
        assert parser.parse({"value": "1"}) == {"value": 1}

    def test_from_path(self, tmp_path, typesafe):
        path = _write(tmp_path, "fields:\n  guess: answer\n")
        parser = parser_from_config(typesafe, path)
        assert parser.parse({"guess": 42}) == {"guess": 42}

    def test_from_str_path(self, tmp_path, typesafe):
        path = _write(tmp_path, "fields:\n  guess: answer\n")
        parser = parser_from_config(typesafe, str(path))
        assert parser.field_names == ("guess",)

    def test_unknown_type(self, typesafe):
        with pytest.raises(SchemaError, match="Unknown field type 'bogus' for key 'a.b'"):
            parser_from_config(typesafe, SchemaConfig(fields={"a": {"b": "bogus"}}))

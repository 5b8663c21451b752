"""Tests for resourcekit.base.schema_loader module."""

import json
import pytest

from resourcekit.base.schema import FieldSchema
from resourcekit.base.schema_loader import SchemaLoader, TYPE_MAP


class TestTypeMap:

    def test_str_mapping(self):
        assert TYPE_MAP["str"] is str

    def test_int_mapping(self):
        assert TYPE_MAP["int"] is int

    def test_float_mapping(self):
        assert TYPE_MAP["float"] is float

    def test_any_mapping(self):
        assert TYPE_MAP["any"] is None


class TestSchemaLoader:

    def test_default_dir_contains_user_schema(self):
        fields = SchemaLoader().load_fields("user")
        names = [field["name"] for field in fields]
        assert "username" in names
        assert "email" in names

    def test_missing_schema(self, tmp_path):
        loader = SchemaLoader(schema_dir=str(tmp_path))
        with pytest.raises(FileNotFoundError, match="Schema 'nope' not found"):
            loader.load_fields("nope")

    def test_parses_types_and_null(self, tmp_path):
        (tmp_path / "thing.json").write_text(json.dumps([
            {"name": "title", "type": "str"},
            {"name": "count", "type": "int", "null": True},
            {"name": "payload", "type": "any", "null": True},
            {"name": "odd", "type": "unknown"},
        ]))
        fields = SchemaLoader(schema_dir=str(tmp_path)).load_fields("thing")

        assert fields[0]["type"] is str
        assert fields[0]["null"] is False
        assert fields[1]["type"] is int
        assert fields[1]["null"] is True
        assert fields[2]["type"] is None
        assert fields[3]["type"] is str

    def test_load_schema_returns_predicate(self, tmp_path):
        (tmp_path / "thing.json").write_text(json.dumps([
            {"name": "title", "type": "str"},
        ]))
        schema = SchemaLoader(schema_dir=str(tmp_path)).load_schema("thing")

        assert isinstance(schema, FieldSchema)
        assert schema({"title": "a"}) is True
        assert schema({"title": 1}) is False
        assert schema.describe_properties() == ["title"]

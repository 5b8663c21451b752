"""Schema loader for building schema predicates from JSON field lists."""

import json
import os

from resourcekit.base.schema import FieldSchema


# Map string types from JSON to actual Python types
TYPE_MAP = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
    "any": None
}


class SchemaLoader:
    """Schema loader for loading JSON schema files into predicates.

    A schema file holds a list of field definitions::

        [{"name": "username", "type": "str", "null": false}, ...]

    Unknown type names fall back to ``str``.
    """

    def __init__(self, schema_dir=None):
        """Initialize the schema loader.

        Args:
            schema_dir: Optional custom directory for schema files
        """
        if schema_dir is None:
            current_dir = os.path.dirname(os.path.abspath(__file__))
            self.schema_dir = os.path.join(current_dir, "..", "schemas")
        else:
            self.schema_dir = schema_dir

        self.schema_dir = os.path.abspath(self.schema_dir)

    def load_fields(self, name):
        """Load and parse the field definitions of a schema file.

        Args:
            name: The schema name, the file name without ``.json``

        Returns:
            List of parsed field definitions

        Raises:
            FileNotFoundError: If the schema file doesn't exist
        """
        schema_file = os.path.join(self.schema_dir, f"{name}.json")

        if not os.path.exists(schema_file):
            raise FileNotFoundError(f"Schema '{name}' not found: {schema_file}")

        with open(schema_file, encoding='utf-8') as f:
            raw_fields = json.load(f)

        parsed_fields = []
        for field in raw_fields:
            parsed_field = dict(field)  # copy to avoid mutation
            parsed_field["type"] = TYPE_MAP.get(parsed_field.get("type"), str)
            parsed_field["null"] = bool(parsed_field.get("null", False))
            parsed_fields.append(parsed_field)

        return parsed_fields

    def load_schema(self, name):
        """Load a schema file as a FieldSchema predicate."""
        return FieldSchema(self.load_fields(name))

"""Schema resolver: maps OpenAPI schemas onto C# type names.

The generator treats the names returned here as opaque text. Collection
types come back fully qualified (``System.Collections.Generic.*``); the
generator strips the qualifier where the client imports the namespace.
"""

import re

from refitgen.generator.naming import FILE_RESPONSE_TYPE, capitalize

VOID_TYPE = "void"
OBJECT_TYPE = "object"
COLLECTION_TYPE = "System.Collections.Generic.ICollection"
DICTIONARY_TYPE = "System.Collections.Generic.IDictionary"

REF_PREFIXES = ("#/components/schemas/", "#/definitions/")

INTEGER_FORMATS = {"int64": "long"}
NUMBER_FORMATS = {"float": "float", "decimal": "decimal"}
STRING_FORMATS = {
    "date": "System.DateTimeOffset",
    "date-time": "System.DateTimeOffset",
    "uuid": "System.Guid",
    "guid": "System.Guid",
    "binary": FILE_RESPONSE_TYPE,
}

_IDENTIFIER_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def identifier(value: str, fallback: str) -> str:
    """PascalCase C# identifier built from the alphanumeric runs of ``value``.

        >>> identifier("user-update", "X")
        'UserUpdate'
    """
    name = "".join(capitalize(part) for part in _IDENTIFIER_SEPARATORS.split(value) if part)
    if not name:
        return fallback
    if name[0].isdigit():
        return "_" + name
    return name


def class_name(schema_name: str) -> str:
    """Turn a component schema name into a valid C# class name."""
    return identifier(schema_name, OBJECT_TYPE)


class SchemaResolver:
    """Resolves raw schema mappings to type names."""

    def type_name(self, schema: dict | None) -> str:
        if schema is None:
            return VOID_TYPE

        ref = schema.get("$ref")
        if ref:
            return self.ref_name(ref)

        all_of = schema.get("allOf") or []
        if len(all_of) == 1:
            return self.type_name(all_of[0])

        schema_type = schema.get("type")
        schema_format = schema.get("format")

        if schema_type == "integer":
            return INTEGER_FORMATS.get(schema_format, "int")
        if schema_type == "number":
            return NUMBER_FORMATS.get(schema_format, "double")
        if schema_type == "boolean":
            return "bool"
        if schema_type == "string":
            return STRING_FORMATS.get(schema_format, "string")
        if schema_type == "file":
            return FILE_RESPONSE_TYPE
        if schema_type == "array":
            return f"{COLLECTION_TYPE}<{self.type_name(schema.get('items') or {})}>"

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict) and not schema.get("properties"):
            return f"{DICTIONARY_TYPE}<string, {self.type_name(additional)}>"

        return OBJECT_TYPE

    def ref_name(self, ref: str) -> str:
        for prefix in REF_PREFIXES:
            if ref.startswith(prefix):
                return class_name(ref[len(prefix):])
        return class_name(ref.rsplit("/", 1)[-1])

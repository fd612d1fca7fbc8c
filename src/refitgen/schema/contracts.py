"""Contract writer: C# model types for the document's component schemas."""

import re

from refitgen.generator.methods import INDENT, render_doc_comment
from refitgen.generator.naming import FILE_RESPONSE_TYPE
from refitgen.parser.base import ApiDescription
from refitgen.schema.resolver import SchemaResolver, class_name, identifier

CONTRACT_USINGS = ("using System.Runtime.Serialization;",)
JSON_PROPERTY_ATTRIBUTE = "System.Text.Json.Serialization.JsonPropertyName"

MEMBER_INDENT = INDENT * 2

_FILE_RESPONSE_PATTERN = re.compile(rf"\b{FILE_RESPONSE_TYPE}\b")

_STREAM_HEADERS_TYPE = (
    "System.Collections.Generic.IReadOnlyDictionary<string, System.Collections.Generic.IEnumerable<string>>"
)

# Result type for binary responses; Refit hands the body over as a stream
FILE_RESPONSE_CLASS = (
    f"public partial class {FILE_RESPONSE_TYPE} : System.IDisposable",
    "{",
    f"{INDENT}public {FILE_RESPONSE_TYPE}(int statusCode, {_STREAM_HEADERS_TYPE} headers, System.IO.Stream stream)",
    f"{INDENT}{{",
    f"{INDENT}{INDENT}StatusCode = statusCode;",
    f"{INDENT}{INDENT}Headers = headers;",
    f"{INDENT}{INDENT}Stream = stream;",
    f"{INDENT}}}",
    "",
    f"{INDENT}public int StatusCode {{ get; private set; }}",
    "",
    f"{INDENT}public {_STREAM_HEADERS_TYPE} Headers {{ get; private set; }}",
    "",
    f"{INDENT}public System.IO.Stream Stream {{ get; private set; }}",
    "",
    f"{INDENT}public bool IsPartial => StatusCode == 206;",
    "",
    f"{INDENT}public void Dispose()",
    f"{INDENT}{{",
    f"{INDENT}{INDENT}Stream.Dispose();",
    f"{INDENT}}}",
    "}",
)


class ContractWriter:
    """Renders enums and partial classes for every component schema."""

    def __init__(self, resolver: SchemaResolver, namespace: str, doc_comments: bool = True):
        self.resolver = resolver
        self.namespace = namespace
        self.doc_comments = doc_comments

    def render(self, document: ApiDescription) -> str:
        lines = list(CONTRACT_USINGS)
        lines.append("")
        lines.append(f"namespace {self.namespace}")
        lines.append("{")
        for schema_name, schema in document.schemas.items():
            type_name = class_name(schema_name)
            if "enum" in schema:
                lines.extend(self._render_enum(type_name, schema))
            else:
                lines.extend(self._render_class(type_name, schema))
            lines.append("")
        if self._needs_file_response(document):
            lines.extend(f"{INDENT}{line}".rstrip() for line in FILE_RESPONSE_CLASS)
            lines.append("")
        lines.append("}")
        return "\n".join(lines) + "\n"

    # -- enums ----------------------------------------------------------------

    def _render_enum(self, type_name: str, schema: dict) -> list[str]:
        lines = self._summary(schema.get("description"), INDENT)
        lines.append(f"{INDENT}public enum {type_name}")
        lines.append(f"{INDENT}{{")

        seen: set[str] = set()
        for value in schema["enum"]:
            if value is None:
                continue
            member = _unique(identifier(str(value), "Empty"), seen)
            if isinstance(value, int) and not isinstance(value, bool):
                lines.append(f"{MEMBER_INDENT}{member} = {value},")
            else:
                lines.append(f'{MEMBER_INDENT}[EnumMember(Value = "{value}")]')
                lines.append(f"{MEMBER_INDENT}{member},")
            lines.append("")

        lines.append(f"{INDENT}}}")
        return lines

    # -- classes --------------------------------------------------------------

    def _class_members(self, schema: dict) -> tuple[str | None, dict]:
        """Base class (first allOf reference) and the merged inline properties."""
        base_type = None
        properties = dict(schema.get("properties") or {})
        for member in schema.get("allOf") or []:
            if "$ref" in member and base_type is None:
                base_type = self.resolver.type_name(member)
            else:
                properties.update(member.get("properties") or {})
        return base_type, properties

    def _render_class(self, type_name: str, schema: dict) -> list[str]:
        base_type, properties = self._class_members(schema)

        lines = self._summary(schema.get("description"), INDENT)
        declaration = f"{INDENT}public partial class {type_name}"
        if base_type:
            declaration += f" : {base_type}"
        lines.append(declaration)
        lines.append(f"{INDENT}{{")

        seen: set[str] = set()
        for json_name, property_schema in properties.items():
            property_schema = property_schema or {}
            name = identifier(json_name, "Property")
            if name == type_name:
                name += "Property"
            name = _unique(name, seen)

            lines.extend(self._summary(property_schema.get("description"), MEMBER_INDENT))
            lines.append(f'{MEMBER_INDENT}[{JSON_PROPERTY_ATTRIBUTE}("{json_name}")]')
            lines.append(f"{MEMBER_INDENT}public {self.resolver.type_name(property_schema)} {name} {{ get; set; }}")
            lines.append("")

        lines.append(f"{INDENT}}}")
        return lines

    # -- file responses -------------------------------------------------------

    def _needs_file_response(self, document: ApiDescription) -> bool:
        """True when a response or a property resolves to FileResponse and no schema defines it."""
        if any(class_name(name) == FILE_RESPONSE_TYPE for name in document.schemas):
            return False

        type_names = [
            self.resolver.type_name(response.type_schema)
            for _verb, _route, operation in document.iter_operations()
            for response in operation.responses.values()
        ]
        for schema in document.schemas.values():
            _base_type, properties = self._class_members(schema)
            type_names.extend(self.resolver.type_name(p or {}) for p in properties.values())
        return any(_FILE_RESPONSE_PATTERN.search(name) for name in type_names)

    def _summary(self, description: str | None, indent: str) -> list[str]:
        if not self.doc_comments or not description or not description.strip():
            return []
        return render_doc_comment(description, indent)


def _unique(name: str, seen: set[str]) -> str:
    candidate = name
    suffix = 2
    while candidate in seen:
        candidate = f"{name}{suffix}"
        suffix += 1
    seen.add(candidate)
    return candidate

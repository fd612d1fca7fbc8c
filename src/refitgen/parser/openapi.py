"""OpenAPI / Swagger document loader.

Loads OpenAPI 3.x and Swagger 2.0 documents into an ApiDescription.
YAML is chosen by file extension, everything else is read as JSON.
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from refitgen.errors import DocumentLoadError

from .base import ApiDescription, Operation, Parameter, ParameterKind, Response

logger = logging.getLogger(__name__)

HTTP_VERBS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
PREFERRED_CONTENT_TYPE = "application/json"
DEFAULT_BODY_NAME = "body"


def is_yaml_path(file_path: str | Path) -> bool:
    """True when the path names a YAML document."""
    return str(file_path).lower().endswith(("yaml", "yml"))


def load_document(file_path: str | Path) -> ApiDescription:
    """Load and parse an API description file."""
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Cannot read API description: {e}", str(path)) from e

    try:
        doc = yaml.safe_load(text) if is_yaml_path(path) else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DocumentLoadError(f"Cannot parse API description: {e}", str(path)) from e

    description = parse_document(doc, source=str(path))
    logger.debug("Loaded %s: %d operations, %d schemas", path, description.operation_count, len(description.schemas))
    return description


def parse_document(doc: object, source: str | None = None) -> ApiDescription:
    """Convert a decoded OpenAPI/Swagger document into an ApiDescription."""
    if not isinstance(doc, dict):
        raise DocumentLoadError("Document root must be a mapping", source)
    if "openapi" not in doc and "swagger" not in doc:
        raise DocumentLoadError("Missing 'openapi' or 'swagger' version field", source)

    paths = _mapping(doc.get("paths"), "'paths'", source)
    info = _mapping(doc.get("info"), "'info'", source)
    title = info.get("title")

    try:
        return ApiDescription(
            title=None if title is None else str(title),
            version=str(info.get("version", "")),
            paths={
                str(route): _parse_path_item(doc, str(route), item, source)
                for route, item in paths.items()
            },
            schemas=_component_schemas(doc, source),
        )
    except ValidationError as e:
        raise DocumentLoadError(f"Invalid API description: {e}", source) from e


def _mapping(value: object, what: str, source: str | None) -> dict:
    """``value`` as a mapping, treating a missing value as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentLoadError(f"{what} must be a mapping", source)
    return value


def _sequence(value: object, what: str, source: str | None) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentLoadError(f"{what} must be a list", source)
    return value


def _component_schemas(doc: dict, source: str | None) -> dict[str, dict]:
    if "swagger" in doc:
        schemas = _mapping(doc.get("definitions"), "'definitions'", source)
    else:
        components = _mapping(doc.get("components"), "'components'", source)
        schemas = _mapping(components.get("schemas"), "'components.schemas'", source)
    return {str(name): schema for name, schema in schemas.items()}


def _parse_path_item(doc: dict, route: str, item: object, source: str | None) -> dict[str, Operation]:
    if not isinstance(item, dict):
        raise DocumentLoadError(f"Path item '{route}' must be a mapping", source)

    shared = _sequence(item.get("parameters"), f"Parameters of '{route}'", source)
    operations = {}
    for verb, operation in item.items():
        if str(verb).lower() not in HTTP_VERBS:
            continue
        if not isinstance(operation, dict):
            raise DocumentLoadError(f"Operation '{verb} {route}' must be a mapping", source)
        operations[str(verb).lower()] = _parse_operation(doc, operation, shared, source)
    return operations


def _parse_operation(doc: dict, operation: dict, shared: list, source: str | None) -> Operation:
    own = _sequence(operation.get("parameters"), "Operation parameters", source)
    parameters = [_parse_parameter(p, source) for p in _merge_parameters(doc, shared, own, source)]

    request_body = operation.get("requestBody")
    if request_body:
        parameters.append(_parse_request_body(_resolve_ref(doc, request_body, "Request body", source), source))

    return Operation(
        operation_id=operation.get("operationId"),
        summary=operation.get("summary") or "",
        description=operation.get("description"),
        parameters=parameters,
        responses=_parse_responses(doc, _mapping(operation.get("responses"), "'responses'", source), source),
        tags=operation.get("tags") or [],
    )


def _merge_parameters(doc: dict, shared: list, own: list, source: str | None) -> list[dict]:
    """Path-level parameters first, unless the operation redeclares them."""
    own = [_resolve_ref(doc, p, "Parameter", source) for p in own]
    own_keys = {(p.get("name"), p.get("in")) for p in own}
    inherited = [
        p for p in (_resolve_ref(doc, p, "Parameter", source) for p in shared)
        if (p.get("name"), p.get("in")) not in own_keys
    ]
    return inherited + own


def _parse_parameter(raw: dict, source: str | None) -> Parameter:
    name = raw.get("name")
    if not name:
        raise DocumentLoadError("Parameter without a name", source)
    try:
        kind = ParameterKind(raw.get("in", "query"))
    except ValueError:
        raise DocumentLoadError(f"Parameter '{name}' has unknown location '{raw.get('in')}'", source) from None

    if "schema" in raw:
        schema = raw["schema"]
    else:
        # Swagger 2 non-body parameters carry their type inline
        schema = {k: raw[k] for k in ("type", "format", "items", "enum") if k in raw} or None

    return Parameter(
        name=str(name),
        kind=kind,
        type_schema=schema,
        required=bool(raw.get("required", False)),
        description=raw.get("description") or "",
    )


def _parse_request_body(body: dict, source: str | None) -> Parameter:
    return Parameter(
        name=body.get("x-name") or DEFAULT_BODY_NAME,
        kind=ParameterKind.BODY,
        type_schema=_select_content_schema(body.get("content"), source),
        required=bool(body.get("required", False)),
        description=body.get("description") or "",
    )


def _parse_responses(doc: dict, responses: dict, source: str | None) -> dict[str, Response]:
    result = {}
    for status_code, response in responses.items():
        response = _resolve_ref(doc, response or {}, f"Response '{status_code}'", source)
        if "schema" in response:
            schema = response["schema"]
        else:
            schema = _select_content_schema(response.get("content"), source)
        result[str(status_code)] = Response(
            status_code=str(status_code),
            description=response.get("description") or "",
            type_schema=schema,
        )
    return result


def _select_content_schema(content: object, source: str | None) -> dict | None:
    content = _mapping(content, "'content'", source)
    if not content:
        return None
    if PREFERRED_CONTENT_TYPE in content:
        media = content[PREFERRED_CONTENT_TYPE]
    else:
        # Fallback: first declared media type
        media = next(iter(content.values()))
    return _mapping(media, "Media type", source).get("schema")


def _resolve_ref(doc: dict, obj: object, what: str, source: str | None, seen: tuple[str, ...] = ()) -> dict:
    """Follow a local ``$ref`` to a parameter, request body or response."""
    if not isinstance(obj, dict):
        raise DocumentLoadError(f"{what} must be a mapping", source)
    if "$ref" not in obj:
        return obj

    ref = obj["$ref"]
    if not isinstance(ref, str) or not ref.startswith("#/"):
        raise DocumentLoadError(f"Only local references are supported: {ref}", source)
    if ref in seen:
        raise DocumentLoadError(f"Circular reference: {' -> '.join(seen + (ref,))}", source)

    target = doc
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")
        if not isinstance(target, dict) or segment not in target:
            raise DocumentLoadError(f"Unresolvable reference: {ref}", source)
        target = target[segment]
    return _resolve_ref(doc, target, what, source, seen + (ref,))

"""Data models for a parsed API description.

The OpenAPI loader converts both OpenAPI 3.x and Swagger 2.0 documents
into these models. Schemas are kept as raw mappings; turning them into
type names is the schema resolver's job.
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ParameterKind(str, Enum):
    """Where a parameter is carried in the request."""

    PATH = "path"
    BODY = "body"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    FORM_DATA = "formData"


class Parameter(BaseModel):
    """A single operation parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ParameterKind
    type_schema: dict | None = None
    required: bool = False
    description: str = ""


class Response(BaseModel):
    """A declared response for one status code."""

    model_config = ConfigDict(frozen=True)

    status_code: str
    description: str = ""
    type_schema: dict | None = None


class Operation(BaseModel):
    """One HTTP verb bound to one route."""

    model_config = ConfigDict(frozen=True)

    operation_id: str | None = None
    summary: str = ""
    description: str | None = None
    parameters: list[Parameter] = []
    responses: dict[str, Response] = {}
    tags: list[str] = []


class ApiDescription(BaseModel):
    """A loaded API description.

    ``paths`` maps route -> verb -> operation and keeps the order the
    routes and verbs were declared in the source document.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    version: str = ""
    paths: dict[str, dict[str, Operation]] = {}
    schemas: dict[str, dict] = {}

    def iter_operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield ``(route, verb, operation)`` in declaration order."""
        for route, operations in self.paths.items():
            for verb, operation in operations.items():
                yield route, verb, operation

    @property
    def operation_count(self) -> int:
        return sum(len(operations) for operations in self.paths.values())

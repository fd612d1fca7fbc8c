"""Return-type resolver."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from refitgen.generator.naming import strip_namespace_prefixes
from refitgen.parser.base import Response

VOID_TYPE = "void"
TASK_TYPE = "Task"


@dataclass(frozen=True)
class ReturnType:
    """Either "no value" (``type_name is None``) or "a value of type_name"."""

    type_name: str | None = None

    @property
    def has_value(self) -> bool:
        return self.type_name is not None

    def render(self) -> str:
        if self.type_name is None:
            return TASK_TYPE
        return f"{TASK_TYPE}<{self.type_name}>"


def resolve_return_type(
    responses: Mapping[str, Response],
    resolve_type: Callable[[dict | None], str],
    imported_namespaces: Iterable[str] = (),
    status_codes: Iterable[str] = ("200",),
) -> ReturnType:
    """Pick the method result from the first configured success response."""
    for status_code in status_codes:
        response = responses.get(status_code)
        if response is not None:
            break
    else:
        return ReturnType()

    type_name = resolve_type(response.type_schema)
    if not type_name or type_name == VOID_TYPE:
        return ReturnType()
    return ReturnType(strip_namespace_prefixes(type_name, imported_namespaces))

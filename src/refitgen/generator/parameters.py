"""Parameter classifier: route-bound and payload-bound method parameters."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from refitgen.generator.naming import DEFAULT_TYPE_ALIASES, map_file_response_alias, strip_namespace_prefixes
from refitgen.parser.base import Parameter, ParameterKind

TypeResolver = Callable[[dict | None], str]

# Emission order. Kinds not listed here (query, header, ...) are not emitted.
PARAMETER_ORDER = (ParameterKind.PATH, ParameterKind.BODY)

BODY_ATTRIBUTE = "[Body]"

# A parameter always carries a value, so an untyped one is "object", never "void"
VOID_TYPE = "void"
UNTYPED_PARAMETER_TYPE = "object"


@dataclass(frozen=True)
class ParameterDeclaration:
    """One typed parameter of a generated method."""

    kind: ParameterKind
    type_name: str
    name: str

    def render(self) -> str:
        prefix = BODY_ATTRIBUTE if self.kind is ParameterKind.BODY else ""
        return f"{prefix}{self.type_name} {self.name}"


def classify_parameters(
    parameters: Iterable[Parameter],
    resolve_type: TypeResolver,
    imported_namespaces: Iterable[str] = (),
    type_aliases: Mapping[str, str] = DEFAULT_TYPE_ALIASES,
) -> list[ParameterDeclaration]:
    """Declarations for route-bound then payload-bound parameters.

    Within each kind the declared order is kept, so a path parameter
    declared after the body still comes first.
    """
    imported_namespaces = tuple(imported_namespaces)
    emitted = [p for p in parameters if p.kind in PARAMETER_ORDER]
    # sorted() is stable: ties keep their declared order
    emitted = sorted(emitted, key=lambda p: PARAMETER_ORDER.index(p.kind))

    declarations = []
    for parameter in emitted:
        type_name = resolve_type(parameter.type_schema) if parameter.type_schema is not None else None
        if not type_name or type_name == VOID_TYPE:
            type_name = UNTYPED_PARAMETER_TYPE
        if parameter.kind is ParameterKind.BODY:
            type_name = strip_namespace_prefixes(
                map_file_response_alias(type_name, type_aliases), imported_namespaces
            )
        declarations.append(ParameterDeclaration(parameter.kind, type_name, parameter.name))
    return declarations

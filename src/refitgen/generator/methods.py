"""Method emitter: one Refit interface method per API operation."""

from collections.abc import Callable
from dataclasses import dataclass
from xml.sax.saxutils import escape

from refitgen.errors import InvalidInputError
from refitgen.generator.naming import capitalize, kebab_to_pascal
from refitgen.generator.parameters import ParameterDeclaration, classify_parameters
from refitgen.generator.returns import ReturnType, resolve_return_type
from refitgen.parser.base import Operation
from refitgen.settings import GenerationSettings

INDENT = "    "
METHOD_INDENT = INDENT * 2


@dataclass(frozen=True)
class GeneratedMethod:
    """Everything needed to render one interface method."""

    verb: str
    route: str
    name: str
    return_type: ReturnType
    parameters: tuple[ParameterDeclaration, ...]
    doc_comment: str | None = None

    @property
    def signature(self) -> str:
        params = ", ".join(p.render() for p in self.parameters)
        return f"{self.return_type.render()} {self.name}({params});"


def method_name(operation: Operation, route: str, verb: str) -> str:
    """PascalCase method name derived from the operationId."""
    if not operation.operation_id:
        raise InvalidInputError("missing operationId", operation=f"{verb.upper()} {route}")
    name = kebab_to_pascal(capitalize(operation.operation_id))
    if not name:
        raise InvalidInputError(
            f"operationId '{operation.operation_id}' has no name characters",
            operation=f"{verb.upper()} {route}",
        )
    return name


def build_method(
    route: str,
    verb: str,
    operation: Operation,
    resolve_type: Callable[[dict | None], str],
    settings: GenerationSettings,
) -> GeneratedMethod:
    name = method_name(operation, route, verb)

    doc_comment = None
    if settings.generate_xml_doc_code_comments and operation.description and operation.description.strip():
        doc_comment = operation.description

    return GeneratedMethod(
        verb=capitalize(verb),
        route=route,
        name=name,
        return_type=resolve_return_type(
            operation.responses,
            resolve_type,
            imported_namespaces=settings.imported_namespaces,
            status_codes=settings.return_type_status_codes,
        ),
        parameters=tuple(
            classify_parameters(
                operation.parameters,
                resolve_type,
                imported_namespaces=settings.imported_namespaces,
                type_aliases=settings.type_aliases,
            )
        ),
        doc_comment=doc_comment,
    )


def render_doc_comment(text: str, indent: str) -> list[str]:
    """XML ``<summary>`` block, one ``///`` line per line of text."""
    lines = [f"{indent}/// <summary>"]
    lines.extend(f"{indent}/// {escape(line)}".rstrip() for line in text.strip().splitlines())
    lines.append(f"{indent}/// </summary>")
    return lines


def render_method(method: GeneratedMethod, indent: str = METHOD_INDENT) -> list[str]:
    """Lines for one method, ending with a blank separator line."""
    lines = []
    if method.doc_comment is not None:
        lines.extend(render_doc_comment(method.doc_comment, indent))
    lines.append(f'{indent}[{method.verb}("{method.route}")]')
    lines.append(f"{indent}{method.signature}")
    lines.append("")
    return lines

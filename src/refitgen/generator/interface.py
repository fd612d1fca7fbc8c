"""Interface emitter: wraps generated methods in a Refit interface."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from refitgen.generator.methods import INDENT, GeneratedMethod, build_method, render_method
from refitgen.generator.naming import capitalize
from refitgen.parser.base import ApiDescription
from refitgen.settings import DEFAULT_INTERFACE_NAME, GenerationSettings, NamingSettings

logger = logging.getLogger(__name__)

AUTO_GENERATED_HEADER = (
    "// <auto-generated>",
    "//     This code was generated by refitgen.",
    "// </auto-generated>",
)

# Fixed by the Refit client contract, not derived from the document
USINGS = (
    "using Refit;",
    "using System.Threading.Tasks;",
    "using System.Collections.Generic;",
)

TITLE_SEPARATORS = (" ", "-", ".")


@dataclass(frozen=True)
class InterfaceDeclaration:
    namespace: str
    name: str
    methods: tuple[GeneratedMethod, ...]
    auto_generated_header: bool = True


def interface_name(title: str | None, naming: NamingSettings) -> str:
    """``I`` + the capitalized title (separators removed) or explicit name."""
    if naming.use_open_api_title:
        name = title or ""
        for separator in TITLE_SEPARATORS:
            name = name.replace(separator, "")
        if not name:
            logger.debug("No usable document title, falling back to %s", DEFAULT_INTERFACE_NAME)
            name = DEFAULT_INTERFACE_NAME
    else:
        name = naming.interface_name
    return "I" + capitalize(name)


def build_interface(
    document: ApiDescription,
    settings: GenerationSettings,
    resolve_type: Callable[[dict | None], str],
) -> InterfaceDeclaration:
    """Build every method up front so a bad operation fails the whole run."""
    methods = tuple(
        build_method(route, verb, operation, resolve_type, settings)
        for route, verb, operation in document.iter_operations()
    )
    logger.debug("Built %d interface methods", len(methods))
    return InterfaceDeclaration(
        namespace=settings.namespace,
        name=interface_name(document.title, settings.naming),
        methods=methods,
        auto_generated_header=settings.add_auto_generated_header,
    )


def render_interface(declaration: InterfaceDeclaration) -> str:
    lines = []
    if declaration.auto_generated_header:
        lines.extend(AUTO_GENERATED_HEADER)
        lines.append("")

    lines.extend(USINGS)
    lines.append("")

    lines.append(f"namespace {declaration.namespace}")
    lines.append("{")
    lines.append(f"{INDENT}public interface {declaration.name}")
    lines.append(f"{INDENT}{{")
    for method in declaration.methods:
        lines.extend(render_method(method))
    lines.append(f"{INDENT}}}")
    lines.append("}")
    return "\n".join(lines) + "\n"

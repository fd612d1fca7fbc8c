"""Generator facade: Refit interface plus contract types in one output."""

import asyncio
import logging
from dataclasses import dataclass, field

from refitgen.errors import DocumentLoadError
from refitgen.generator.interface import build_interface, render_interface
from refitgen.parser.base import ApiDescription
from refitgen.parser.openapi import load_document
from refitgen.schema.contracts import ContractWriter
from refitgen.schema.resolver import SchemaResolver
from refitgen.settings import GenerationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationContext:
    """A loaded description and the settings to generate it with."""

    document: ApiDescription
    settings: GenerationSettings
    resolver: SchemaResolver = field(default_factory=SchemaResolver)


def generate(context: GenerationContext) -> str:
    """Render the client interface followed by the contract types.

    Pure function of ``context``: the same context always gives the same text.
    """
    settings = context.settings
    client = render_interface(build_interface(context.document, settings, context.resolver.type_name))

    contracts = ""
    if settings.generate_contracts:
        writer = ContractWriter(
            context.resolver,
            settings.namespace,
            doc_comments=settings.generate_xml_doc_code_comments,
        )
        contracts = writer.render(context.document)

    return f"{client}\n\n{contracts}\n"


class RefitGenerator:
    """Generates a Refit client interface from one API description."""

    def __init__(self, context: GenerationContext):
        self.context = context

    @classmethod
    def create(cls, settings: GenerationSettings) -> "RefitGenerator":
        """Load the description named by ``settings.open_api_path``."""
        if not settings.open_api_path:
            raise DocumentLoadError("No OpenAPI path configured")
        document = load_document(settings.open_api_path)
        return cls(GenerationContext(document=document, settings=settings))

    @classmethod
    async def create_async(cls, settings: GenerationSettings) -> "RefitGenerator":
        """``create`` with the file load moved off the event loop."""
        return await asyncio.to_thread(cls.create, settings)

    def generate(self) -> str:
        logger.debug("Generating client for %s", self.context.settings.open_api_path)
        return generate(self.context)

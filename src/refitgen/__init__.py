"""Generate Refit client interfaces from OpenAPI descriptions."""

from refitgen.errors import DocumentLoadError, InvalidInputError, RefitgenError
from refitgen.generator.refit import GenerationContext, RefitGenerator, generate
from refitgen.settings import GenerationSettings, NamingSettings

__all__ = [
    "DocumentLoadError",
    "GenerationContext",
    "GenerationSettings",
    "InvalidInputError",
    "NamingSettings",
    "RefitGenerator",
    "RefitgenError",
    "generate",
]

"""Settings for one generation run.

Field aliases follow the camelCase keys of a ``.refitter`` settings file,
so a settings file can be validated straight into ``GenerationSettings``.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from refitgen.errors import DocumentLoadError

DEFAULT_NAMESPACE = "GeneratedCode"
DEFAULT_INTERFACE_NAME = "ApiClient"
DEFAULT_OUTPUT_PATH = "Output.cs"


class NamingSettings(BaseModel):
    """How the generated interface is named."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    use_open_api_title: bool = Field(default=True, alias="useOpenApiTitle")
    interface_name: str = Field(default=DEFAULT_INTERFACE_NAME, alias="interfaceName")


class GenerationSettings(BaseModel):
    """Immutable configuration for one generation run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    open_api_path: str | None = Field(default=None, alias="openApiPath")
    namespace: str = DEFAULT_NAMESPACE
    naming: NamingSettings = NamingSettings()
    generate_contracts: bool = Field(default=True, alias="generateContracts")
    generate_xml_doc_code_comments: bool = Field(default=True, alias="generateXmlDocCodeComments")
    add_auto_generated_header: bool = Field(default=True, alias="addAutoGeneratedHeader")
    output_path: str = Field(default=DEFAULT_OUTPUT_PATH, alias="outputPath")

    # Narrow by default: only "200" picks the return type, only FileResponse
    # is aliased and only System.Collections.Generic is stripped.
    return_type_status_codes: tuple[str, ...] = Field(default=("200",), alias="returnTypeStatusCodes")
    type_aliases: dict[str, str] = Field(
        default_factory=lambda: {"FileResponse": "StreamPart"}, alias="typeAliases"
    )
    imported_namespaces: tuple[str, ...] = Field(
        default=("System.Collections.Generic",), alias="importedNamespaces"
    )

    @classmethod
    def from_file(cls, settings_path: Path) -> "GenerationSettings":
        """Load settings from a JSON settings file."""
        try:
            data = json.loads(Path(settings_path).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(f"Cannot read settings file: {e}", str(settings_path)) from e
        except json.JSONDecodeError as e:
            raise DocumentLoadError(f"Invalid JSON: {e}", str(settings_path)) from e

        try:
            settings = cls.model_validate(data)
        except ValidationError as e:
            raise DocumentLoadError(f"Invalid settings: {e}", str(settings_path)) from e

        # openApiPath is relative to the settings file, not the working directory
        if settings.open_api_path and not Path(settings.open_api_path).is_absolute():
            resolved = Path(settings_path).parent / settings.open_api_path
            settings = settings.model_copy(update={"open_api_path": str(resolved)})
        return settings

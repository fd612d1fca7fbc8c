"""CLI entry point for refitgen."""

import logging
from pathlib import Path

import click

from refitgen.errors import RefitgenError
from refitgen.generator.refit import RefitGenerator
from refitgen.settings import GenerationSettings


def _build_settings(
    openapi_path: Path | None,
    settings_file: Path | None,
    overrides: dict,
    naming_overrides: dict,
) -> GenerationSettings:
    """Settings file (if any) first, then command line overrides on top."""
    settings = GenerationSettings.from_file(settings_file) if settings_file else GenerationSettings()

    if openapi_path is not None:
        overrides["open_api_path"] = str(openapi_path)
    if naming_overrides:
        overrides["naming"] = settings.naming.model_copy(update=naming_overrides)
    settings = settings.model_copy(update=overrides)

    if not settings.open_api_path:
        raise click.UsageError("Provide OPENAPI_PATH or a --settings-file with openApiPath.")
    return settings


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """refitgen — generate Refit client interfaces from OpenAPI documents."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("openapi_path", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--settings-file", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="JSON settings file (.refitter format).")
@click.option("-n", "--namespace", default=None, help="Namespace of the generated code.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output file path.")
@click.option("--interface-name", default=None, help="Explicit interface name (disables title naming).")
@click.option("--use-title/--no-use-title", default=None, help="Derive the interface name from the document title.")
@click.option("--contracts/--no-contracts", default=None, help="Include contract types.")
@click.option("--xml-docs/--no-xml-docs", default=None, help="Include XML doc comments.")
@click.option("--header/--no-header", default=None, help="Include the auto-generated banner.")
def generate(
    openapi_path: Path | None,
    settings_file: Path | None,
    namespace: str | None,
    output: Path | None,
    interface_name: str | None,
    use_title: bool | None,
    contracts: bool | None,
    xml_docs: bool | None,
    header: bool | None,
):
    """Generate a Refit interface from an OpenAPI (JSON or YAML) document."""
    overrides = {}
    if namespace is not None:
        overrides["namespace"] = namespace
    if output is not None:
        overrides["output_path"] = str(output)
    if contracts is not None:
        overrides["generate_contracts"] = contracts
    if xml_docs is not None:
        overrides["generate_xml_doc_code_comments"] = xml_docs
    if header is not None:
        overrides["add_auto_generated_header"] = header

    naming_overrides = {}
    if interface_name is not None:
        naming_overrides["interface_name"] = interface_name
        naming_overrides["use_open_api_title"] = False
    if use_title is not None:
        naming_overrides["use_open_api_title"] = use_title

    try:
        settings = _build_settings(openapi_path, settings_file, overrides, naming_overrides)
        click.echo(f"Loading {settings.open_api_path}...")
        generator = RefitGenerator.create(settings)
        click.echo(f"Found {generator.context.document.operation_count} operations.")
        code = generator.generate()
    except RefitgenError as e:
        raise click.ClickException(str(e)) from e

    output_path = Path(settings.output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(code, encoding="utf-8")
    click.echo(f"Generated {output_path}")

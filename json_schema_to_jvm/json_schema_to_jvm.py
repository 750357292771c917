import json
import logging

import click

from .pipeline import CodeGeneratorConfig, ConfigurationError, GenerationError, generate_models
from .pipeline.config import SUPPORTED_LANGUAGES


def load_config(config_path):
    """Read a JSON config file into a CodeGeneratorConfig (defaults when no file)."""
    if config_path is None:
        return CodeGeneratorConfig()
    with open(config_path) as f:
        try:
            return CodeGeneratorConfig.from_dict(json.load(f))
        except (json.JSONDecodeError, ValueError) as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--language", "-l", default=None, type=click.Choice(SUPPORTED_LANGUAGES))
@click.option("--search-root", default=None, type=click.Path(exists=True, file_okay=False), help="Root directory of the schema files")
@click.option("--output", "-o", default=None, type=click.Path(file_okay=False), help="Output directory of generated sources")
@click.option("--schema-id-root", default=None, type=str, help="Identifier root of schema $id and $ref values")
@click.option("--package", "-p", default=None, type=str, help="Root package of generated classes and enums")
@click.option("--suffix", default=None, type=str, help="Suffix of generated type names (default: Dto)")
@click.option("--pattern", default=None, type=str, help="File name glob used to discover schema files")
@click.option("--classes", is_flag=True, default=False, help="Generate plain classes instead of records")
@click.option("--openapi-annotations", is_flag=True, default=False, help="Add MicroProfile OpenAPI @Schema annotations")
@click.option("--no-json-property-annotations", is_flag=True, default=False, help="Omit Jackson @JsonProperty annotations")
@click.option("--no-validation-annotations", is_flag=True, default=False, help="Omit Jakarta Bean Validation annotations")
@click.option("--validate", is_flag=True, default=False, help="Validate schemas against the draft 2020-12 meta-schema first")
@click.option("--continue-on-error", is_flag=True, default=False, help="Keep generating other files after a failure")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.option("--debug", is_flag=True, default=False)
@click.argument("schema_files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
def json_schema_to_jvm(
    config,
    language,
    search_root,
    output,
    schema_id_root,
    package,
    suffix,
    pattern,
    classes,
    openapi_annotations,
    no_json_property_annotations,
    no_validation_annotations,
    validate,
    continue_on_error,
    verbose,
    debug,
    schema_files,
):
    """Generate Java or Kotlin model classes from JSON schemas.

    SCHEMA_FILES default to every file below the search root matching the pattern.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    # CLI options override the config file
    overrides = {
        "language": language,
        "search_root_dir": search_root,
        "output_dir": output,
        "schema_id_root_uri": schema_id_root,
        "root_package": package,
        "pojo_name_suffix": suffix,
        "include_pattern": pattern,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    if openapi_annotations:
        config.add_open_api_schema_annotations = True
    if no_json_property_annotations:
        config.add_json_property_annotations = False
    if no_validation_annotations:
        config.add_jakarta_bean_validation_annotations = False
    if classes:
        config.pojos_as_records = False
    if continue_on_error:
        config.continue_on_error = True
    if verbose:
        config.verbose = True

    try:
        result = generate_models(config, list(schema_files) or None, validate=validate)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e

    if not result.ok:
        raise click.ClickException(f"{len(result.failures)} schema file(s) failed to generate")

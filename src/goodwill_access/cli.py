"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from goodwill_access.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    RegistrySettings,
    load_configuration,
    normalize_log_level,
    write_placeholder_configuration,
)
from goodwill_access.registry_access import (
    HttpRegistryClient,
    RegistryAccessError,
    fetch_schema,
    list_schemas,
    publish_schema,
)
from goodwill_access.schema_codec import (
    SchemaCodecError,
    decode_schema,
    describe_schema,
    encode_schema,
)
from goodwill_access.schema_model import GoodwillSchema, SqlTypeHint
from goodwill_access.workbook_generation import WorkbookGenerationError, generate_schema_workbook
from goodwill_access.workbook_ingestion import WorkbookValidationError, read_schema_workbook

logger = logging.getLogger(__name__)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="goodwill-access")
@click.option(
    "--log-level",
    "log_level",
    required=False,
    default=None,
    help="Log level (DEBUG, INFO, WARNING, ERROR); overrides the configuration file",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Inspect, fetch and publish registry schemas."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    if log_level is not None:
        _configure_logging(log_level)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML registry configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML registry configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="inspect")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a schema JSON document",
)
def inspect_schema(input_path: str) -> None:
    """Decode a schema JSON document and list its fields by position."""
    schema = _read_schema_file(input_path)
    click.echo(f"schema: {schema.name}")
    click.echo(f"sinkAddInfo: {'' if schema.sink_add_info is None else schema.sink_add_info}")
    for schema_field in schema.fields():
        if not schema_field.has_known_type():
            logger.warning(
                "Field %d (%s) has unrecognized type %r",
                schema_field.id,
                schema_field.name,
                schema_field.type,
            )
        click.echo(
            "\t".join(
                (
                    str(schema_field.id),
                    schema_field.name,
                    schema_field.type,
                    _format_sql(schema_field.sql),
                )
            )
        )


@cli.command(name="fetch")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON registry configuration file",
)
@click.option("--name", "schema_name", required=True, help="Registered schema name")
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional file for the canonical schema JSON (defaults to stdout)",
)
@click.pass_context
def fetch(ctx: click.Context, config_path: str, schema_name: str, output_path: str | None) -> None:
    """Fetch one schema from the registry and print its canonical JSON."""
    configuration = _load_cli_configuration(ctx, config_path)
    try:
        with _build_registry_client(configuration.registry) as client:
            schema = fetch_schema(client, schema_name)
    except (RegistryAccessError, SchemaCodecError) as exc:
        raise CliError(str(exc)) from exc
    if schema is None:
        raise CliError(f"Schema not found in registry: {schema_name}")
    _emit_schema(schema, output_path)


@cli.command(name="list")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON registry configuration file",
)
@click.pass_context
def list_registered(ctx: click.Context, config_path: str) -> None:
    """List registered schema names with their field counts."""
    configuration = _load_cli_configuration(ctx, config_path)
    try:
        with _build_registry_client(configuration.registry) as client:
            schemas = list_schemas(client)
    except (RegistryAccessError, SchemaCodecError) as exc:
        raise CliError(str(exc)) from exc
    for schema in sorted(schemas, key=lambda item: item.name):
        click.echo(f"{schema.name}\t{len(schema)}")


@cli.command(name="publish")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON registry configuration file",
)
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the schema JSON document to publish",
)
@click.pass_context
def publish(ctx: click.Context, config_path: str, input_path: str) -> None:
    """Publish a schema JSON document to the registry in canonical form."""
    configuration = _load_cli_configuration(ctx, config_path)
    schema = _read_schema_file(input_path)
    logger.debug("Publishing %s", describe_schema(schema))
    try:
        with _build_registry_client(configuration.registry) as client:
            publish_schema(client, schema)
    except (RegistryAccessError, SchemaCodecError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(schema.name)


@cli.command(name="export-workbook")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a schema JSON document",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the schema workbook to write",
)
def export_workbook(input_path: str, output_path: str) -> None:
    """Write a schema's fields and SQL mapping hints to an Excel workbook."""
    schema = _read_schema_file(input_path)
    try:
        resolved_output = generate_schema_workbook(schema, output_path)
    except (SchemaCodecError, WorkbookGenerationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="import-workbook")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a schema workbook",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional file for the canonical schema JSON (defaults to stdout)",
)
def import_workbook(input_path: str, output_path: str | None) -> None:
    """Read a schema workbook and emit the canonical schema JSON."""
    try:
        schema = read_schema_workbook(input_path)
    except (WorkbookValidationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    _emit_schema(schema, output_path)


def _build_registry_client(settings: RegistrySettings) -> HttpRegistryClient:
    return HttpRegistryClient(settings)


def _load_cli_configuration(ctx: click.Context, config_path: str) -> Configuration:
    try:
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    if ctx.obj.get("log_level") is None:
        _configure_logging(configuration.logging.level)
    return configuration


def _configure_logging(level: str) -> None:
    try:
        resolved_level = normalize_log_level(level)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _read_schema_file(input_path: str) -> GoodwillSchema:
    path = Path(input_path)
    try:
        return decode_schema(path.read_bytes())
    except OSError as exc:
        raise CliError(f"Unable to read schema file {path}: {exc}") from exc
    except SchemaCodecError as exc:
        raise CliError(f"{path}: {exc}") from exc


def _emit_schema(schema: GoodwillSchema, output_path: str | None) -> None:
    try:
        payload = encode_schema(schema)
    except SchemaCodecError as exc:
        raise CliError(str(exc)) from exc
    if output_path is None:
        click.echo(payload.decode("utf-8"))
        return
    destination = Path(output_path)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(payload)
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


def _format_sql(sql: SqlTypeHint) -> str:
    if sql.type is None:
        return "-"
    sizes = [str(value) for value in (sql.length, sql.precision, sql.scale) if value is not None]
    return f"{sql.type}({','.join(sizes)})" if sizes else sql.type


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

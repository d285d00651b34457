"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click
from graphql import print_schema

from field_group_schema.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from field_group_schema.entity_access import (
    ContentStore,
    ContentStoreError,
    InMemoryEntityStore,
    load_content_store,
)
from field_group_schema.field_configuration import StaticConfigurationProvider
from field_group_schema.schema_compilation import (
    CompiledSchema,
    ExtensionHookError,
    QueryContext,
    build_schema,
)
from field_group_schema.schema_registry import SchemaCompilationError
from field_group_schema.value_resolution import default_content_filter


class CliError(Exception):
    """Custom CLI error."""


_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON field group configuration file",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="field-group-schema")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Compile field group configuration into a GraphQL schema."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML field group configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML field group configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="print-schema")
@_CONFIG_OPTION
def print_schema_command(config_path: str) -> None:
    """Print the compiled schema in SDL form."""
    compiled = _compile(_load_configuration(config_path), None)
    click.echo(print_schema(compiled.schema))


@cli.command(name="list-groups")
@_CONFIG_OPTION
def list_groups(config_path: str) -> None:
    """List compiled field groups with their type names, then skipped groups."""
    compiled = _compile(_load_configuration(config_path), None)
    for key, type_name in compiled.group_type_names.items():
        click.echo(f"{key}\t{type_name}")
    for key in compiled.skipped_group_keys:
        click.echo(f"{key}\tskipped")


@cli.command(name="query")
@_CONFIG_OPTION
@click.option(
    "--store",
    "store_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON content store with entities and stored field values",
)
@click.option("--query", "query_text", required=True, help="GraphQL query document")
@click.option("--variables", "variables_json", required=False, help="Query variables as JSON")
@click.option(
    "--admin",
    is_flag=True,
    default=False,
    help="Run the query as an administrator (exposes fieldGroupConfig).",
)
def run_query(
    config_path: str,
    store_path: str | None,
    query_text: str,
    variables_json: str | None,
    admin: bool,
) -> None:
    """Execute a query against the compiled schema and print the JSON result."""
    configuration = _load_configuration(config_path)
    store = _load_store(store_path)
    compiled = _compile(configuration, store)
    result = compiled.execute(
        query_text,
        variables=_parse_variables(variables_json),
        context=QueryContext(is_admin=admin),
    )
    click.echo(json.dumps(result.formatted, indent=2, default=str))


def _load_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _load_store(store_path: str | None) -> ContentStore:
    if store_path is None:
        return ContentStore(entities=InMemoryEntityStore(), values={})
    try:
        return load_content_store(store_path)
    except ContentStoreError as exc:
        raise CliError(str(exc)) from exc


def _compile(configuration: Configuration, store: ContentStore | None) -> CompiledSchema:
    store = store or ContentStore(entities=InMemoryEntityStore(), values={})
    provider = StaticConfigurationProvider(
        configuration.field_groups, store.values, content_filter=default_content_filter
    )
    try:
        return build_schema(provider, store.entities, host_settings=configuration.host)
    except (SchemaCompilationError, ExtensionHookError) as exc:
        raise CliError(str(exc)) from exc


def _parse_variables(variables_json: str | None) -> dict[str, Any] | None:
    if not variables_json:
        return None
    try:
        variables = json.loads(variables_json)
    except json.JSONDecodeError as exc:
        raise CliError(f"--variables must be valid JSON: {exc}") from exc
    if not isinstance(variables, dict):
        raise CliError("--variables must be a JSON object.")
    return variables


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

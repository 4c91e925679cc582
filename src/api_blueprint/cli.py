"""CLI entry point for api-blueprint."""

import asyncio
import json
from pathlib import Path

import click
from pydantic import ValidationError

from api_blueprint.blueprint.builder import BlueprintOptions, create_blueprint
from api_blueprint.exceptions import BlueprintError
from api_blueprint.loader import load_types_module
from api_blueprint.logging_config import setup_logging
from api_blueprint.openapi.flatten import flatten_schema

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
def main():
    """API Blueprint: compile an OpenAPI bundle into a documentation blueprint."""
    pass


@main.command()
@click.argument("types_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path for the blueprint JSON.")
@click.option("--indent", default=2, type=int, help="JSON indentation.")
@click.option("--pagination-schema", default="pagination", help="Component schema holding pagination metadata.")
@click.option("--log-level", default="INFO", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Log level.")
def build(types_path: Path, output: Path, indent: int, pagination_schema: str, log_level: str):
    """Compile a types bundle into a blueprint."""
    setup_logging(log_level.upper())

    click.echo(f"Loading {types_path}...")
    try:
        types_module = load_types_module(types_path)
        options = BlueprintOptions(pagination_schema=pagination_schema)
        blueprint = asyncio.run(create_blueprint(types_module, options))
    except (BlueprintError, ValidationError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(
        f"Compiled {len(blueprint.routes)} routes and {len(blueprint.resources)} resources."
    )

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(blueprint.to_json(indent=indent), encoding="utf-8")
    click.echo(f"Blueprint saved to {output}")


@main.command()
@click.argument("types_path", type=click.Path(exists=True, path_type=Path))
@click.argument("schema_name")
def flatten(types_path: Path, schema_name: str):
    """Print one component schema with allOf/oneOf flattened."""
    try:
        types_module = load_types_module(types_path)
    except (ValidationError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    schemas = (types_module.openapi.get("components") or {}).get("schemas") or {}
    if schema_name not in schemas:
        raise click.ClickException(f"Schema '{schema_name}' not found in components.schemas")

    click.echo(json.dumps(flatten_schema(schemas[schema_name]), indent=2))

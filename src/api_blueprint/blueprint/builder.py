"""Top-level compile: a types bundle in, a Blueprint out."""

from dataclasses import dataclass
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api_blueprint.blueprint.endpoint import EndpointContext
from api_blueprint.blueprint.models import Blueprint
from api_blueprint.blueprint.resources import (
    create_action_attempts,
    create_events,
    create_pagination,
    create_resources,
    extract_action_attempt_types,
)
from api_blueprint.blueprint.routes import create_namespaces, create_routes
from api_blueprint.blueprint.validate import validate_blueprint
from api_blueprint.openapi.schemas import OpenapiDocument
from api_blueprint.samples.definitions import CodeSampleDefinition, ResourceSampleDefinition
from api_blueprint.samples.render import FormatCode, identity_format, render_samples


class TypesModule(BaseModel):
    """The input bundle: an OpenAPI document plus sample definitions."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    openapi: dict[str, Any]
    code_sample_definitions: list[CodeSampleDefinition] = Field(default_factory=list)
    resource_sample_definitions: list[ResourceSampleDefinition] = Field(default_factory=list)
    schemas: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class BlueprintOptions:
    format_code: FormatCode = identity_format
    pagination_schema: str = "pagination"
    event_schema: str = "event"
    action_attempt_schema: str = "action_attempt"
    action_attempt_exempt_prefix: str = "/action_attempts"
    action_attempt_route_path: str = "/action_attempts"


def build_blueprint(types_module: TypesModule, options: BlueprintOptions) -> Blueprint:
    """Synchronous part of the compile. Samples are not rendered here."""
    document = OpenapiDocument.model_validate(types_module.openapi)
    schemas = document.components.schemas

    context = EndpointContext(
        valid_action_attempt_types=frozenset(
            extract_action_attempt_types(schemas, options.action_attempt_schema)
        ),
        action_attempt_schema=options.action_attempt_schema,
        action_attempt_exempt_prefix=options.action_attempt_exempt_prefix,
        pagination_schema=options.pagination_schema,
    )

    routes = create_routes(document.paths, context)
    blueprint = Blueprint(
        title=document.info.title,
        routes=routes,
        namespaces=create_namespaces(routes),
        resources=create_resources(
            schemas, exclude=(options.pagination_schema, options.action_attempt_schema)
        ),
        pagination=create_pagination(schemas, options.pagination_schema),
        events=create_events(schemas, options.event_schema),
        action_attempts=create_action_attempts(
            schemas, options.action_attempt_schema, options.action_attempt_route_path
        ),
    )
    validate_blueprint(blueprint)
    logger.debug(
        f"Built {len(blueprint.routes)} routes, {len(blueprint.resources)} resources, "
        f"{len(blueprint.events)} events and {len(blueprint.action_attempts)} action attempts"
    )
    return blueprint


async def create_blueprint(
    types_module: TypesModule | dict[str, Any],
    options: BlueprintOptions | None = None,
) -> Blueprint:
    """Compile a types bundle into a Blueprint.

    Raises a ``BlueprintError`` subclass on an invalid document, or
    ``pydantic.ValidationError`` when the bundle itself is malformed.
    """
    if options is None:
        options = BlueprintOptions()
    if not isinstance(types_module, TypesModule):
        types_module = TypesModule.model_validate(types_module)

    blueprint = build_blueprint(types_module, options)
    return await render_samples(
        blueprint,
        types_module.code_sample_definitions,
        types_module.resource_sample_definitions,
        options.format_code,
    )

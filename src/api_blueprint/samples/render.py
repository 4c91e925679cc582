"""Concurrent sample rendering over a finished blueprint.

Every endpoint's code samples and every resource's samples render as
independent tasks. A failure in any task fails the whole compile.
"""

import asyncio
from typing import Awaitable, Callable

from api_blueprint.blueprint.models import Blueprint, Endpoint, Resource, Route
from api_blueprint.samples.definitions import (
    Code,
    CodeSample,
    CodeSampleDefinition,
    ResourceData,
    ResourceSample,
    ResourceSampleDefinition,
    SyntaxName,
)
from api_blueprint.samples.renderers import CODE_RENDERERS, RESOURCE_RENDERERS, CodeRenderer

FormatCode = Callable[[str, SyntaxName], Awaitable[str]]


async def identity_format(content: str, syntax: SyntaxName) -> str:
    return content


async def render_samples(
    blueprint: Blueprint,
    code_sample_definitions: list[CodeSampleDefinition],
    resource_sample_definitions: list[ResourceSampleDefinition],
    format_code: FormatCode = identity_format,
) -> Blueprint:
    """Return a copy of ``blueprint`` with code and resource samples filled in."""

    def resource_group(resources):
        return asyncio.gather(
            *(render_resource_samples(r, resource_sample_definitions, format_code) for r in resources)
        )

    routes, resources, events, action_attempts = await asyncio.gather(
        asyncio.gather(
            *(_render_route(route, code_sample_definitions, format_code) for route in blueprint.routes)
        ),
        resource_group(blueprint.resources.values()),
        resource_group(blueprint.events),
        resource_group(blueprint.action_attempts),
    )
    return blueprint.model_copy(
        update={
            "routes": list(routes),
            "resources": dict(zip(blueprint.resources, resources)),
            "events": list(events),
            "action_attempts": list(action_attempts),
        }
    )


async def render_endpoint_samples(
    endpoint: Endpoint,
    definitions: list[CodeSampleDefinition],
    format_code: FormatCode = identity_format,
) -> Endpoint:
    matching = [d for d in definitions if d.request.path == endpoint.path]
    samples = await asyncio.gather(*(create_code_sample(d, endpoint, format_code) for d in matching))
    return endpoint.model_copy(update={"code_samples": list(samples)})


async def render_resource_samples(
    resource: Resource,
    definitions: list[ResourceSampleDefinition],
    format_code: FormatCode = identity_format,
) -> Resource:
    matching = [d for d in definitions if d.resource_type == resource.resource_type]
    samples = await asyncio.gather(*(create_resource_sample(d, resource, format_code) for d in matching))
    return resource.model_copy(update={"resource_samples": list(samples)})


async def create_code_sample(
    definition: CodeSampleDefinition,
    endpoint: Endpoint,
    format_code: FormatCode = identity_format,
    renderers: tuple[CodeRenderer, ...] = CODE_RENDERERS,
) -> CodeSample:
    codes = await asyncio.gather(
        *(_render_code(renderer, definition, endpoint, format_code) for renderer in renderers)
    )
    return CodeSample(
        title=definition.title,
        description=definition.description,
        request=definition.request,
        response=definition.response,
        code={code.sdk_name: code for code in codes},
    )


async def create_resource_sample(
    definition: ResourceSampleDefinition,
    resource: Resource,
    format_code: FormatCode = identity_format,
) -> ResourceSample:
    async def render(renderer) -> ResourceData:
        content = await format_code(renderer.render(definition, resource), renderer.syntax)
        return ResourceData(title=renderer.title, resource_data=content, resource_data_syntax=renderer.syntax)

    data = await asyncio.gather(*(render(renderer) for renderer in RESOURCE_RENDERERS))
    return ResourceSample(
        title=definition.title,
        description=definition.description,
        resource_type=definition.resource_type,
        properties=definition.properties,
        resource={renderer.sdk_name: item for renderer, item in zip(RESOURCE_RENDERERS, data)},
    )


async def _render_route(route: Route, definitions: list[CodeSampleDefinition], format_code: FormatCode) -> Route:
    endpoints = await asyncio.gather(
        *(render_endpoint_samples(endpoint, definitions, format_code) for endpoint in route.endpoints)
    )
    return route.model_copy(update={"endpoints": list(endpoints)})


async def _render_code(
    renderer: CodeRenderer,
    definition: CodeSampleDefinition,
    endpoint: Endpoint,
    format_code: FormatCode,
) -> Code:
    request = renderer.request(definition, endpoint)
    response = renderer.response(definition, endpoint)
    request, response = await asyncio.gather(
        format_code(request, renderer.request_syntax),
        format_code(response, renderer.response_syntax),
    )
    return Code(
        title=renderer.title,
        sdk_name=renderer.sdk_name,
        request=request,
        response=response,
        request_syntax=renderer.request_syntax,
        response_syntax=renderer.response_syntax,
    )

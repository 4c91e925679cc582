"""Built-in sample renderers.

A renderer turns one sample definition plus the finished Endpoint it belongs to
into a display string. Renderers are plain functions; formatting happens
later through the ``format_code`` callback.
"""

import json
from dataclasses import dataclass
from typing import Callable

from pydantic.alias_generators import to_camel, to_pascal

from api_blueprint.blueprint.models import Endpoint, Resource
from api_blueprint.exceptions import SampleRenderError
from api_blueprint.samples.definitions import CodeSampleDefinition, ResourceSampleDefinition, SyntaxName

BASE_URL = "https://api.example.com"


@dataclass(frozen=True)
class CodeRenderer:
    sdk_name: str
    title: str
    request: Callable[[CodeSampleDefinition, Endpoint], str]
    response: Callable[[CodeSampleDefinition, Endpoint], str]
    request_syntax: SyntaxName
    response_syntax: SyntaxName


@dataclass(frozen=True)
class ResourceRenderer:
    sdk_name: str
    title: str
    render: Callable[[ResourceSampleDefinition, Resource], str]
    syntax: SyntaxName


def _response_data(definition: CodeSampleDefinition, endpoint: Endpoint):
    key = endpoint.response.response_key
    data = (definition.response.body or {}).get(key)
    if data is None:
        raise SampleRenderError(f"Missing {key} for '{definition.title}'")
    return key, data


def create_json_response(definition: CodeSampleDefinition, endpoint: Endpoint) -> str:
    if endpoint.response.response_type == "void":
        return json.dumps({})
    key, data = _response_data(definition, endpoint)
    return json.dumps({key: data})


def create_curl_request(definition: CodeSampleDefinition, endpoint: Endpoint) -> str:
    request = definition.request
    command = f'curl --request POST "{BASE_URL}{request.path}" \\\n'
    command += '  --header "Authorization: Bearer $API_KEY"'
    if request.parameters:
        command += " \\\n  --json @- << EOF\n"
        command += json.dumps(request.parameters, indent=2)
        command += "\nEOF"
    return command


def create_javascript_request(definition: CodeSampleDefinition, endpoint: Endpoint) -> str:
    parts = [to_camel(part) for part in definition.request.path.split("/") if part]
    params = json.dumps(definition.request.parameters) if definition.request.parameters else ""
    return f"await client.{'.'.join(parts)}({params})"


def create_javascript_response(definition: CodeSampleDefinition, endpoint: Endpoint) -> str:
    if endpoint.response.response_type == "void":
        return "// void"
    _, data = _response_data(definition, endpoint)
    return json.dumps(data)


def create_python_request(definition: CodeSampleDefinition, endpoint: Endpoint) -> str:
    parts = [part for part in definition.request.path.split("/") if part]
    params = ", ".join(f"{key}={value!r}" for key, value in definition.request.parameters.items())
    return f"client.{'.'.join(parts)}({params})"


def create_python_response(definition: CodeSampleDefinition, endpoint: Endpoint) -> str:
    if endpoint.response.response_type == "void":
        return "None"
    key, data = _response_data(definition, endpoint)
    if isinstance(data, list):
        return repr(data)
    if not isinstance(data, dict):
        return "None"
    params = ", ".join(f"{name}={value!r}" for name, value in data.items())
    return f"{to_pascal(key)}({params})"


def create_json_resource_data(definition: ResourceSampleDefinition, resource: Resource) -> str:
    return json.dumps(definition.properties)


CODE_RENDERERS = (
    CodeRenderer(
        sdk_name="javascript",
        title="JavaScript",
        request=create_javascript_request,
        response=create_javascript_response,
        request_syntax="javascript",
        response_syntax="json",
    ),
    CodeRenderer(
        sdk_name="python",
        title="Python",
        request=create_python_request,
        response=create_python_response,
        request_syntax="python",
        response_syntax="python",
    ),
    CodeRenderer(
        sdk_name="curl",
        title="cURL",
        request=create_curl_request,
        response=create_json_response,
        request_syntax="bash",
        response_syntax="json",
    ),
)

RESOURCE_RENDERERS = (
    ResourceRenderer(sdk_name="json", title="JSON", render=create_json_resource_data, syntax="json"),
)

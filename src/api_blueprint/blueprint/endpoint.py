"""Endpoint builder: request shape, HTTP method selection and response resolution.

Each raw path becomes one Endpoint built from its POST operation. The other
declared verbs only inform ``semantic_method`` and ``preferred_method``.
"""

from dataclasses import dataclass, field

from loguru import logger

from api_blueprint.blueprint.auth import get_workspace_scope, map_auth_methods, security_schemes
from api_blueprint.blueprint.classify import create_request_parameters, normalize_description
from api_blueprint.blueprint.models import (
    Endpoint,
    Method,
    Request,
    ResourceListResponse,
    ResourceResponse,
    Response,
    VoidResponse,
)
from api_blueprint.exceptions import (
    ActionAttemptTypeError,
    MissingOperationError,
    ResponseKeyError,
    UnresolvedNameError,
)
from api_blueprint.openapi.flatten import flatten_schema
from api_blueprint.openapi.schemas import OperationSchema

HTTP_METHODS = ("get", "post", "put", "patch", "delete")

# Most specific verb first; POST is often offered alongside for large payloads.
SEMANTIC_PRIORITY: tuple[Method, ...] = ("PUT", "PATCH", "GET", "DELETE", "POST")

COMPLEX_TYPES = ("array", "object")


@dataclass(frozen=True)
class EndpointContext:
    """Document-wide facts the endpoint builder needs."""

    valid_action_attempt_types: frozenset[str] = field(default_factory=frozenset)
    action_attempt_schema: str = "action_attempt"
    action_attempt_exempt_prefix: str = "/action_attempts"
    pagination_schema: str = "pagination"


def get_methods(path_item: dict) -> list[Method]:
    """Declared HTTP methods, upper-cased, in declaration order."""
    return [
        method.upper()
        for method, operation in path_item.items()
        if method.lower() in HTTP_METHODS and isinstance(operation, dict)
    ]


def create_endpoint(path: str, path_item: dict, context: EndpointContext) -> Endpoint:
    methods = get_methods(path_item)
    if not methods:
        logger.warning(f"At least one HTTP method should be specified for {path}")
    if len(methods) > 2:
        logger.warning(f"More than two methods detected for {path}. Was this intended?")
    if "POST" not in methods:
        raise MissingOperationError(path, methods)

    raw_operation = next(op for method, op in path_item.items() if method.lower() == "post")
    operation = OperationSchema.model_validate(raw_operation)

    name = path.split("/")[-1]
    if not name:
        raise UnresolvedNameError(path)

    schemes = security_schemes(operation.security)

    return Endpoint(
        title=operation.title,
        name=name,
        path=path,
        description=normalize_description(operation.description),
        is_deprecated=operation.is_deprecated,
        deprecation_message=operation.deprecation_message,
        is_undocumented=bool(operation.undocumented_message),
        undocumented_message=operation.undocumented_message,
        is_draft=bool(operation.draft_message),
        draft_message=operation.draft_message,
        request=create_request(path, methods, operation),
        response=create_response(path, operation, context),
        auth_methods=map_auth_methods(schemes),
        workspace_scope=get_workspace_scope(schemes),
    )


def create_request(path: str, methods: list[Method], operation: OperationSchema) -> Request:
    semantic_method = get_semantic_method(methods)
    return Request(
        methods=methods,
        semantic_method=semantic_method,
        preferred_method=get_preferred_method(methods, semantic_method, operation),
        parameters=create_request_parameters(operation, path),
    )


def get_semantic_method(methods: list[Method]) -> Method:
    if len(methods) == 1:
        return methods[0]
    return next((m for m in SEMANTIC_PRIORITY if m in methods), "POST")


def get_preferred_method(methods: list[Method], semantic_method: Method, operation: OperationSchema) -> Method:
    """POST wins over GET/DELETE when the request carries structured data."""
    if (
        "POST" in methods
        and semantic_method in ("GET", "DELETE")
        and has_complex_parameters(operation)
    ):
        return "POST"
    return semantic_method


def has_complex_parameters(operation: OperationSchema) -> bool:
    if any((param.schema_ or {}).get("type") in COMPLEX_TYPES for param in operation.parameters):
        return True
    body = operation.json_request_schema()
    return body is not None and flatten_schema(body).get("type") == "object"


def create_response(path: str, operation: OperationSchema, context: EndpointContext) -> Response:
    if operation.responses is None:
        raise ResponseKeyError(path, "Missing responses")

    ok_response = operation.responses.get("200")
    if not isinstance(ok_response, dict):
        return VoidResponse(description="Unknown")

    description = normalize_description(str(ok_response.get("description") or ""))

    if not operation.declares_response_key:
        raise ResponseKeyError(path, "Missing x-response-key")
    response_key = operation.response_key
    if response_key is None:
        return VoidResponse(description=description)

    content = (ok_response.get("content") or {}).get("application/json") or {}
    properties = (content.get("schema") or {}).get("properties") or {}
    if response_key not in properties:
        raise ResponseKeyError(
            path, f"Response key '{response_key}' is not declared in the 200 response schema"
        )

    key_schema = properties[response_key] or {}
    ref = key_schema.get("$ref") or (key_schema.get("items") or {}).get("$ref")
    resource_type = ref.split("/")[-1] if ref else "unknown"

    pagination_ref = f"#/components/schemas/{context.pagination_schema}"
    has_pagination = any(
        name != response_key and isinstance(value, dict) and value.get("$ref") == pagination_ref
        for name, value in properties.items()
    )

    action_attempt_type = operation.action_attempt_type
    if (
        resource_type == context.action_attempt_schema
        and action_attempt_type is None
        and not path.startswith(context.action_attempt_exempt_prefix)
    ):
        raise ActionAttemptTypeError(path, None)
    if action_attempt_type is not None and action_attempt_type not in context.valid_action_attempt_types:
        raise ActionAttemptTypeError(path, action_attempt_type)

    model = ResourceListResponse if key_schema.get("type") == "array" else ResourceResponse
    return model(
        description=description,
        response_key=response_key,
        resource_type=resource_type,
        action_attempt_type=action_attempt_type,
        has_pagination=has_pagination,
    )

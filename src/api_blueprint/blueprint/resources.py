"""Resource, event, action attempt and pagination classification.

Walks ``components.schemas``. Plain object schemas become resources directly;
discriminated unions are reduced to the properties every branch shares.
The event and action attempt unions additionally yield one entity per
discriminant value.
"""

from api_blueprint.blueprint.classify import create_properties, normalize_description
from api_blueprint.blueprint.models import ActionAttempt, EventResource, Group, Pagination, Resource
from api_blueprint.openapi.common import find_common_properties
from api_blueprint.openapi.flatten import CARRIED_KEYS
from api_blueprint.openapi.schemas import (
    ResourceMeta,
    enum_literal,
    is_resource_schema,
    is_union_schema,
)

ACTION_ATTEMPT_STATUSES = ("success", "pending", "error")


def create_resources(schemas: dict[str, dict], exclude: tuple[str, ...] = ()) -> dict[str, Resource]:
    """Resources keyed by schema name.

    ``exclude`` names schemas handled elsewhere, such as pagination and the
    action attempt union.
    """
    resources: dict[str, Resource] = {}
    for name, schema in schemas.items():
        if name in exclude:
            continue
        if is_union_schema(schema):
            resources[name] = create_resource(name, reduce_union(schema))
        elif is_resource_schema(schema):
            resources[name] = create_resource(name, schema)
    return resources


def reduce_union(schema: dict) -> dict:
    """One object schema holding the properties common to every union branch."""
    branches = schema["oneOf"]
    return {
        **_carried(schema),
        "type": "object",
        "properties": find_common_properties(branches),
        "x-route-path": schema.get("x-route-path") or branches[0].get("x-route-path", ""),
    }


def create_resource(name: str, schema: dict, model: type[Resource] = Resource, **extra) -> Resource:
    meta = ResourceMeta.model_validate(schema)
    return model(
        resource_type=name,
        route_path=meta.route_path,
        description=normalize_description(meta.description),
        is_deprecated=meta.is_deprecated,
        deprecation_message=meta.deprecation_message,
        is_undocumented=bool(meta.undocumented_message),
        undocumented_message=meta.undocumented_message,
        is_draft=bool(meta.draft_message),
        draft_message=meta.draft_message,
        properties=create_properties(schema.get("properties") or {}, name),
        property_groups=[Group(key=key, name=group.name) for key, group in meta.property_groups.items()],
        **extra,
    )


def create_events(schemas: dict[str, dict], event_schema: str = "event") -> list[EventResource]:
    """One EventResource per branch of the event union that carries a type literal."""
    union = schemas.get(event_schema)
    if not isinstance(union, dict) or not isinstance(union.get("oneOf"), list):
        return []

    tag = (union.get("discriminator") or {}).get("propertyName") or "event_type"
    events = []
    for branch in union["oneOf"]:
        event_type = enum_literal(branch, tag) if is_resource_schema(branch) else None
        if event_type is None:
            continue
        branch = {**branch, "x-route-path": branch.get("x-route-path") or union.get("x-route-path", "")}
        events.append(create_resource(event_schema, branch, EventResource, event_type=event_type))
    return events


def extract_action_attempt_types(schemas: dict[str, dict], action_attempt_schema: str = "action_attempt") -> list[str]:
    return list(_group_action_attempts(schemas.get(action_attempt_schema)))


def create_action_attempts(
    schemas: dict[str, dict],
    action_attempt_schema: str = "action_attempt",
    default_route_path: str = "/action_attempts",
) -> list[ActionAttempt]:
    """One ActionAttempt per distinct ``action_type``, merging branches that share it."""
    union = schemas.get(action_attempt_schema)
    grouped = _group_action_attempts(union)
    if not grouped:
        return []

    route_path = union.get("x-route-path") or default_route_path
    action_attempts = []
    for action_type, branches in grouped.items():
        schema = {
            **_carried(union),
            "description": branches[0].get("description") or union.get("description", ""),
            "type": "object",
            "properties": merge_action_attempt_properties(branches),
            "x-route-path": route_path,
        }
        action_attempts.append(
            create_resource(action_attempt_schema, schema, ActionAttempt, action_attempt_type=action_type)
        )
    return action_attempts


def merge_action_attempt_properties(branches: list[dict]) -> dict[str, dict]:
    """Merge branch properties; a non-nullable definition replaces a nullable one.

    ``status`` is always the success/pending/error enum.
    """
    merged: dict[str, dict] = {}
    for branch in branches:
        for name, prop in (branch.get("properties") or {}).items():
            current = merged.get(name)
            if current is None or (current.get("nullable") and not prop.get("nullable")):
                merged[name] = prop

    status = {
        key: value
        for key, value in (merged.get("status") or {}).items()
        if key not in ("x-enums", "allOf", "oneOf", "format")
    }
    merged["status"] = {**status, "type": "string", "enum": list(ACTION_ATTEMPT_STATUSES)}
    return merged


def create_pagination(schemas: dict[str, dict], pagination_schema: str = "pagination") -> Pagination | None:
    schema = schemas.get(pagination_schema)
    if not isinstance(schema, dict):
        return None
    return Pagination(
        response_key=pagination_schema,
        description=normalize_description(str(schema.get("description") or "")),
        properties=create_properties(schema.get("properties") or {}, pagination_schema),
    )


def _group_action_attempts(union) -> dict[str, list[dict]]:
    if not isinstance(union, dict) or not isinstance(union.get("oneOf"), list):
        return {}
    grouped: dict[str, list[dict]] = {}
    for branch in union["oneOf"]:
        action_type = enum_literal(branch, "action_type") if isinstance(branch, dict) else None
        if action_type is not None:
            grouped.setdefault(action_type, []).append(branch)
    return grouped


def _carried(schema: dict) -> dict:
    return {key: schema[key] for key in (*CARRIED_KEYS, "x-property-groups") if key in schema}

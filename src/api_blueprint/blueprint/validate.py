"""Cross-entity invariants checked over a fully built blueprint.

Construction never checks these inline; ``validate_blueprint`` runs once,
after every route and resource exists.
"""

from api_blueprint.blueprint.models import Blueprint, Resource
from api_blueprint.exceptions import BlueprintError, DiscriminatorError, GroupKeyError, RoutePathError


def validate_blueprint(blueprint: Blueprint) -> None:
    validate_unique_routes(blueprint)
    validate_route_paths(blueprint)
    validate_groups(blueprint)


def validate_unique_routes(blueprint: Blueprint) -> None:
    seen = set()
    for route in blueprint.routes:
        if route.path in seen:
            raise BlueprintError(f"Duplicate route path {route.path}")
        seen.add(route.path)


def validate_route_paths(blueprint: Blueprint) -> None:
    route_paths = {route.path for route in blueprint.routes}
    for resource in _all_resources(blueprint):
        if resource.route_path not in route_paths:
            raise RoutePathError(resource.resource_type, resource.route_path)


def validate_groups(blueprint: Blueprint) -> None:
    """Group keys must be declared by the nearest enclosing scope.

    Also rejects discriminated lists without a discriminator.
    """
    for resource in _all_resources(blueprint):
        _check_nodes(resource.properties, {g.key for g in resource.property_groups}, resource.resource_type)

    if blueprint.pagination is not None:
        _check_nodes(blueprint.pagination.properties, set(), blueprint.pagination.response_key)

    for route in blueprint.routes:
        for endpoint in route.endpoints:
            _check_nodes(endpoint.request.parameters, set(), endpoint.path)


def _check_nodes(nodes: list, scope: set[str], owner: str) -> None:
    for node in nodes:
        key = getattr(node, "property_group_key", None)
        if key is not None and key not in scope:
            raise GroupKeyError("property", key, node.name, owner)

        location = f"{owner}.{node.name}"
        if node.format == "object":
            _check_nodes(_children(node), {g.key for g in node.property_groups}, location)
        elif node.format == "list" and node.item_format == "object":
            _check_nodes(
                _children(node, prefix="item_"),
                {g.key for g in node.item_property_groups or []},
                location,
            )
        elif node.format == "list" and node.item_format == "discriminated_object":
            _check_variants(node, location)


def _check_variants(node, location: str) -> None:
    if not node.discriminator:
        raise DiscriminatorError(node.name, location)

    variant_scope = {g.key for g in node.variant_groups}
    for index, variant in enumerate(node.variants or []):
        key = variant.variant_group_key
        if key is not None and key not in variant_scope:
            raise GroupKeyError("variant", key, f"variant {index} of {node.name}", location)
        _check_nodes(_children(variant), {g.key for g in variant.property_groups}, location)


def _children(node, prefix: str = "") -> list:
    """Child list of a property node or a parameter node."""
    children = getattr(node, f"{prefix}properties", None)
    if children is None:
        children = getattr(node, f"{prefix}parameters", None)
    return children or []


def _all_resources(blueprint: Blueprint) -> list[Resource]:
    return [*blueprint.resources.values(), *blueprint.events, *blueprint.action_attempts]

"""Route and namespace builder.

Raw paths look like ``/transport/air/planes/list``: the last segment names the
endpoint, the rest is the route path (``/transport/air/planes``). Paths that
share a route path merge into one Route.
"""

import re
from functools import reduce

from api_blueprint.blueprint.endpoint import EndpointContext, create_endpoint
from api_blueprint.blueprint.models import Namespace, Route
from api_blueprint.exceptions import UnresolvedNameError


def create_routes(paths: dict[str, dict], context: EndpointContext) -> list[Route]:
    """Fold every raw path into routes keyed by route path, in first-seen order."""
    declared = list(paths)
    merged = reduce(
        _merge_route,
        (create_route(path, path_item, declared, context) for path, path_item in paths.items()),
        {},
    )
    return [with_aggregate_flags(route) for route in merged.values()]


def create_route(path: str, path_item: dict, declared: list[str], context: EndpointContext) -> Route:
    route_path, name, parent_path = split_route_path(path)
    return Route(
        path=route_path,
        name=name,
        namespace_path=get_namespace(path, declared),
        parent_path=parent_path,
        endpoints=[create_endpoint(path, path_item, context)],
    )


def split_route_path(path: str) -> tuple[str, str, str | None]:
    """Return (route path, route name, parent path) for a raw endpoint path."""
    parts = path.split("/")[1:-1]
    if not parts or not parts[-1]:
        raise UnresolvedNameError(path)
    parent_path = "/" + "/".join(parts[:-1]) if len(parts) > 1 else None
    return "/" + "/".join(parts), parts[-1], parent_path


def get_namespace(path: str, declared: list[str]) -> str | None:
    """Longest leading run of segments that are not themselves endpoint parents.

    A segment stops the walk once some declared path is ``/<prefix>/<word>``,
    i.e. the prefix already holds endpoints directly.
    """
    namespace: list[str] = []
    for part in filter(None, path.split("/")):
        prefix = "/".join([*namespace, part])
        pattern = re.compile(rf"^/{re.escape(prefix)}/\w+$")
        if any(pattern.match(candidate) for candidate in declared):
            break
        namespace.append(part)
    return "/" + "/".join(namespace) if namespace else None


def with_aggregate_flags(route: Route) -> Route:
    """A route is deprecated/undocumented/draft only if all its endpoints are."""
    return route.model_copy(
        update={
            "is_deprecated": all(e.is_deprecated for e in route.endpoints),
            "is_undocumented": all(e.is_undocumented for e in route.endpoints),
            "is_draft": all(e.is_draft for e in route.endpoints),
        }
    )


def create_namespaces(routes: list[Route]) -> list[Namespace]:
    members: dict[str, list[Route]] = {}
    for route in routes:
        if route.namespace_path is not None:
            members.setdefault(route.namespace_path, []).append(route)

    namespaces = []
    for path, namespace_routes in members.items():
        parts = path.split("/")[1:]
        namespaces.append(
            Namespace(
                path=path,
                name=parts[-1],
                parent_path="/" + "/".join(parts[:-1]) if len(parts) > 1 else None,
                is_deprecated=all(r.is_deprecated for r in namespace_routes),
                is_undocumented=all(r.is_undocumented for r in namespace_routes),
                is_draft=all(r.is_draft for r in namespace_routes),
            )
        )
    return namespaces


def _merge_route(routes: dict[str, Route], route: Route) -> dict[str, Route]:
    existing = routes.get(route.path)
    if existing is None:
        return {**routes, route.path: route}
    merged = existing.model_copy(update={"endpoints": [*existing.endpoints, *route.endpoints]})
    return {**routes, route.path: merged}

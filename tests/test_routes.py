import pytest

from api_blueprint.blueprint.endpoint import EndpointContext
from api_blueprint.blueprint.routes import (
    create_namespaces,
    create_routes,
    get_namespace,
    split_route_path,
)
from api_blueprint.exceptions import UnresolvedNameError

CONTEXT = EndpointContext()


def _path_item(**extra) -> dict:
    return {"post": {"responses": {200: {"description": "OK"}}, "x-response-key": None, **extra}}


class TestSplitRoutePath:
    def test_nested(self):
        assert split_route_path("/transport/air/planes/list") == (
            "/transport/air/planes",
            "planes",
            "/transport/air",
        )

    def test_top_level(self):
        assert split_route_path("/foos/get") == ("/foos", "foos", None)

    def test_no_route_segment(self):
        with pytest.raises(UnresolvedNameError):
            split_route_path("/get")


class TestGetNamespace:
    def test_namespace_prefix(self):
        declared = ["/foos/get", "/transport/air/planes/list"]
        assert get_namespace("/transport/air/planes/list", declared) == "/transport/air"

    def test_no_namespace(self):
        declared = ["/foos/get", "/foos/list"]
        assert get_namespace("/foos/get", declared) is None

    def test_stops_at_endpoint_parent(self):
        declared = ["/acs/users/list", "/acs/list"]
        assert get_namespace("/acs/users/list", declared) is None


class TestCreateRoutes:
    def test_merges_endpoints_in_order(self):
        paths = {
            "/foos/get": _path_item(),
            "/planes/list": _path_item(),
            "/foos/list": _path_item(),
        }
        routes = create_routes(paths, CONTEXT)
        assert [r.path for r in routes] == ["/foos", "/planes"]
        assert [e.name for e in routes[0].endpoints] == ["get", "list"]

    def test_flags_require_every_endpoint(self):
        paths = {
            "/foos/get": _path_item(deprecated=True, **{"x-draft": "WIP"}),
            "/foos/list": _path_item(deprecated=True),
        }
        (route,) = create_routes(paths, CONTEXT)
        assert route.is_deprecated
        assert not route.is_draft
        assert not route.is_undocumented

    def test_input_is_not_mutated(self):
        paths = {"/foos/get": _path_item()}
        snapshot = repr(paths)
        create_routes(paths, CONTEXT)
        assert repr(paths) == snapshot


class TestCreateNamespaces:
    def test_namespaces_from_routes(self):
        paths = {
            "/transport/air/planes/list": _path_item(**{"x-undocumented": "Internal"}),
            "/transport/air/jets/list": _path_item(),
            "/foos/get": _path_item(),
        }
        namespaces = create_namespaces(create_routes(paths, CONTEXT))
        assert len(namespaces) == 1
        namespace = namespaces[0]
        assert namespace.path == "/transport/air"
        assert namespace.name == "air"
        assert namespace.parent_path == "/transport"
        assert not namespace.is_undocumented

import pytest

from api_blueprint.blueprint.models import (
    Blueprint,
    Group,
    ListProperty,
    ObjectProperty,
    PropertyVariant,
    Resource,
    Route,
    StringProperty,
)
from api_blueprint.blueprint.validate import validate_blueprint
from api_blueprint.exceptions import BlueprintError, DiscriminatorError, GroupKeyError, RoutePathError


def _blueprint(*resources: Resource, routes=("/foos",)) -> Blueprint:
    return Blueprint(
        title="Test",
        routes=[Route(path=path, name=path.split("/")[-1]) for path in routes],
        resources={r.resource_type: r for r in resources},
    )


def _foo(properties, property_groups=()) -> Resource:
    return Resource(
        resource_type="foo",
        route_path="/foos",
        properties=properties,
        property_groups=list(property_groups),
    )


class TestRoutePaths:
    def test_valid(self):
        validate_blueprint(_blueprint(_foo([])))

    def test_unknown_route_path(self):
        resource = Resource(resource_type="bar", route_path="/bars")
        with pytest.raises(RoutePathError, match="/bars"):
            validate_blueprint(_blueprint(resource))

    def test_duplicate_routes(self):
        with pytest.raises(BlueprintError, match="Duplicate"):
            validate_blueprint(_blueprint(routes=("/foos", "/foos")))


class TestGroups:
    def test_declared_property_group(self):
        prop = StringProperty(name="serial", property_group_key="hw")
        validate_blueprint(_blueprint(_foo([prop], [Group(key="hw", name="Hardware")])))

    def test_undeclared_property_group(self):
        prop = StringProperty(name="serial", property_group_key="hw")
        with pytest.raises(GroupKeyError, match="hw"):
            validate_blueprint(_blueprint(_foo([prop])))

    def test_nearest_scope_only(self):
        child = StringProperty(name="serial", property_group_key="hw")
        parent = ObjectProperty(name="device", properties=[child])
        with pytest.raises(GroupKeyError):
            validate_blueprint(_blueprint(_foo([parent], [Group(key="hw", name="Hardware")])))

    def test_object_scope(self):
        child = StringProperty(name="serial", property_group_key="hw")
        parent = ObjectProperty(
            name="device", properties=[child], property_groups=[Group(key="hw", name="Hardware")]
        )
        validate_blueprint(_blueprint(_foo([parent])))

    def test_undeclared_variant_group(self):
        prop = ListProperty(
            name="warnings",
            item_format="discriminated_object",
            discriminator="code",
            variants=[PropertyVariant(variant_group_key="power")],
        )
        with pytest.raises(GroupKeyError, match="power"):
            validate_blueprint(_blueprint(_foo([prop])))

    def test_empty_discriminator(self):
        prop = ListProperty(
            name="warnings",
            item_format="discriminated_object",
            discriminator="",
            variants=[PropertyVariant()],
        )
        with pytest.raises(DiscriminatorError):
            validate_blueprint(_blueprint(_foo([prop])))

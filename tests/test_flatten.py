from api_blueprint.openapi.common import find_common_properties
from api_blueprint.openapi.flatten import flatten_schema, is_discriminated_array


class TestFlattenAllOf:
    def test_merges_properties_and_required(self):
        schema = {
            "description": "Composite",
            "allOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}, "required": ["a"]},
                {"type": "object", "properties": {"b": {"type": "number"}}, "required": ["b", "a"]},
            ],
        }
        result = flatten_schema(schema)
        assert result == {
            "description": "Composite",
            "type": "object",
            "properties": {"a": {"type": "string"}, "b": {"type": "number"}},
            "required": ["a", "b"],
        }

    def test_later_branch_wins_on_collision(self):
        schema = {
            "allOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}},
                {"type": "object", "properties": {"a": {"type": "number"}}},
            ]
        }
        assert flatten_schema(schema)["properties"] == {"a": {"type": "number"}}

    def test_nested_composition(self):
        schema = {
            "allOf": [
                {"oneOf": [{"type": "string", "enum": ["x"]}, {"type": "string", "enum": ["y"]}]},
                {"type": "object", "properties": {"a": {"type": "boolean"}}},
            ]
        }
        result = flatten_schema(schema)
        assert result["properties"] == {"a": {"type": "boolean"}}
        assert result["required"] == []


class TestFlattenOneOf:
    def test_required_is_intersection(self):
        schema = {
            "oneOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}, "required": ["a"]},
                {
                    "type": "object",
                    "properties": {"a": {"type": "string"}, "b": {"type": "string"}},
                    "required": ["a", "b"],
                },
            ]
        }
        assert flatten_schema(schema)["required"] == ["a"]

    def test_disjoint_required(self):
        schema = {
            "oneOf": [
                {"type": "object", "properties": {}, "required": ["a", "b"]},
                {"type": "object", "properties": {}, "required": ["c", "d"]},
            ]
        }
        assert flatten_schema(schema)["required"] == []

    def test_branch_without_required(self):
        schema = {
            "oneOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}, "required": ["a"]},
                {"type": "object", "properties": {"a": {"type": "string"}}},
            ]
        }
        assert flatten_schema(schema)["required"] == []

    def test_string_enums_are_unioned(self):
        schema = {
            "oneOf": [
                {"type": "string", "enum": ["foo", "bar"]},
                {"type": "string", "enum": ["bar", "baz"]},
            ]
        }
        assert flatten_schema(schema) == {"type": "string", "enum": ["foo", "bar", "baz"]}

    def test_mixed_branches_become_object(self):
        schema = {
            "oneOf": [
                {"type": "string", "enum": ["foo"]},
                {"type": "object", "properties": {"a": {"type": "string"}}},
            ]
        }
        result = flatten_schema(schema)
        assert result["type"] == "object"
        assert result["properties"] == {"a": {"type": "string"}}

    def test_empty_one_of(self):
        assert flatten_schema({"oneOf": []}) == {"type": "string", "enum": []}


class TestFlattenPassThrough:
    def test_object_properties_are_flattened(self):
        schema = {
            "type": "object",
            "properties": {
                "a": {"allOf": [{"type": "object", "properties": {"b": {"type": "string"}}}]},
            },
        }
        result = flatten_schema(schema)
        assert result["properties"]["a"]["type"] == "object"
        assert "allOf" not in result["properties"]["a"]

    def test_arrays_unchanged(self):
        schema = {"type": "array", "items": {"allOf": [{"type": "string"}]}}
        assert flatten_schema(schema) is schema

    def test_input_not_mutated(self):
        schema = {
            "allOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}, "required": ["a"]},
            ]
        }
        flatten_schema(schema)
        assert schema["allOf"][0]["required"] == ["a"]
        assert "type" not in schema

    def test_idempotent(self):
        schema = {
            "allOf": [
                {"type": "object", "properties": {"a": {"oneOf": [{"type": "string", "enum": ["x"]}]}}},
                {"type": "object", "properties": {"b": {"type": "number"}}, "required": ["b"]},
            ]
        }
        once = flatten_schema(schema)
        assert flatten_schema(once) == once


class TestIsDiscriminatedArray:
    def test_detects_discriminator(self):
        schema = {"type": "array", "items": {"discriminator": {"propertyName": "kind"}, "oneOf": []}}
        assert is_discriminated_array(schema)

    def test_plain_array(self):
        assert not is_discriminated_array({"type": "array", "items": {"type": "string"}})


class TestFindCommonProperties:
    def test_intersection_uses_first_branch(self):
        schemas = [
            {"properties": {"a": {"type": "string", "description": "first"}, "b": {"type": "string"}}},
            {"properties": {"a": {"type": "string", "description": "second"}}},
        ]
        assert find_common_properties(schemas) == {"a": {"type": "string", "description": "first"}}

    def test_enum_values_are_unioned(self):
        schemas = [
            {"properties": {"kind": {"type": "string", "enum": ["a"]}}},
            {"properties": {"kind": {"type": "string", "enum": ["b", "a"]}}},
        ]
        assert find_common_properties(schemas)["kind"]["enum"] == ["a", "b"]

    def test_empty(self):
        assert find_common_properties([]) == {}

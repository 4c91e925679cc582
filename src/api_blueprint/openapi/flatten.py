"""Collapse allOf / oneOf composition into plain object or enum schemas.

Schemas are plain dicts as loaded from YAML or JSON. Nothing here mutates its
input; every function returns new dicts.
"""

# Metadata that describes the composite node itself rather than any branch.
CARRIED_KEYS = (
    "description",
    "deprecated",
    "nullable",
    "x-deprecated",
    "x-undocumented",
    "x-draft",
    "x-property-group-key",
    "x-variant-group-key",
)


def flatten_schema(schema: dict) -> dict:
    """Return the canonical form of ``schema``."""
    if isinstance(schema.get("allOf"), list):
        return flatten_all_of(schema)

    if isinstance(schema.get("oneOf"), list):
        return flatten_one_of(schema)

    if schema.get("type") == "object" and schema.get("properties") is not None:
        return {
            **schema,
            "properties": {
                key: flatten_schema(value)
                for key, value in schema["properties"].items()
            },
        }

    return schema


def flatten_all_of(schema: dict) -> dict:
    """Merge every allOf branch into one object schema.

    Later branches win on property name collisions; required names are
    unioned in first-seen order.
    """
    properties: dict[str, dict] = {}
    required: list[str] = []

    for subschema in map(flatten_schema, schema["allOf"]):
        properties.update(subschema.get("properties") or {})
        for name in subschema.get("required") or []:
            if name not in required:
                required.append(name)

    return {
        **_carried(schema),
        "type": "object",
        "properties": properties,
        "required": required,
    }


def flatten_one_of(schema: dict) -> dict:
    """Merge oneOf branches.

    String enums merge into a single enum; an empty oneOf gives an empty
    string enum. Anything else merges into an
    object whose required names are the ones every branch requires.
    """
    subschemas = [flatten_schema(s) for s in schema["oneOf"]]

    if all(_is_string_enum(s) for s in subschemas):
        values = []
        for subschema in subschemas:
            for value in subschema["enum"]:
                if value not in values:
                    values.append(value)
        return {**_carried(schema), "type": "string", "enum": values}

    properties: dict[str, dict] = {}
    required_lists = []
    for subschema in subschemas:
        properties.update(subschema.get("properties") or {})
        required_lists.append(list(subschema.get("required") or []))

    common_required: list[str] = []
    if required_lists:
        common_required = [
            name
            for name in required_lists[0]
            if all(name in other for other in required_lists[1:])
        ]

    return {
        **_carried(schema),
        "type": "object",
        "properties": properties,
        "required": common_required,
    }


def is_discriminated_array(schema: dict) -> bool:
    """True for arrays whose items are a discriminated union.

    These are classified directly from the unflattened node so each union arm
    keeps its own property list.
    """
    items = schema.get("items")
    return (
        schema.get("type") == "array"
        and isinstance(items, dict)
        and "discriminator" in items
    )


def _is_string_enum(schema: dict) -> bool:
    return schema.get("type") == "string" and isinstance(schema.get("enum"), list)


def _carried(schema: dict) -> dict:
    return {key: schema[key] for key in CARRIED_KEYS if key in schema}

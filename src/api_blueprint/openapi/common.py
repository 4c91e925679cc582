"""Property intersection across the branches of a union schema."""


def find_common_properties(schemas: list[dict]) -> dict[str, dict]:
    """Return the properties present in every schema.

    Definitions come from the first schema. Enum properties get the union of
    the enum values of every branch, in first-seen order.
    """
    if not schemas or schemas[0].get("properties") is None:
        return {}

    common: dict[str, dict] = {}
    for key, value in schemas[0]["properties"].items():
        if not all(key in (schema.get("properties") or {}) for schema in schemas):
            continue

        if "enum" in value:
            values = []
            for schema in schemas:
                for item in schema["properties"][key].get("enum") or []:
                    if item not in values:
                        values.append(item)
            common[key] = {**value, "enum": values}
        else:
            common[key] = value

    return common

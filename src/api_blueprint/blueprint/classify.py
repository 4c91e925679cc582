"""Type classifier: turns flattened schema nodes into Property / Parameter trees.

The same walk produces both families; ``ClassifyContext.kind`` picks which
model set is built. Resources get properties, requests get parameters.
"""

from dataclasses import dataclass
from typing import Literal

from loguru import logger

from api_blueprint.blueprint.models import (
    BooleanParameter,
    BooleanProperty,
    DatetimeParameter,
    DatetimeProperty,
    EnumParameter,
    EnumProperty,
    EnumValue,
    Group,
    IdParameter,
    IdProperty,
    ListParameter,
    ListProperty,
    NumberParameter,
    NumberProperty,
    ObjectParameter,
    ObjectProperty,
    Parameter,
    ParameterVariant,
    Property,
    PropertyVariant,
    RecordParameter,
    RecordProperty,
    StringParameter,
    StringProperty,
)
from api_blueprint.exceptions import DiscriminatorError, EnumDefinitionError, UnsupportedTypeError
from api_blueprint.openapi.flatten import flatten_schema, is_discriminated_array
from api_blueprint.openapi.schemas import SUPPORTED_TYPES, GroupSchema, OperationSchema, PropertyMeta

Kind = Literal["property", "parameter"]

MODELS = {
    "property": {
        "string": StringProperty,
        "number": NumberProperty,
        "boolean": BooleanProperty,
        "datetime": DatetimeProperty,
        "id": IdProperty,
        "enum": EnumProperty,
        "record": RecordProperty,
        "object": ObjectProperty,
        "list": ListProperty,
        "variant": PropertyVariant,
    },
    "parameter": {
        "string": StringParameter,
        "number": NumberParameter,
        "boolean": BooleanParameter,
        "datetime": DatetimeParameter,
        "id": IdParameter,
        "enum": EnumParameter,
        "record": RecordParameter,
        "object": ObjectParameter,
        "list": ListParameter,
        "variant": ParameterVariant,
    },
}

# Name of the child list on object nodes and variants, per family.
CHILDREN = {"property": "properties", "parameter": "parameters"}

STRING_FORMATS = {"date-time": "datetime", "uuid": "id"}
SCALAR_ITEM_FORMATS = ("string", "number", "boolean", "datetime", "id")


@dataclass(frozen=True)
class ClassifyContext:
    path: str
    kind: Kind = "property"

    def child(self, name: str) -> "ClassifyContext":
        return ClassifyContext(path=f"{self.path}.{name}", kind=self.kind)


def normalize_description(content: str) -> str:
    return content.strip()


def create_properties(properties: dict, path: str) -> list[Property]:
    return create_children(properties, ClassifyContext(path=path, kind="property"))


def create_parameters(properties: dict, path: str, required: list[str] | None = None) -> list[Parameter]:
    return create_children(properties, ClassifyContext(path=path, kind="parameter"), required)


def create_request_parameters(operation: OperationSchema, path: str) -> list[Parameter]:
    """Parameters of an operation: declared query/path parameters, then the JSON body."""
    context = ClassifyContext(path=path, kind="parameter")
    parameters = []

    for param in operation.parameters:
        if param.schema_ is None:
            continue
        node = {
            **param.schema_,
            "description": param.description,
            "deprecated": param.deprecated,
            "x-deprecated": param.deprecation_message,
            "x-undocumented": param.undocumented_message,
            "x-draft": param.draft_message,
        }
        required = [param.name] if param.required else []
        parameters.extend(create_children({param.name: node}, context, required))

    body = operation.json_request_schema()
    if body is not None:
        flattened = flatten_schema(body)
        if flattened.get("type") == "object" and flattened.get("properties") is not None:
            parameters.extend(
                create_children(flattened["properties"], context, flattened.get("required"))
            )

    return parameters


def create_children(properties: dict, context: ClassifyContext, required: list[str] | None = None) -> list:
    """Classify every property of an object node.

    Typeless nodes are dropped with a warning instead of failing the compile.
    """
    children = []
    for name, node in properties.items():
        if not isinstance(node, dict):
            node = {}
        elif not is_discriminated_array(node):
            node = flatten_schema(node)

        if node.get("type") is None:
            logger.warning(
                f"The {name} property for {context.path} will not be documented "
                "since it does not define a type."
            )
            continue

        children.append(classify(name, node, context, required))
    return children


def classify(name: str, node: dict, context: ClassifyContext, required: list[str] | None = None):
    """Classify one flattened schema node.

    Raises UnsupportedTypeError when the node has no type or a type outside
    string/number/integer/boolean/array/object.
    """
    meta = PropertyMeta.model_validate(node)
    if meta.type not in SUPPORTED_TYPES:
        raise UnsupportedTypeError(str(meta.type), name, context.path)

    models = MODELS[context.kind]
    fields = _base_fields(name, node, meta, context.kind, required or [])

    if meta.type == "string":
        if meta.enum is not None:
            return models["enum"](**fields, values=_enum_values(name, meta, context))
        return models[STRING_FORMATS.get(meta.format, "string")](**fields)

    if meta.type == "boolean":
        return models["boolean"](**fields)

    if meta.type in ("number", "integer"):
        return models["number"](**fields)

    if meta.type == "object":
        if node.get("properties") is None:
            return models["record"](**fields)
        return models["object"](
            **fields,
            property_groups=_groups(meta.property_groups),
            **{
                CHILDREN[context.kind]: create_children(
                    node["properties"], context.child(name), node.get("required")
                )
            },
        )

    return _classify_array(name, node, meta, fields, context)


def _classify_array(name: str, node: dict, meta: PropertyMeta, fields: dict, context: ClassifyContext):
    model = MODELS[context.kind]["list"]
    fallback = model(**fields, item_format="record")
    items = node.get("items")

    if not isinstance(items, dict):
        return fallback

    if "oneOf" in items:
        branches = items["oneOf"] or []
        if not all(isinstance(b, dict) and b.get("type") == "object" for b in branches):
            return fallback

        discriminator = (items.get("discriminator") or {}).get("propertyName")
        if not discriminator:
            raise DiscriminatorError(name, context.path)

        variant_model = MODELS[context.kind]["variant"]
        variant_groups = meta.variant_groups or PropertyMeta.model_validate(items).variant_groups
        variants = [
            variant_model(
                description=normalize_description(str(branch.get("description") or "")),
                variant_group_key=branch.get("x-variant-group-key"),
                property_groups=_groups(PropertyMeta.model_validate(branch).property_groups),
                **{
                    CHILDREN[context.kind]: create_children(
                        branch.get("properties") or {}, context.child(name), branch.get("required")
                    )
                },
            )
            for branch in branches
        ]
        return model(
            **fields,
            item_format="discriminated_object",
            discriminator=discriminator,
            variants=variants,
            variant_groups=_groups(variant_groups),
        )

    items = flatten_schema(items)
    if items.get("type") is None:
        return fallback

    probe = classify("item", items, context.child(name))

    if probe.format in SCALAR_ITEM_FORMATS:
        return model(**fields, item_format=probe.format)
    if probe.format == "enum":
        return model(**fields, item_format="enum", item_enum_values=probe.values)
    if probe.format == "object":
        key = f"item_{CHILDREN[context.kind]}"
        return model(
            **fields,
            item_format="object",
            item_property_groups=probe.property_groups,
            **{key: getattr(probe, CHILDREN[context.kind])},
        )
    return fallback


def _base_fields(name: str, node: dict, meta: PropertyMeta, kind: Kind, required: list[str]) -> dict:
    fields = {
        "name": name,
        "description": normalize_description(meta.description),
        "is_deprecated": meta.is_deprecated,
        "deprecation_message": meta.deprecation_message,
        "is_undocumented": bool(meta.undocumented_message),
        "undocumented_message": meta.undocumented_message,
        "is_draft": bool(meta.draft_message),
        "draft_message": meta.draft_message,
    }
    if kind == "property":
        fields["is_nullable"] = meta.nullable
        fields["property_group_key"] = meta.property_group_key or None
    else:
        fields["is_required"] = name in required
        fields["has_default"] = "default" in node
        fields["default"] = node.get("default")
    return fields


def _enum_values(name: str, meta: PropertyMeta, context: ClassifyContext) -> list[EnumValue]:
    values = []
    for literal in meta.enum or []:
        value = str(literal).lower() if isinstance(literal, bool) else str(literal)
        definition = None
        if meta.enums is not None:
            definition = meta.enums.get(value)
            if definition is None:
                raise EnumDefinitionError(value, name, context.path)

        if definition is None:
            values.append(EnumValue(name=value))
            continue

        values.append(
            EnumValue(
                name=value,
                description=normalize_description(definition.description),
                is_deprecated=bool(definition.deprecated),
                deprecation_message=definition.deprecated,
                is_undocumented=bool(definition.undocumented),
                undocumented_message=definition.undocumented,
                is_draft=bool(definition.draft),
                draft_message=definition.draft,
            )
        )
    return values


def _groups(groups: dict[str, GroupSchema]) -> list[Group]:
    return [Group(key=key, name=group.name) for key, group in groups.items()]

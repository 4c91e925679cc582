"""Blueprint intermediate representation.

Every model is frozen. Python attributes are snake_case; JSON output uses the
camelCase aliases (``isDeprecated``, ``routePath``, ``itemFormat``...).
Properties and parameters are closed sum types tagged by ``format``.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api_blueprint.samples.definitions import CodeSample, ResourceSample

Method = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]
ItemFormat = Literal[
    "string", "number", "boolean", "datetime", "id", "enum", "record", "object",
    "discriminated_object",
]
AuthMethod = Literal[
    "api_key",
    "personal_access_token",
    "console_session_token",
    "client_session_token",
    "publishable_key",
]
WorkspaceScope = Literal["none", "optional", "required"]


class IRModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Documented(IRModel):
    description: str = ""
    is_deprecated: bool = False
    deprecation_message: str = ""
    is_undocumented: bool = False
    undocumented_message: str = ""
    is_draft: bool = False
    draft_message: str = ""


class EnumValue(Documented):
    name: str


class Group(IRModel):
    """A property group or variant group declared on a schema node."""

    key: str
    name: str


# Variant tags shared by properties and parameters.

class _String(IRModel):
    format: Literal["string"] = "string"
    json_type: Literal["string"] = "string"


class _Number(IRModel):
    format: Literal["number"] = "number"
    json_type: Literal["number"] = "number"


class _Boolean(IRModel):
    format: Literal["boolean"] = "boolean"
    json_type: Literal["boolean"] = "boolean"


class _Datetime(IRModel):
    format: Literal["datetime"] = "datetime"
    json_type: Literal["string"] = "string"


class _Id(IRModel):
    format: Literal["id"] = "id"
    json_type: Literal["string"] = "string"


class _Enum(IRModel):
    format: Literal["enum"] = "enum"
    json_type: Literal["string"] = "string"
    values: list[EnumValue] = Field(default_factory=list)


class _Record(IRModel):
    format: Literal["record"] = "record"
    json_type: Literal["object"] = "object"


# Properties (resource fields)

class PropertyBase(Documented):
    name: str
    is_nullable: bool = False
    property_group_key: str | None = None


class StringProperty(PropertyBase, _String):
    pass


class NumberProperty(PropertyBase, _Number):
    pass


class BooleanProperty(PropertyBase, _Boolean):
    pass


class DatetimeProperty(PropertyBase, _Datetime):
    pass


class IdProperty(PropertyBase, _Id):
    pass


class EnumProperty(PropertyBase, _Enum):
    pass


class RecordProperty(PropertyBase, _Record):
    pass


class ObjectProperty(PropertyBase):
    format: Literal["object"] = "object"
    json_type: Literal["object"] = "object"
    properties: list["Property"] = Field(default_factory=list)
    property_groups: list[Group] = Field(default_factory=list)


class PropertyVariant(IRModel):
    description: str = ""
    variant_group_key: str | None = None
    properties: list["Property"] = Field(default_factory=list)
    property_groups: list[Group] = Field(default_factory=list)


class ListProperty(PropertyBase):
    format: Literal["list"] = "list"
    json_type: Literal["array"] = "array"
    item_format: ItemFormat
    item_enum_values: list[EnumValue] | None = None
    item_properties: list["Property"] | None = None
    item_property_groups: list[Group] | None = None
    discriminator: str | None = None
    variants: list[PropertyVariant] | None = None
    variant_groups: list[Group] = Field(default_factory=list)


Property = Annotated[
    Union[
        StringProperty,
        NumberProperty,
        BooleanProperty,
        DatetimeProperty,
        IdProperty,
        EnumProperty,
        RecordProperty,
        ObjectProperty,
        ListProperty,
    ],
    Field(discriminator="format"),
]


# Parameters (request fields)

class ParameterBase(Documented):
    name: str
    is_required: bool = False
    has_default: bool = False
    default: Any = None


class StringParameter(ParameterBase, _String):
    pass


class NumberParameter(ParameterBase, _Number):
    pass


class BooleanParameter(ParameterBase, _Boolean):
    pass


class DatetimeParameter(ParameterBase, _Datetime):
    pass


class IdParameter(ParameterBase, _Id):
    pass


class EnumParameter(ParameterBase, _Enum):
    pass


class RecordParameter(ParameterBase, _Record):
    pass


class ObjectParameter(ParameterBase):
    format: Literal["object"] = "object"
    json_type: Literal["object"] = "object"
    parameters: list["Parameter"] = Field(default_factory=list)
    property_groups: list[Group] = Field(default_factory=list)


class ParameterVariant(IRModel):
    description: str = ""
    variant_group_key: str | None = None
    parameters: list["Parameter"] = Field(default_factory=list)
    property_groups: list[Group] = Field(default_factory=list)


class ListParameter(ParameterBase):
    format: Literal["list"] = "list"
    json_type: Literal["array"] = "array"
    item_format: ItemFormat
    item_enum_values: list[EnumValue] | None = None
    item_parameters: list["Parameter"] | None = None
    item_property_groups: list[Group] | None = None
    discriminator: str | None = None
    variants: list[ParameterVariant] | None = None
    variant_groups: list[Group] = Field(default_factory=list)


Parameter = Annotated[
    Union[
        StringParameter,
        NumberParameter,
        BooleanParameter,
        DatetimeParameter,
        IdParameter,
        EnumParameter,
        RecordParameter,
        ObjectParameter,
        ListParameter,
    ],
    Field(discriminator="format"),
]

for _model in (ObjectProperty, PropertyVariant, ListProperty, ObjectParameter, ParameterVariant, ListParameter):
    _model.model_rebuild()


# Endpoints

class Request(IRModel):
    methods: list[Method]
    semantic_method: Method
    preferred_method: Method
    parameters: list[Parameter] = Field(default_factory=list)


class VoidResponse(IRModel):
    response_type: Literal["void"] = "void"
    description: str = ""


class ResourceResponse(IRModel):
    response_type: Literal["resource"] = "resource"
    description: str = ""
    response_key: str
    resource_type: str
    action_attempt_type: str | None = None
    has_pagination: bool = False


class ResourceListResponse(IRModel):
    response_type: Literal["resource_list"] = "resource_list"
    description: str = ""
    response_key: str
    resource_type: str
    action_attempt_type: str | None = None
    has_pagination: bool = False


Response = Annotated[
    Union[VoidResponse, ResourceResponse, ResourceListResponse],
    Field(discriminator="response_type"),
]


class Endpoint(Documented):
    title: str = ""
    name: str
    path: str
    request: Request
    response: Response
    auth_methods: list[AuthMethod] = Field(default_factory=list)
    workspace_scope: WorkspaceScope = "none"
    code_samples: list[CodeSample] = Field(default_factory=list)


class Route(IRModel):
    path: str
    name: str
    namespace_path: str | None = None
    parent_path: str | None = None
    endpoints: list[Endpoint] = Field(default_factory=list)
    is_deprecated: bool = False
    is_undocumented: bool = False
    is_draft: bool = False


class Namespace(IRModel):
    path: str
    name: str
    parent_path: str | None = None
    is_deprecated: bool = False
    is_undocumented: bool = False
    is_draft: bool = False


# Resources

class Resource(Documented):
    resource_type: str
    route_path: str
    properties: list[Property] = Field(default_factory=list)
    property_groups: list[Group] = Field(default_factory=list)
    resource_samples: list[ResourceSample] = Field(default_factory=list)


class EventResource(Resource):
    event_type: str


class ActionAttempt(Resource):
    action_attempt_type: str


class Pagination(IRModel):
    response_key: str = "pagination"
    description: str = ""
    properties: list[Property] = Field(default_factory=list)


class Blueprint(IRModel):
    title: str
    routes: list[Route] = Field(default_factory=list)
    namespaces: list[Namespace] = Field(default_factory=list)
    resources: dict[str, Resource] = Field(default_factory=dict)
    pagination: Pagination | None = None
    events: list[EventResource] = Field(default_factory=list)
    action_attempts: list[ActionAttempt] = Field(default_factory=list)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

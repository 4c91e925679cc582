"""Pydantic models for the parts of an OpenAPI document the compiler reads.

Only known keywords are modelled; anything else is ignored.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_TYPES = ("string", "number", "integer", "boolean", "array", "object")


def _message(value: Any) -> str:
    """x-deprecated / x-undocumented / x-draft may be written as booleans."""
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    return str(value)


class _Extensions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    deprecation_message: str = Field(default="", alias="x-deprecated")
    undocumented_message: str = Field(default="", alias="x-undocumented")
    draft_message: str = Field(default="", alias="x-draft")

    @field_validator("deprecation_message", "undocumented_message", "draft_message", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str:
        return _message(value)


class EnumValueSchema(BaseModel):
    """One entry of an x-enums side table."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    description: str = ""
    undocumented: str = ""
    deprecated: str = ""
    draft: str = ""

    @field_validator("undocumented", "deprecated", "draft", mode="before")
    @classmethod
    def _coerce_message(cls, value: Any) -> str:
        return _message(value)


class GroupSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class PropertyMeta(_Extensions):
    """Documentation metadata of a schema node."""

    type: str | None = None
    format: str | None = None
    description: str = ""
    deprecated: bool = False
    nullable: bool = False
    enum: list[Any] | None = None
    enums: dict[str, EnumValueSchema] | None = Field(default=None, alias="x-enums")
    property_group_key: str | None = Field(default=None, alias="x-property-group-key")
    variant_group_key: str | None = Field(default=None, alias="x-variant-group-key")
    property_groups: dict[str, GroupSchema] = Field(default_factory=dict, alias="x-property-groups")
    variant_groups: dict[str, GroupSchema] = Field(default_factory=dict, alias="x-variant-groups")

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def is_deprecated(self) -> bool:
        return self.deprecated or bool(self.deprecation_message)


class ResourceMeta(PropertyMeta):
    route_path: str = Field(default="", alias="x-route-path")


class ParameterSchema(_Extensions):
    name: str
    location: Literal["query", "header", "path", "cookie"] = Field(alias="in")
    description: str = ""
    required: bool = False
    schema_: dict | None = Field(default=None, alias="schema")
    deprecated: bool = False


class OperationSchema(_Extensions):
    """An OpenAPI operation plus the vendor extensions the compiler reads.

    ``response_key`` distinguishes an explicit ``null`` from an absent key
    through ``model_fields_set``.
    """

    operation_id: str = Field(default="", alias="operationId")
    summary: str = ""
    description: str = ""
    parameters: list[ParameterSchema] = Field(default_factory=list)
    request_body: dict | None = Field(default=None, alias="requestBody")
    responses: dict[str, dict] | None = None
    security: list[dict[str, Any]] = Field(default_factory=list)
    deprecated: bool = False
    title: str = Field(default="", alias="x-title")
    response_key: str | None = Field(default=None, alias="x-response-key")
    action_attempt_type: str | None = Field(default=None, alias="x-action-attempt-type")

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value

    @property
    def declares_response_key(self) -> bool:
        return "response_key" in self.model_fields_set

    @property
    def is_deprecated(self) -> bool:
        return self.deprecated or bool(self.deprecation_message)

    def json_request_schema(self) -> dict | None:
        content = (self.request_body or {}).get("content") or {}
        return (content.get("application/json") or {}).get("schema")


class OpenapiInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    version: str = ""


class OpenapiComponents(BaseModel):
    model_config = ConfigDict(extra="ignore")

    schemas: dict[str, dict] = Field(default_factory=dict)


class OpenapiDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    openapi: Any = ""
    info: OpenapiInfo
    paths: dict[str, dict] = Field(default_factory=dict)
    components: OpenapiComponents = Field(default_factory=OpenapiComponents)


def is_resource_schema(schema: Any) -> bool:
    return (
        isinstance(schema, dict)
        and schema.get("type") == "object"
        and isinstance(schema.get("properties"), dict)
    )


def is_union_schema(schema: Any) -> bool:
    """A discriminated oneOf whose branches are all resource schemas."""
    if not isinstance(schema, dict):
        return False
    discriminator = schema.get("discriminator")
    branches = schema.get("oneOf")
    return (
        isinstance(discriminator, dict)
        and bool(discriminator.get("propertyName"))
        and isinstance(branches, list)
        and len(branches) > 0
        and all(is_resource_schema(branch) for branch in branches)
    )


def enum_literal(schema: dict, name: str) -> str | None:
    """First enum literal of property ``name``, e.g. an event_type tag."""
    values = ((schema.get("properties") or {}).get(name) or {}).get("enum") or []
    return str(values[0]) if values else None

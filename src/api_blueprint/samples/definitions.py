"""Sample definitions read from the types bundle, and the rendered samples."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SyntaxName = Literal[
    "javascript", "json", "python", "php", "ruby", "bash", "go", "java", "csharp",
]


class SampleRequest(BaseModel):
    path: str = Field(pattern=r"^/[a-z_/]*$")
    parameters: dict[str, Any] = Field(default_factory=dict)


class SampleResponse(BaseModel):
    body: dict[str, Any] | None = None


class CodeSampleDefinition(BaseModel):
    """An example request/response pair for one endpoint path."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    request: SampleRequest
    response: SampleResponse

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class ResourceSampleDefinition(BaseModel):
    """Example property values for one resource type."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    resource_type: str = Field(min_length=1)
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", "description", "resource_type", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class _Rendered(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Code(_Rendered):
    title: str
    sdk_name: str
    request: str
    response: str
    request_syntax: SyntaxName
    response_syntax: SyntaxName


class CodeSample(_Rendered):
    title: str
    description: str
    request: SampleRequest
    response: SampleResponse
    code: dict[str, Code] = Field(default_factory=dict)


class ResourceData(_Rendered):
    title: str
    resource_data: str
    resource_data_syntax: SyntaxName


class ResourceSample(_Rendered):
    title: str
    description: str
    resource_type: str
    properties: dict[str, Any] = Field(default_factory=dict)
    resource: dict[str, ResourceData] = Field(default_factory=dict)

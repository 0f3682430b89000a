from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]
ParamType = Literal["path", "query", "body", "header", "unknown"]

HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ParameterDescriptor(_Frozen):
    name: str = Field(min_length=1)
    data_type: str = "string"
    param_type: ParamType = "unknown"
    required: bool = False

    description: Optional[str] = None
    default_value: Optional[str] = None
    allowable_values: tuple[str, ...] = ()
    allow_multiple: bool = False


class ErrorDescriptor(_Frozen):
    code: int
    reason: str = ""


class DocumentationContext(_Frozen):
    """Pass-through metadata for the document assembly layer."""

    api_version: str = "1.0"
    swagger_version: str = "1.1"
    base_path: str = "/"
    documentation_base_path: str = "/api-docs"


class Operation(_Frozen):
    http_method: HttpMethod
    nickname: str
    summary: str = ""
    notes: str = ""
    response_class: str = "void"

    parameters: tuple[ParameterDescriptor, ...] = ()
    error_responses: tuple[ErrorDescriptor, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

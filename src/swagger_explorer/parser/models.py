"""Normalized data models for endpoints of OpenAPI/Swagger documents."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HttpMethod(str, Enum):
    """HTTP methods supported in OpenAPI, in projection order."""

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"

    @classmethod
    def lookup(cls, method: str) -> Optional["HttpMethod"]:
        """Case-insensitive lookup; ``None`` for names outside the enumeration."""
        try:
            return cls(method.lower())
        except ValueError:
            return None


class ParameterRecord(BaseModel):
    """One operation parameter."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, description="Parameter name")
    # Swagger 2.0 documents may also use "body" or "formData"
    location: Optional[str] = Field(
        None, alias="in", description="Parameter location"
    )
    required: bool = Field(default=False, description="Whether parameter is required")
    description: Optional[str] = Field(None, description="Parameter description")
    schema_: Optional[Any] = Field(None, alias="schema", description="Parameter schema")
    example: Optional[Any] = Field(None, description="Example value")

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "in": self.location,
                "required": self.required,
                "description": self.description,
                "schema": self.schema_,
                "example": self.example,
            }
        )


class RequestBodyRecord(BaseModel):
    """Declared request body of an operation."""

    description: Optional[str] = Field(None, description="Request body description")
    required: bool = Field(
        default=False, description="Whether request body is required"
    )
    content: Optional[Any] = Field(
        None, description="Content by media type"
    )

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "description": self.description,
                "required": self.required,
                "content": self.content,
            }
        )


class ResponseRecord(BaseModel):
    """One declared response of an operation."""

    description: Optional[str] = Field(None, description="Response description")
    content: Optional[Any] = Field(
        None, description="Content by media type"
    )
    headers: Optional[Any] = Field(None, description="Response headers")

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "description": self.description,
                "content": self.content,
                "headers": self.headers,
            }
        )


class EndpointRecord(BaseModel):
    """Normalized view of a single (path, method) operation."""

    model_config = ConfigDict(populate_by_name=True)

    method: str = Field(..., description="Upper-case HTTP method")
    path: str = Field(..., description="Path template as declared")
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = Field(None, alias="operationId")
    tags: Optional[List[Any]] = None
    parameters: List[ParameterRecord] = Field(default_factory=list)
    request_body: Optional[RequestBodyRecord] = Field(None, alias="requestBody")
    responses: Dict[str, ResponseRecord] = Field(default_factory=dict)

    @property
    def required_parameters(self) -> List[ParameterRecord]:
        return [param for param in self.parameters if param.required]

    @property
    def optional_parameters(self) -> List[ParameterRecord]:
        return [param for param in self.parameters if not param.required]

    def to_dict(self) -> Dict[str, Any]:
        """Full JSON form; absent metadata is omitted, structure keys are not."""
        data = _compact(
            {
                "method": self.method,
                "path": self.path,
                "summary": self.summary,
                "description": self.description,
                "operationId": self.operation_id,
                "tags": self.tags,
            }
        )
        data["parameters"] = [param.to_dict() for param in self.parameters]
        data["requestBody"] = (
            self.request_body.to_dict() if self.request_body else None
        )
        data["responses"] = {
            code: response.to_dict() for code, response in self.responses.items()
        }
        return data

    def to_listing(self, include_description: bool = False) -> Dict[str, Any]:
        """Compact form used by endpoint listings and search results."""
        listing = {
            "method": self.method,
            "path": self.path,
            "summary": self.summary,
        }
        if include_description:
            listing["description"] = self.description
        return _compact(listing)


class ApiSummary(BaseModel):
    """Registry listing entry for one loaded specification."""

    id: str
    title: str
    version: Optional[str] = None
    description: Optional[str] = None
    path_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "title": self.title,
                "version": self.version,
                "description": self.description,
                "pathCount": self.path_count,
            }
        )


class LoadResult(BaseModel):
    """Outcome of a successful load."""

    api_id: str
    title: str
    version: Optional[str] = None
    path_count: int = 0
    endpoint_count: int = 0

    def describe(self) -> str:
        return (
            f"Successfully loaded API '{self.title}' "
            f"(v{self.version or 'unknown'}) with {self.path_count} paths "
            f"and {self.endpoint_count} endpoints."
        )


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}

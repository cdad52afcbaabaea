"""Pydantic models for problem detail responses (RFC 7807)."""
from pydantic import BaseModel, ConfigDict, Field, model_serializer
from typing import List, Optional

# Base members that are dropped from the output when empty
PROBLEM_BASE_FIELDS = ("type", "title", "status", "detail", "instance")


class Problem(BaseModel):
    """Base problem detail document.

    Extend it by subclassing with application specific fields, or pass extra
    keyword fields directly. Extension fields are serialized next to the base
    members, never nested under a sub-object.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: Optional[str] = Field(None, description="URI reference identifying the problem type")
    title: Optional[str] = Field(None, description="Short human-readable summary of the problem type")
    status: Optional[int] = Field(None, description="HTTP status code generated by the origin server")
    detail: Optional[str] = Field(None, description="Explanation specific to this occurrence")
    instance: Optional[str] = Field(None, description="URI reference identifying this occurrence")

    @model_serializer(mode="wrap")
    def serialize_problem(self, handler):
        data = handler(self)
        for name in PROBLEM_BASE_FIELDS:
            if name in data and not data[name]:
                del data[name]
        return data


class InvalidParam(BaseModel):
    """A single request parameter that failed validation."""
    name: str = Field(..., description="Parameter name or dotted location")
    reason: str = Field(..., description="Why the value was rejected")


class ValidationProblem(Problem):
    """Problem detail for request validation failures."""
    invalid_params: List[InvalidParam] = Field(
        default_factory=list,
        alias="invalid-params",
        description="Parameters that failed validation",
    )

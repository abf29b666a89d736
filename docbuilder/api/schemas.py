"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from docbuilder.forms.models import VariableDefinition
from docbuilder.forms.renderer import FieldControl


class FormValidationRequest(BaseModel):
    """Variable definitions of a template and the values submitted for it."""

    variables: list[VariableDefinition] = Field(description="Definitions to validate against")
    values: dict[str, str] = Field(
        default_factory=dict, description="Submitted values keyed by variable name"
    )


class FormValidationResponse(BaseModel):
    """Result of validating a submitted form."""

    valid: bool
    errors: dict[str, str] = Field(
        default_factory=dict, description="Error message per failing variable"
    )


class FieldListResponse(BaseModel):
    """Rendered control descriptors, in definition order."""

    fields: list[FieldControl]


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")

"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    """Substitutions to apply when rendering a template."""

    values: dict[str, str | int | float] = Field(
        default_factory=dict,
        description="Placeholder names mapped to single-line values",
    )
    multiline_values: dict[str, str] = Field(
        default_factory=dict,
        description="Placeholder names mapped to values whose lines become line breaks",
    )
    escape: bool = Field(default=True, description="Escape XML special characters in values")


class PlaceholderListResponse(BaseModel):
    """Placeholders detected in an uploaded template."""

    filename: str
    placeholders: list[str] = Field(description="Placeholder names in document order")
    count: int


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    error_code: str | None = None

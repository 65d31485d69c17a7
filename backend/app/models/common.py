"""Common response types shared across endpoints."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint on failure."""

    error: str = Field(..., description="Short user-facing message")


class TagResponse(BaseModel):
    """Response for POST /api/tag."""

    tags: str = Field(..., description="Comma-separated tags")

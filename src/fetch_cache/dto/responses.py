"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Response DTO for a failed fetch."""

    code: str = Field(..., description="Machine readable error code, e.g. 'ORIGIN_NOT_ALLOWED'")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional context (origin, url, upstream status, ...)",
    )

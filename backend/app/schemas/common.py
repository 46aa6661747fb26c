"""
Common schemas used across the application.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Failed to generate PDF: WebP format requires additional processing. "
                "Please convert to JPG or PNG first.",
                "code": "unsupported_format",
                "stage": "format",
                "details": {"source": "photo.webp", "extension": ".webp"},
            }
        }
    )

    message: str = Field(..., description="Human-readable error message")
    code: Optional[str] = Field(None, description="Error code for client handling")
    stage: Optional[str] = Field(None, description="Pipeline stage that failed")
    details: Optional[dict[str, Any]] = Field(None, description="Structured error context")

"""
Upload-related schemas.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class UploadLimitsResponse(BaseModel):
    """Limits enforced on POST /upload/images-to-pdf."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "max_images": 20,
                "max_image_bytes": 10485760,
                "allowed_mime_types": ["image/jpeg", "image/jpg", "image/png", "image/webp"],
            }
        }
    )

    max_images: int = Field(..., gt=0, description="Maximum images per request")
    max_image_bytes: int = Field(..., gt=0, description="Maximum size of one image in bytes")
    allowed_mime_types: List[str] = Field(..., description="Accepted upload MIME types")

"""
Schemas - Pydantic models for request/response validation.
"""

from .common import ErrorResponse
from .upload import UploadLimitsResponse

__all__ = [
    "ErrorResponse",
    "UploadLimitsResponse",
]

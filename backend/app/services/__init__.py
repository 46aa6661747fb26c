"""
Services layer - Business logic orchestration.

This layer coordinates between the HTTP API and the PDF assembly pipeline.
"""

from .conversion_service import ConversionService

__all__ = [
    "ConversionService",
]

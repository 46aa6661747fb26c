"""
Imaging - uploaded image inputs, format dispatch and decoding.
"""

from .formats import ImageFormat, parse_format
from .types import DecodedImage, ImageInput
from .decode import decode_image

__all__ = [
    "DecodedImage",
    "ImageFormat",
    "ImageInput",
    "decode_image",
    "parse_format",
]

from __future__ import annotations

from enum import Enum
from typing import Dict

from ..core.errors import UnsupportedFormatError


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"


_TAGS: Dict[str, ImageFormat] = {
    "png": ImageFormat.PNG,
    "jpg": ImageFormat.JPEG,
    "jpeg": ImageFormat.JPEG,
    "webp": ImageFormat.WEBP,
}

WEBP_HINT = "WebP format requires additional processing. Please convert to JPG or PNG first."


def normalize_tag(tag: str) -> str:
    return (tag or "").strip().lower().lstrip(".")


def parse_format(tag: str, *, source: str = "") -> ImageFormat:
    """
    Declared tag -> ImageFormat. The tag is the only input: file contents are
    never inspected here.
    """
    fmt = _TAGS.get(normalize_tag(tag))
    if fmt is None:
        shown = f".{normalize_tag(tag)}" if normalize_tag(tag) else "(no extension)"
        raise UnsupportedFormatError(
            f"Unsupported image format: {shown}",
            details={"source": source, "extension": shown},
        )
    return fmt

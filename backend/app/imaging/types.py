from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from .formats import ImageFormat


def tag_from_name(name: str, content_type: Optional[str] = None) -> str:
    """
    Declared format tag for an upload: filename extension first,
    MIME subtype ("image/png" -> "png") only when the name has no extension.
    """
    suffix = PurePath(name or "").suffix
    if suffix:
        return suffix
    if content_type and "/" in content_type:
        return content_type.split(";", 1)[0].split("/", 1)[1].strip()
    return ""


@dataclass(frozen=True)
class ImageInput:
    name: str
    data: bytes
    format_tag: str

    @classmethod
    def from_upload(
        cls, name: str, data: bytes, content_type: Optional[str] = None
    ) -> "ImageInput":
        return cls(name=name, data=bytes(data), format_tag=tag_from_name(name, content_type))

    def __repr__(self) -> str:
        return f"ImageInput(name={self.name!r}, format_tag={self.format_tag!r}, size={len(self.data)})"


@dataclass(frozen=True)
class DecodedImage:
    source: str
    format: ImageFormat
    data: bytes
    width: int
    height: int

    def __repr__(self) -> str:
        return (
            f"DecodedImage(source={self.source!r}, format={self.format.value}, "
            f"width={self.width}, height={self.height})"
        )

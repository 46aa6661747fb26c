from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from ..core.errors import DecodeError, UnsupportedFormatError
from ..core.mupdf import MUPDF_LOCK
from .formats import WEBP_HINT, ImageFormat, parse_format
from .types import DecodedImage, ImageInput

logger = logging.getLogger(__name__)

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_JPEG_SIGNATURE = b"\xff\xd8\xff"
_JPEG_EOI = b"\xff\xd9"
_PNG_IEND = b"IEND\xaeB`\x82"
_DAMAGE_MARKERS = ("premature end", "corrupt", "truncated")


class _Undecodable(Exception):
    pass


def _pixel_size(data: bytes) -> Tuple[int, int]:
    try:
        import fitz  # PyMuPDF
    except Exception as e:
        raise _Undecodable(f"PyMuPDF (fitz) import failed: {e}") from e

    with MUPDF_LOCK:
        fitz.TOOLS.mupdf_warnings(reset=True)
        try:
            pix = fitz.Pixmap(data)
        except Exception as e:
            raise _Undecodable(f"cannot decode image data: {e}") from e
        width, height = int(pix.width), int(pix.height)
        pix = None
        warnings = fitz.TOOLS.mupdf_warnings(reset=True) or ""

    # MuPDF decodes damaged streams partially and only warns
    damaged = [
        ln for ln in warnings.splitlines() if any(m in ln.lower() for m in _DAMAGE_MARKERS)
    ]
    if damaged:
        raise _Undecodable(f"image data is damaged: {damaged[0].strip()}")

    if width <= 0 or height <= 0:
        raise _Undecodable(f"image has no pixels ({width}x{height})")
    return width, height


def _decode_png(data: bytes) -> Tuple[int, int]:
    if not data.startswith(_PNG_SIGNATURE):
        raise _Undecodable("data is not a PNG image")
    if _PNG_IEND not in data[-64:]:
        raise _Undecodable("PNG data is truncated (no IEND chunk)")
    return _pixel_size(data)


def _decode_jpeg(data: bytes) -> Tuple[int, int]:
    if not data.startswith(_JPEG_SIGNATURE):
        raise _Undecodable("data is not a JPEG image")
    if not data.rstrip(b"\x00").endswith(_JPEG_EOI):
        raise _Undecodable("JPEG data is truncated (no end-of-image marker)")
    return _pixel_size(data)


# None = recognized but deliberately unsupported; the value is the user hint
_DECODERS: Dict[ImageFormat, Optional[Callable[[bytes], Tuple[int, int]]]] = {
    ImageFormat.PNG: _decode_png,
    ImageFormat.JPEG: _decode_jpeg,
    ImageFormat.WEBP: None,
}
_UNSUPPORTED_HINTS: Dict[ImageFormat, str] = {
    ImageFormat.WEBP: WEBP_HINT,
}

_missing = [f.value for f in ImageFormat if f not in _DECODERS]
if _missing:
    raise RuntimeError(f"no decoder entry for image formats: {_missing}")
del _missing


def decode_image(image: ImageInput, index: int) -> DecodedImage:
    """
    Format dispatch + decode for one input.

    Raises UnsupportedFormatError for unknown/unsupported tags and
    DecodeError (tagged with name and index) for bad data.
    """
    fmt = parse_format(image.format_tag, source=image.name)

    decoder = _DECODERS[fmt]
    if decoder is None:
        hint = _UNSUPPORTED_HINTS[fmt]
        raise UnsupportedFormatError(
            hint,
            details={"source": image.name, "extension": f".{fmt.value}", "hint": hint},
        )

    if not image.data:
        raise DecodeError("image is empty", source=image.name, index=index)

    try:
        width, height = decoder(image.data)
    except _Undecodable as e:
        raise DecodeError(str(e), source=image.name, index=index) from e

    logger.debug("decoded %s #%d: %s %dx%d", image.name, index, fmt.value, width, height)
    return DecodedImage(
        source=image.name,
        format=fmt,
        data=image.data,
        width=width,
        height=height,
    )

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..core.errors import AssemblyCancelledError, DecodeError, InputError, SerializationError
from ..core.mupdf import MUPDF_LOCK
from ..imaging.decode import decode_image
from ..imaging.types import DecodedImage, ImageInput
from .layout import PageLayout, compute_layout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedPage:
    index: int
    image: DecodedImage
    layout: PageLayout


@dataclass
class Document:
    pages: List[PlacedPage] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


class _PdfWriter:
    """Thin wrapper over a PyMuPDF document: one image per page, append-only."""

    def __init__(self) -> None:
        import fitz  # PyMuPDF

        self._fitz = fitz
        with MUPDF_LOCK:
            self._doc = fitz.open()

    def add_page(self, placed: PlacedPage) -> None:
        lay = placed.layout
        rect = self._fitz.Rect(
            lay.offset_x,
            lay.offset_y,
            lay.offset_x + lay.image_width,
            lay.offset_y + lay.image_height,
        )
        with MUPDF_LOCK:
            page = self._doc.new_page(width=lay.page_width, height=lay.page_height)
            page.insert_image(rect, stream=placed.image.data, keep_proportion=False)

    def to_bytes(self) -> bytes:
        with MUPDF_LOCK:
            return self._doc.tobytes(garbage=3, deflate=True)

    def close(self) -> None:
        with MUPDF_LOCK:
            self._doc.close()


def _check_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise AssemblyCancelledError()


def images_to_pdf(
    images: Iterable[ImageInput],
    *,
    cancel: Optional[threading.Event] = None,
) -> Tuple[Document, bytes]:
    """
    Decode -> layout -> page append for every image, strictly in input order,
    then serialize. Any failure aborts the whole call; nothing partial escapes.
    """
    images = list(images)
    if not images:
        raise InputError()

    try:
        writer = _PdfWriter()
    except Exception as e:
        raise SerializationError(f"cannot create PDF document: {e}") from e

    document = Document()
    try:
        for index, image in enumerate(images):
            _check_cancel(cancel)

            decoded = decode_image(image, index)
            placed = PlacedPage(
                index=index,
                image=decoded,
                layout=compute_layout(decoded.width, decoded.height),
            )
            try:
                writer.add_page(placed)
            except Exception as e:
                raise DecodeError(
                    f"cannot place image on page: {e}", source=image.name, index=index
                ) from e

            document.pages.append(placed)
            logger.debug(
                "page %d: %s %.1fx%.1f on %.1fx%.1f",
                index + 1,
                image.name,
                placed.layout.image_width,
                placed.layout.image_height,
                placed.layout.page_width,
                placed.layout.page_height,
            )

        _check_cancel(cancel)

        try:
            data = writer.to_bytes()
        except Exception as e:
            raise SerializationError(str(e)) from e
        if not data:
            raise SerializationError("PDF writer produced no data")
    finally:
        writer.close()

    return document, data

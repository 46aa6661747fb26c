from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..core.errors import AssemblyCancelledError, InputError
from ..imaging.types import ImageInput
from .images_to_pdf import images_to_pdf
from .storage import new_artifact_name, write_atomic

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class Artifact:
    path: Path
    data: bytes
    page_count: int
    media_type: str = PDF_MEDIA_TYPE

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def size(self) -> int:
        return len(self.data)


class PdfAssembler:
    """
    Images -> one multi-page PDF.

    The output directory is injected; the assembler keeps no other state, so one
    instance can serve concurrent calls (each call owns its document and gets
    its own uniquely named file).
    """

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def assemble_bytes(
        self,
        images: Iterable[ImageInput],
        *,
        cancel: Optional[threading.Event] = None,
    ) -> bytes:
        """In-memory variant: PDF bytes, nothing written to disk."""
        _, data = images_to_pdf(images, cancel=cancel)
        return data

    def assemble(
        self,
        images: Iterable[ImageInput],
        *,
        cancel: Optional[threading.Event] = None,
    ) -> Artifact:
        images = list(images)
        if not images:
            raise InputError()

        document, data = images_to_pdf(images, cancel=cancel)

        if cancel is not None and cancel.is_set():
            raise AssemblyCancelledError()

        path = write_atomic(self._output_dir, new_artifact_name(), data)

        # cancelled while writing: nobody will collect the file
        if cancel is not None and cancel.is_set():
            path.unlink(missing_ok=True)
            raise AssemblyCancelledError()

        logger.info(
            "PDF assembled: %s (%d pages, %d bytes)", path.name, document.page_count, len(data)
        )
        return Artifact(path=path, data=data, page_count=document.page_count)

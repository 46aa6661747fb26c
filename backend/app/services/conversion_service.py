# backend/app/services/conversion_service.py

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional

from app.core.config import DEFAULT_UPLOAD_DIR
from app.core.errors import AssemblyCancelledError
from app.imaging.types import ImageInput
from app.pipeline.orchestrator import Artifact, PdfAssembler

logger = logging.getLogger(__name__)


class _Handoff:
    """Result slot shared by the caller and the worker thread; guarded by `lock`."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.abandoned = False
        self.artifact: Optional[Artifact] = None


class ConversionService:
    """
    Facade between the HTTP layer and PdfAssembler:
      - owns the upload (artifact) directory
      - runs assembly in a worker thread, off the event loop
      - turns request cancellation into an assembler stop signal
      - removes served artifacts
    """

    def __init__(self, upload_dir: Optional[Path] = None, *, keep_artifacts: bool = False) -> None:
        if upload_dir is None:
            upload_dir = DEFAULT_UPLOAD_DIR
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        self._keep_artifacts = keep_artifacts
        self._assembler = PdfAssembler(self._upload_dir)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    @property
    def keep_artifacts(self) -> bool:
        return self._keep_artifacts

    async def images_to_pdf(self, images: Iterable[ImageInput]) -> Artifact:
        images = list(images)
        cancel = threading.Event()
        handoff = _Handoff()
        try:
            return await asyncio.to_thread(self._assemble_once, images, cancel, handoff)
        except asyncio.CancelledError:
            # the worker thread keeps running until its next checkpoint
            with handoff.lock:
                handoff.abandoned = True
                cancel.set()
                orphan = handoff.artifact
            if orphan is not None:
                self._remove(orphan)
            logger.info("PDF assembly cancelled by caller (%d images)", len(images))
            raise

    def _assemble_once(
        self, images: List[ImageInput], cancel: threading.Event, handoff: "_Handoff"
    ) -> Artifact:
        artifact = self._assembler.assemble(images, cancel=cancel)
        with handoff.lock:
            if not handoff.abandoned:
                handoff.artifact = artifact
                return artifact
        self._remove(artifact)
        raise AssemblyCancelledError()

    async def images_to_pdf_bytes(self, images: Iterable[ImageInput]) -> bytes:
        return await asyncio.to_thread(self._assembler.assemble_bytes, list(images))

    def discard(self, artifact: Artifact) -> None:
        """Delete a served artifact (no-op when artifacts are kept)."""
        if self._keep_artifacts:
            return
        self._remove(artifact)

    def _remove(self, artifact: Artifact) -> None:
        try:
            artifact.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("cannot remove artifact %s: %s", artifact.path, e)

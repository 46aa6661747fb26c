# backend/app/api/uploads.py
from __future__ import annotations

import logging
import time
from typing import Any, List, Optional

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import FileResponse, JSONResponse
from starlette.background import BackgroundTask

from app.core.config import ALLOWED_MIME_TYPES, Settings
from app.core.errors import (
    PDF_FAILURE_PREFIX,
    DecodeError,
    InputError,
    UnsupportedFormatError,
    UserFacingError,
)
from app.imaging.types import ImageInput
from app.schemas.common import ErrorResponse
from app.schemas.upload import UploadLimitsResponse
from app.services.conversion_service import ConversionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    415: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _service(request: Request) -> ConversionService:
    return request.app.state.conversion_service


def _status_for(e: UserFacingError) -> int:
    if isinstance(e, UnsupportedFormatError):
        return 415
    if isinstance(e, DecodeError):
        return 422
    if isinstance(e, InputError) or e.stage == "upload":
        return 400
    return 500


def _error_response(status_code: int, e: UserFacingError) -> JSONResponse:
    body = ErrorResponse(message=e.message, code=e.code, stage=e.stage, details=e.details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _read_uploads(files: List[UploadFile], settings: Settings) -> List[ImageInput]:
    if len(files) > settings.max_images:
        raise UserFacingError(
            code="too_many_files",
            message=f"Too many files. Maximum is {settings.max_images} images per request.",
            details={"count": len(files), "max_images": settings.max_images},
            stage="upload",
        )

    images: List[ImageInput] = []
    for index, f in enumerate(files):
        filename = f.filename or f"image-{index + 1}"
        content_type = (f.content_type or "").split(";", 1)[0].strip().lower()
        if content_type not in ALLOWED_MIME_TYPES:
            raise UserFacingError(
                code="invalid_mime_type",
                message="Only JPG, PNG, and WEBP images are allowed.",
                details={"source": filename, "content_type": content_type or None},
                stage="upload",
            )

        # read one byte past the limit instead of the whole body
        data = await f.read(settings.max_image_bytes + 1)
        if len(data) > settings.max_image_bytes:
            raise UserFacingError(
                code="file_too_large",
                message=f"File {filename} is too large. Maximum size is "
                f"{settings.max_image_bytes // (1024 * 1024)}MB per image.",
                details={"source": filename, "max_image_bytes": settings.max_image_bytes},
                stage="upload",
            )
        images.append(ImageInput.from_upload(filename, data, content_type))
    return images


@router.get("/limits", response_model=UploadLimitsResponse)
async def upload_limits(request: Request) -> UploadLimitsResponse:
    settings = _settings(request)
    return UploadLimitsResponse(
        max_images=settings.max_images,
        max_image_bytes=settings.max_image_bytes,
        allowed_mime_types=sorted(ALLOWED_MIME_TYPES),
    )


@router.post(
    "/images-to-pdf",
    response_class=FileResponse,
    responses=_ERROR_RESPONSES,
)
async def images_to_pdf(
    request: Request,
    images: Optional[List[UploadFile]] = File(None),
) -> Any:
    svc = _service(request)
    files = images or []

    try:
        if not files:
            raise InputError("Please upload at least one image")
        inputs = await _read_uploads(files, _settings(request))
        artifact = await svc.images_to_pdf(inputs)
    except UserFacingError as e:
        status = _status_for(e)
        if status >= 500:
            logger.exception("PDF generation failed: %s", e)
        else:
            logger.warning("PDF request rejected (%s): %s", e.code, e.message)
        return _error_response(status, e)
    except Exception as e:  # noqa: BLE001
        logger.exception("PDF generation failed: %s", e)
        return _error_response(
            500,
            UserFacingError(
                code="pdf_generation_failed",
                message=f"{PDF_FAILURE_PREFIX}{e}",
            ),
        )
    finally:
        for f in files:
            await f.close()

    return FileResponse(
        path=artifact.path,
        media_type=artifact.media_type,
        filename=f"converted-images-{int(time.time() * 1000)}.pdf",
        background=BackgroundTask(svc.discard, artifact),
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

PDF_FAILURE_PREFIX = "Failed to generate PDF: "


@dataclass
class UserFacingError(Exception):
    """
    An error that is safe and useful to show directly in UI.
    """
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    stage: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.stage:
            out["stage"] = self.stage
        if self.details:
            out["details"] = self.details
        return out


class AssemblyError(UserFacingError):
    """
    Base for failures inside the images -> PDF pipeline.

    `message` is the stable outward text ("Failed to generate PDF: <reason>"),
    `reason` keeps the bare cause. The low-level exception (if any) is chained
    via `raise ... from e`.
    """

    default_code = "pdf_generation_failed"
    default_stage: Optional[str] = None

    def __init__(self, reason: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            code=self.default_code,
            message=f"{PDF_FAILURE_PREFIX}{reason}",
            details=details,
            stage=self.default_stage,
        )
        self.reason = reason


class InputError(AssemblyError):
    default_code = "no_images"
    default_stage = "input"

    def __init__(self, reason: str = "No images provided for PDF generation") -> None:
        super().__init__(reason)
        # raised before the pipeline starts: no prefix
        self.message = reason


class UnsupportedFormatError(AssemblyError):
    default_code = "unsupported_format"
    default_stage = "format"


class DecodeError(AssemblyError):
    default_code = "decode_failed"
    default_stage = "decode"

    def __init__(self, reason: str, *, source: str, index: int) -> None:
        super().__init__(
            f"{source}: {reason}",
            details={"source": source, "index": index},
        )
        self.source = source
        self.index = index


class SerializationError(AssemblyError):
    default_code = "serialization_failed"
    default_stage = "serialize"


class PersistenceError(AssemblyError):
    default_code = "persistence_failed"
    default_stage = "persist"


class AssemblyCancelledError(AssemblyError):
    default_code = "cancelled"
    default_stage = "cancel"

    def __init__(self, reason: str = "request was cancelled") -> None:
        super().__init__(reason)

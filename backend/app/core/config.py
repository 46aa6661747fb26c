from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_UPLOAD_DIR = Path(__file__).resolve().parents[1] / "uploads"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

# upload/transport limits (assembler itself enforces none of these)
DEFAULT_MAX_IMAGES = 20
DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


def _parse_cors_origins(env_value: str | None) -> List[str]:
    """
    Parses comma-separated origins:
      CORS_ALLOW_ORIGINS="http://localhost:5173,http://127.0.0.1:5173"
    Empty/None -> default list.
    """
    if not env_value:
        return list(DEFAULT_CORS_ORIGINS)
    parts = [p.strip() for p in env_value.split(",")]
    return [p for p in parts if p]


def _parse_bool(env_value: str | None, default: bool = False) -> bool:
    if env_value is None or not env_value.strip():
        return default
    return env_value.strip().lower() in ("1", "true", "yes", "on")


def _parse_int(env_value: str | None, default: int) -> int:
    if env_value is None or not env_value.strip():
        return default
    value = int(env_value)
    if value <= 0:
        raise ValueError(f"expected a positive integer, got {env_value!r}")
    return value


@dataclass(frozen=True)
class Settings:
    upload_dir: Path = DEFAULT_UPLOAD_DIR
    max_images: int = DEFAULT_MAX_IMAGES
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    keep_artifacts: bool = False
    cors_allow_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        upload_dir = env.get("UPLOAD_DIR")
        return cls(
            upload_dir=Path(upload_dir) if upload_dir else DEFAULT_UPLOAD_DIR,
            max_images=_parse_int(env.get("MAX_IMAGES"), DEFAULT_MAX_IMAGES),
            max_image_bytes=_parse_int(env.get("MAX_IMAGE_BYTES"), DEFAULT_MAX_IMAGE_BYTES),
            keep_artifacts=_parse_bool(env.get("KEEP_ARTIFACTS")),
            cors_allow_origins=_parse_cors_origins(env.get("CORS_ALLOW_ORIGINS")),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

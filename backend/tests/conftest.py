from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Tuple

import pytest


def pytest_sessionstart(session):
    """
    Make sure backend/ (where the app/ package lives) is on sys.path,
    even when pytest is started from the repository root.
    """
    backend_dir = Path(__file__).resolve().parents[1]  # .../backend
    p = str(backend_dir)
    if p not in sys.path:
        sys.path.insert(0, p)


ImageFactory = Callable[..., bytes]


def _solid_pixmap(width: int, height: int, rgb: Tuple[int, int, int]):
    import fitz  # PyMuPDF

    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.set_rect(pix.irect, rgb)
    return pix


@pytest.fixture
def png_bytes() -> ImageFactory:
    """Factory: solid-colour PNG of the given pixel size."""

    def make(width: int, height: int, rgb: Tuple[int, int, int] = (200, 30, 30)) -> bytes:
        return _solid_pixmap(width, height, rgb).tobytes("png")

    return make


@pytest.fixture
def jpeg_bytes() -> ImageFactory:
    """Factory: solid-colour JPEG of the given pixel size."""

    def make(width: int, height: int, rgb: Tuple[int, int, int] = (30, 30, 200)) -> bytes:
        return _solid_pixmap(width, height, rgb).tobytes("jpg")

    return make


@pytest.fixture
def noisy_image_bytes() -> ImageFactory:
    """Factory: random-pixel image (poorly compressible), fmt "png" or "jpg"."""
    import random

    import fitz  # PyMuPDF

    def make(fmt: str, width: int, height: int, seed: int = 7) -> bytes:
        samples = random.Random(seed).randbytes(width * height * 3)
        pix = fitz.Pixmap(fitz.csRGB, width, height, samples, False)
        return pix.tobytes(fmt)

    return make


@pytest.fixture
def webp_bytes() -> bytes:
    # only the container header; WebP is rejected before decoding
    return b"RIFF\x24\x00\x00\x00WEBPVP8 \x18\x00\x00\x00" + b"\x00" * 24


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """
    Temporary directory for generated PDFs.
    """
    out = tmp_path / "out"
    out.mkdir(parents=True, exist_ok=True)
    return out


@pytest.fixture
def open_pdf():
    """Factory: PDF bytes -> open PyMuPDF document (caller closes it)."""
    import fitz  # PyMuPDF

    def _open(data: bytes):
        return fitz.open(stream=data, filetype="pdf")

    return _open

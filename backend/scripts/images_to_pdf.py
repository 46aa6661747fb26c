#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Local images -> one PDF, without the HTTP layer.

  python backend/scripts/images_to_pdf.py --out-dir out a.png b.jpg c.jpeg

Pages follow the order of the arguments.
Exit codes:
- 0: PDF written
- 2: conversion failed (message printed)
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# make app/ importable when run from the repo root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.core.errors import UserFacingError  # noqa: E402
from app.imaging.types import ImageInput  # noqa: E402
from app.pipeline.orchestrator import PdfAssembler  # noqa: E402


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Convert PNG/JPEG images into a single PDF (one image per page).")
    ap.add_argument("images", nargs="*", help="Image files, in page order")
    ap.add_argument("--out-dir", default="backend/out", help="Directory for the generated PDF")
    args = ap.parse_args(argv)

    inputs: List[ImageInput] = []
    for raw in args.images:
        p = Path(raw)
        try:
            data = p.read_bytes()
        except OSError as e:
            print(f"[ERROR] cannot read {p}: {e}")
            return 2
        inputs.append(ImageInput.from_upload(p.name, data))

    try:
        artifact = PdfAssembler(Path(args.out_dir)).assemble(inputs)
    except UserFacingError as e:
        print(f"[ERROR] {e.message}")
        return 2

    print(f"[RESULT] {artifact.path} ({artifact.page_count} pages, {artifact.size} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())

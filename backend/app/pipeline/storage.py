from __future__ import annotations

import os
import secrets
import time
from pathlib import Path

from ..core.errors import PersistenceError


def new_artifact_name(prefix: str = "pdf", ext: str = "pdf") -> str:
    # ms timestamp alone collides under concurrent requests
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"


def write_atomic(output_dir: Path, name: str, data: bytes) -> Path:
    """
    Write `data` to output_dir/name through a temporary sibling + rename,
    so a reader never sees a half-written file. On failure nothing is left.
    """
    output_dir = Path(output_dir)
    target = output_dir / name
    tmp = output_dir / f".{name}.part"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        if target.exists():
            raise FileExistsError(f"artifact already exists: {target.name}")
        tmp.write_bytes(data)
        os.replace(tmp, target)
    except Exception as e:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            pass
        raise PersistenceError(f"cannot write {target}: {e}") from e
    return target

from __future__ import annotations

import threading

# PyMuPDF is not thread-safe: every call into fitz goes through this lock.
# Held per operation (decode one image, add one page, serialize), so concurrent
# conversions interleave page by page instead of running back to back.
MUPDF_LOCK = threading.RLock()

"""
Pipeline - images -> PDF document assembly.

Components:
- layout: page geometry for one image (A4 envelope, centering)
- images_to_pdf: decode + page construction + serialization, in input order
- storage: collision-free artifact names and atomic writes
- orchestrator: PdfAssembler, the entry point used by services and scripts
"""

from .layout import PageLayout, compute_layout
from .orchestrator import Artifact, PdfAssembler

__all__ = [
    "Artifact",
    "PageLayout",
    "PdfAssembler",
    "compute_layout",
]

"""
Module: output.backend

Purpose:
    Load the PDF assembly libraries (ReportLab, Pillow) on first use and
    keep them for the rest of the process. Parsing and preview never pay
    for these imports; only the first export does.

Key Functions:
    - load_pdf_backend(): Cached loader

Key Classes:
    - PdfBackend: Handles to the loaded capabilities
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable

from .errors import ExportBackendError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PdfBackend:
    """
    Loaded export capabilities.

    Attributes:
        canvas_cls: reportlab.pdfgen.canvas.Canvas
        image_reader_cls: reportlab.lib.utils.ImageReader
        landscape: reportlab.lib.pagesizes.landscape
        portrait: reportlab.lib.pagesizes.portrait
        image_module: PIL.Image
    """
    canvas_cls: Any
    image_reader_cls: Any
    landscape: Callable[[tuple], tuple]
    portrait: Callable[[tuple], tuple]
    image_module: Any


@lru_cache(maxsize=None)
def load_pdf_backend() -> PdfBackend:
    """
    Import ReportLab and Pillow once and cache the handles.

    Raises:
        ExportBackendError: If either library is missing
    """
    try:
        from PIL import Image
        from reportlab.lib.pagesizes import landscape, portrait
        from reportlab.lib.utils import ImageReader
        from reportlab.pdfgen import canvas
    except ImportError as e:
        raise ExportBackendError(
            "reportlab and Pillow are required to export PDFs. "
            "Please install them (`pip install reportlab Pillow`)."
        ) from e

    logger.debug("Loaded PDF export backend (reportlab, Pillow)")
    return PdfBackend(
        canvas_cls=canvas.Canvas,
        image_reader_cls=ImageReader,
        landscape=landscape,
        portrait=portrait,
        image_module=Image,
    )

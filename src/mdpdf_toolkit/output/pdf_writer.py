"""
Module: output.pdf_writer

Purpose:
    Assemble page captures into a PDF with ReportLab. Every capture is
    drawn full-bleed over the whole page box; the page margin is already
    part of the captured image.

Key Classes:
    - PdfAssembler: Stateful, order-dependent page appender

Dependencies:
    - reportlab: PDF generation (via output.backend)
    - PIL: Decoding captures and flattening transparency

Used By:
    - output.exporter: export_to_pdf()
"""

from __future__ import annotations

import io
import logging
from typing import Any, Optional, Tuple

from mdpdf_toolkit.common.units import mm_to_pt
from mdpdf_toolkit.core.models import PageSize

from .backend import PdfBackend, load_pdf_backend

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "white"


class PdfAssembler:
    """
    Build a PDF one page image at a time.

    Pages are appended in call order. A new PDF page is started before
    every image except the first, so the PDF has exactly one page per
    add_page_image() call.

    Example:
        >>> pdf = PdfAssembler(PageSize(210, 297, 20))
        >>> pdf.add_page_image(png_bytes)
        >>> blob = pdf.to_bytes()
    """

    def __init__(
        self,
        page_size: PageSize,
        *,
        backend: Optional[PdfBackend] = None,
        title: Optional[str] = None,
    ) -> None:
        self.page_size = page_size
        self._backend = backend or load_pdf_backend()

        dims = (mm_to_pt(page_size.width), mm_to_pt(page_size.height))
        if page_size.orientation == "landscape":
            self.page_size_pt = self._backend.landscape(dims)
        else:
            self.page_size_pt = self._backend.portrait(dims)

        self._buffer = io.BytesIO()
        self._canvas = self._backend.canvas_cls(self._buffer, pagesize=self.page_size_pt)
        if title:
            self._canvas.setTitle(title)
        self._canvas.setCreator(_creator())
        self._page_count = 0
        self._finished = False

    @property
    def page_count(self) -> int:
        """Number of images added so far."""
        return self._page_count

    def add_page_image(self, image_data: bytes) -> Tuple[int, int]:
        """
        Append one page from an encoded image (PNG).

        Returns:
            Pixel size of the decoded image

        Raises:
            RuntimeError: If the PDF was already serialized
            OSError: If the image cannot be decoded
        """
        if self._finished:
            raise RuntimeError("PDF already finished")

        image = self._open_flattened(image_data)
        if self._page_count > 0:
            self._canvas.showPage()

        width_pt, height_pt = self.page_size_pt
        self._canvas.drawImage(
            self._pil_to_reader(image),
            0,
            0,
            width=width_pt,
            height=height_pt,
        )
        self._page_count += 1
        logger.debug(
            f"Added page {self._page_count} ({image.width}x{image.height}px)"
        )
        return image.size

    def to_bytes(self) -> bytes:
        """
        Finish the document and return it.

        Raises:
            RuntimeError: If no page was added
        """
        if self._page_count == 0:
            raise RuntimeError("Cannot write a PDF without pages")
        if not self._finished:
            self._canvas.showPage()
            self._canvas.save()
            self._finished = True
        return self._buffer.getvalue()

    def _open_flattened(self, image_data: bytes) -> Any:
        """Decode a capture and composite any transparency onto white."""
        Image = self._backend.image_module
        with Image.open(io.BytesIO(image_data)) as img:
            img.load()
            if img.mode in ("RGBA", "LA") or "transparency" in img.info:
                rgba = img.convert("RGBA")
                flat = Image.new("RGB", rgba.size, BACKGROUND_COLOR)
                flat.paste(rgba, mask=rgba.getchannel("A"))
                return flat
            return img.convert("RGB")

    def _pil_to_reader(self, img: Any) -> Any:
        """Convert PIL image to ReportLab ImageReader."""
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return self._backend.image_reader_cls(buf)


def _creator() -> str:
    from mdpdf_toolkit import __version__

    return f"mdpdf_toolkit v{__version__}"

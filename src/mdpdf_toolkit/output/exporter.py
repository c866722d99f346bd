"""
Module: output.exporter

Purpose:
    Export the pages of a rendered surface to a raster PDF.
    Surface → capture each page (in order) → PDF → optional callback

Key Functions:
    - export_to_pdf(): Export pipeline, raises ExportError on failure

Key Classes:
    - ExportResult: PDF bytes and filename
    - PdfExporter: Stateful front end with a busy guard and error state

Dependencies:
    - output.pdf_writer: PDF assembly
    - output.surface: RenderSurface protocol

Used By:
    - controller: DocumentSession.export(), export_markdown()
    - cli: export command
"""

from __future__ import annotations

import inspect
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Union

from mdpdf_toolkit.common.units import mm_to_px
from mdpdf_toolkit.config import DEFAULT_FILENAME, ExportOptions
from mdpdf_toolkit.core.models import PageSize

from .backend import load_pdf_backend
from .errors import (
    CallbackError,
    CaptureError,
    EmptyDocumentError,
    ExportError,
    PageCountMismatchError,
    SurfaceUnavailableError,
)
from .pdf_writer import PdfAssembler
from .surface import RenderSurface

logger = logging.getLogger(__name__)

# Captures smaller or larger than expected by more than this are logged
CAPTURE_SIZE_TOLERANCE_PX = 2

OnExportCallback = Callable[[bytes, str], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class ExportResult:
    """
    Finished export (immutable).

    Attributes:
        blob: PDF bytes
        filename: Suggested filename with .pdf extension
        page_count: Number of PDF pages
    """
    blob: bytes
    filename: str
    page_count: int


def build_filename(filename: Optional[str]) -> str:
    """Append the .pdf extension, defaulting the stem to "document"."""
    return f"{filename or DEFAULT_FILENAME}.pdf"


async def export_to_pdf(
    surface: RenderSurface,
    page_size: PageSize,
    filename: Optional[str] = None,
    on_export: Optional[OnExportCallback] = None,
    *,
    expected_pages: Optional[int] = None,
) -> ExportResult:
    """
    Capture every page of the surface and assemble a PDF.

    Pages are captured strictly one after another, in index order; the
    PDF writer appends pages statefully, so captures must not overlap.
    Any failure aborts the export and no partial PDF is returned.

    Args:
        surface: Rendering surface holding the assembled document
        page_size: Page geometry used to lay the document out
        filename: Output name without extension (default "document")
        on_export: Optional callback receiving (blob, filename); may be
            a coroutine function
        expected_pages: Page count of the parsed document, checked
            against the surface when given

    Returns:
        ExportResult with the PDF bytes

    Raises:
        SurfaceUnavailableError: Surface not loaded or closed
        EmptyDocumentError: No page elements found
        PageCountMismatchError: Surface does not match expected_pages
        CaptureError: A page failed to rasterize
        CallbackError: on_export raised
        ExportBackendError: reportlab/Pillow missing
        ExportError: Capture mode or PDF serialization failed
    """
    if not surface.is_available:
        raise SurfaceUnavailableError("Cannot access rendering surface content")

    try:
        page_count = await surface.count_pages()
    except ExportError:
        raise
    except Exception as e:
        raise SurfaceUnavailableError(f"Cannot access rendering surface content: {e}") from e
    if page_count == 0:
        raise EmptyDocumentError("No pages found in document")
    if expected_pages is not None and page_count != expected_pages:
        raise PageCountMismatchError(page_count, expected_pages)

    output_name = build_filename(filename)
    start_time = time.perf_counter()
    logger.info(
        f"Exporting {page_count} page(s) at {page_size.width}x{page_size.height}mm "
        f"({page_size.orientation}) to {output_name}"
    )

    pdf = PdfAssembler(page_size, backend=load_pdf_backend(), title=output_name)
    try:
        async with surface.capture_mode():
            for index in range(page_count):
                try:
                    image_data = await surface.capture_page(index)
                    pixel_size = pdf.add_page_image(image_data)
                except Exception as e:
                    raise CaptureError(index, e) from e
                _check_capture_size(pixel_size, page_size, surface.capture_scale, index)
        blob = pdf.to_bytes()
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f"Failed to export PDF: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Built {output_name}: {pdf.page_count} page(s), {len(blob)} bytes in {elapsed:.2f}s")

    if on_export is not None:
        try:
            outcome = on_export(blob, output_name)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            raise CallbackError(
                f"Export callback failed for {output_name}: {e}",
                blob=blob,
                filename=output_name,
            ) from e

    return ExportResult(blob=blob, filename=output_name, page_count=pdf.page_count)


def _check_capture_size(
    pixel_size: Tuple[int, int],
    page_size: PageSize,
    scale: float,
    index: int,
) -> None:
    """Log captures whose pixel size does not match the page geometry."""
    width, height = pixel_size
    expected_w = round(mm_to_px(page_size.width) * scale)
    expected_h = round(mm_to_px(page_size.height) * scale)
    if (
        abs(width - expected_w) > CAPTURE_SIZE_TOLERANCE_PX
        or abs(height - expected_h) > CAPTURE_SIZE_TOLERANCE_PX
    ):
        logger.warning(
            f"Page {index + 1} captured at {width}x{height}px, "
            f"expected {expected_w}x{expected_h}px; image is stretched to the page box"
        )


class PdfExporter:
    """
    Export front end holding transient export state.

    Failures never escape ``export()``: they end up in ``error`` with
    ``is_exporting`` back to False, and the caller may simply retry.
    A call made while an export is running is rejected straight away,
    never queued.

    Example:
        >>> exporter = PdfExporter(surface, ExportOptions(page_size=size))
        >>> blob = await exporter.export()
        >>> if blob is None:
        ...     print(exporter.error)
    """

    def __init__(
        self,
        surface: RenderSurface,
        options: ExportOptions,
        on_export: Optional[OnExportCallback] = None,
    ) -> None:
        self.surface = surface
        self.options = options
        self.on_export = on_export
        self._is_exporting = False
        self._error: Optional[str] = None
        self.last_result: Optional[ExportResult] = None

    @property
    def is_exporting(self) -> bool:
        """Whether an export is in progress."""
        return self._is_exporting

    @property
    def error(self) -> Optional[str]:
        """Message from the last failed export, None after a success."""
        return self._error

    async def export(self, *, expected_pages: Optional[int] = None) -> Optional[bytes]:
        """
        Run one export.

        Returns:
            PDF bytes, or None if the export failed or was rejected
        """
        if self._is_exporting:
            logger.warning("Export already in progress; request rejected")
            return None

        options = self.options
        self._is_exporting = True
        self._error = None
        try:
            result = await export_to_pdf(
                self.surface,
                options.page_size,
                options.filename,
                self.on_export,
                expected_pages=expected_pages,
            )
        except ExportError as e:
            self._error = str(e) or "Failed to export PDF"
            logger.error(f"PDF export failed: {self._error}")
            return None
        except Exception as e:
            self._error = str(e) or "Failed to export PDF"
            logger.exception(f"PDF export failed unexpectedly: {self._error}")
            return None
        finally:
            self._is_exporting = False

        self.last_result = result
        return result.blob

"""
Module: output.errors

Purpose:
    Exception hierarchy for the export pipeline. Every expected failure
    derives from ExportError so PdfExporter can turn it into error state.

Key Classes:
    - ExportError: Base class
    - SurfaceUnavailableError: Rendering surface not reachable
    - EmptyDocumentError: No page elements in the rendered document
    - CaptureError: A page failed to rasterize
    - CallbackError: The completion callback raised
    - ExportBackendError: PDF libraries could not be loaded
"""

from __future__ import annotations

from typing import Optional


class ExportError(Exception):
    """Error during PDF export."""
    pass


class SurfaceUnavailableError(ExportError):
    """Rendering surface is not started, not loaded, or already closed."""
    pass


class EmptyDocumentError(ExportError):
    """Rendered document contains no page elements."""
    pass


class CaptureError(ExportError):
    """A single page could not be rasterized; the export is abandoned."""

    def __init__(self, page_index: int, cause: BaseException) -> None:
        super().__init__(f"Failed to capture page {page_index + 1}: {cause}")
        self.page_index = page_index


class CallbackError(ExportError):
    """
    The completion callback raised after the PDF was built.

    The finished PDF is kept on the exception for callers that need to
    tell "built but not delivered" apart from "not built".
    """

    def __init__(self, message: str, *, blob: bytes, filename: str) -> None:
        super().__init__(message)
        self.blob = blob
        self.filename = filename


class ExportBackendError(ExportError):
    """PDF assembly libraries are not installed."""
    pass


class PageCountMismatchError(ExportError):
    """Rendered page count differs from the parsed document."""

    def __init__(self, rendered: int, expected: Optional[int]) -> None:
        super().__init__(
            f"Rendered surface has {rendered} page(s) but the document has {expected}"
        )
        self.rendered = rendered
        self.expected = expected

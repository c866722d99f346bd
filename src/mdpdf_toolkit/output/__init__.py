"""
Module: output

Purpose:
    Rendering surface and raster PDF export.
    Converts the pages of a rendered document into a PDF using
    Playwright captures and ReportLab.

Key Functions:
    - export_to_pdf(): Export pipeline

Key Classes:
    - BrowserSurface: Headless Chromium rendering surface
    - PdfExporter: Export front end with busy guard and error state
    - PdfAssembler: Page-by-page PDF writer

Dependencies:
    - playwright: Rendering surface
    - reportlab: PDF generation
    - PIL: Image handling
"""

from .errors import (
    ExportError,
    SurfaceUnavailableError,
    EmptyDocumentError,
    CaptureError,
    CallbackError,
    ExportBackendError,
    PageCountMismatchError,
)
from .backend import load_pdf_backend
from .pdf_writer import PdfAssembler
from .surface import RenderSurface, BrowserSurface
from .exporter import export_to_pdf, build_filename, ExportResult, PdfExporter, OnExportCallback

__all__ = [
    # Errors
    "ExportError",
    "SurfaceUnavailableError",
    "EmptyDocumentError",
    "CaptureError",
    "CallbackError",
    "ExportBackendError",
    "PageCountMismatchError",
    # Backend
    "load_pdf_backend",
    "PdfAssembler",
    # Surface
    "RenderSurface",
    "BrowserSurface",
    # Export
    "export_to_pdf",
    "build_filename",
    "ExportResult",
    "PdfExporter",
    "OnExportCallback",
]

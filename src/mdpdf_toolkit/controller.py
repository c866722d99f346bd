"""
Module: controller

Purpose:
    Orchestrate the engine end to end.
    Text → Split → Render → Assemble → Surface → Export

Key Functions:
    - render_document(): Build a RenderedDocument from text
    - export_markdown(): One-shot export in a fresh rendering surface
    - print_markdown(): One-shot native print in a fresh surface

Key Classes:
    - RenderedDocument: Pages, stylesheet and HTML for one snapshot
    - DocumentSession: Editable text and page size with a cached render

Used By:
    - cli: pages / preview / export / print commands
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from mdpdf_toolkit.config import SurfaceConfig
from mdpdf_toolkit.core.models import DEFAULT_PAGE_SIZE, PageSize, ParsedPage
from mdpdf_toolkit.layout import generate_document, generate_print_styles
from mdpdf_toolkit.pagination import parse_markdown_to_pages

from .output import (
    BrowserSurface,
    ExportResult,
    OnExportCallback,
    export_to_pdf,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedDocument:
    """
    Rendered snapshot of the source text (immutable).

    Attributes:
        pages: Parsed pages in index order
        page_size: Geometry the document was laid out with
        stylesheet: Generated CSS
        html: Complete document for the rendering surface
    """
    pages: Tuple[ParsedPage, ...]
    page_size: PageSize
    stylesheet: str
    html: str

    @property
    def page_count(self) -> int:
        """Number of pages in the document."""
        return len(self.pages)


def render_document(text: str, page_size: PageSize) -> RenderedDocument:
    """
    Parse text and assemble the document for a page size.

    Args:
        text: Source text with page delimiters
        page_size: Page geometry

    Returns:
        RenderedDocument snapshot
    """
    pages = tuple(parse_markdown_to_pages(text))
    document = RenderedDocument(
        pages=pages,
        page_size=page_size,
        stylesheet=generate_print_styles(page_size),
        html=generate_document(pages, page_size),
    )
    logger.info(
        f"Rendered {document.page_count} page(s) at "
        f"{page_size.width}x{page_size.height}mm"
    )
    return document


class DocumentSession:
    """
    Source text and page size with a cached rendered document.

    The document is rebuilt lazily the first time it is read after the
    text or page size changes; pages are always fully regenerated.

    Known limitation: changing text or page size while an export from
    this session is running does not affect that export, because the
    export works from the snapshot it loaded into the surface.
    """

    def __init__(self, text: str = "", page_size: PageSize = DEFAULT_PAGE_SIZE) -> None:
        self._text = text
        self._page_size = page_size
        self._cached: Optional[RenderedDocument] = None
        self._cache_key: Optional[Tuple[str, PageSize]] = None

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value

    @property
    def page_size(self) -> PageSize:
        return self._page_size

    @page_size.setter
    def page_size(self, value: PageSize) -> None:
        if not isinstance(value, PageSize):
            raise TypeError(f"page_size must be a PageSize: {value!r}")
        self._page_size = value

    @property
    def document(self) -> RenderedDocument:
        """Rendered document for the current text and page size."""
        key = (self._text, self._page_size)
        if self._cached is None or self._cache_key != key:
            self._cached = render_document(self._text, self._page_size)
            self._cache_key = key
        return self._cached

    async def show(self, surface: BrowserSurface) -> RenderedDocument:
        """Load the current document into a rendering surface."""
        document = self.document
        await surface.load(document.html)
        return document

    async def export(
        self,
        surface: BrowserSurface,
        filename: Optional[str] = None,
        on_export: Optional[OnExportCallback] = None,
    ) -> ExportResult:
        """
        Load the current snapshot into the surface and export it.

        Page count and page size come from the same snapshot that was
        loaded, so the PDF always matches what the surface rendered.
        """
        document = await self.show(surface)
        return await export_to_pdf(
            surface,
            document.page_size,
            filename,
            on_export,
            expected_pages=document.page_count,
        )


async def export_markdown(
    text: str,
    page_size: PageSize,
    filename: Optional[str] = None,
    on_export: Optional[OnExportCallback] = None,
    *,
    surface_config: Optional[SurfaceConfig] = None,
) -> ExportResult:
    """
    Export text to a raster PDF using a fresh rendering surface.

    Raises:
        ExportError: If any export step fails
    """
    session = DocumentSession(text, page_size)
    async with BrowserSurface(surface_config) as surface:
        return await session.export(surface, filename, on_export)


async def print_markdown(
    text: str,
    page_size: PageSize,
    *,
    surface_config: Optional[SurfaceConfig] = None,
) -> bytes:
    """Print text with the browser's native print engine and return the PDF."""
    session = DocumentSession(text, page_size)
    async with BrowserSurface(surface_config) as surface:
        await session.show(surface)
        return await surface.print_to_pdf()

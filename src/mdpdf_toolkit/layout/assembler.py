"""
Module: layout.assembler

Purpose:
    Combine rendered pages, the stylesheet and the preview scale script
    into one self-contained HTML document. The document is loaded into
    an isolated rendering surface so host styles never reach it and
    print/export behave the same wherever it is shown.

Key Functions:
    - generate_paginated_html(): Page markup only
    - generate_document(): Complete HTML document
    - assemble(): Source text to complete document

Used By:
    - controller: RenderedDocument
    - cli: preview command
"""

from __future__ import annotations

import html
import logging
from typing import Sequence

from mdpdf_toolkit.core.models import PageSize, ParsedPage
from mdpdf_toolkit.pagination import parse_markdown_to_pages

from .scale import generate_scale_script
from .stylesheet import generate_print_styles

logger = logging.getLogger(__name__)

PAGE_SELECTOR = ".page"
DOCUMENT_TITLE = "Markdown Preview"


def generate_paginated_html(pages: Sequence[ParsedPage]) -> str:
    """
    Wrap each page in its page element, in index order.

    The last page gets the ``last-page`` class so no page break follows
    it in print output.
    """
    ordered = sorted(pages, key=lambda page: page.index)
    blocks = []
    for position, page in enumerate(ordered):
        is_last = position == len(ordered) - 1
        page_class = "page last-page" if is_last else "page"
        blocks.append(
            f'<div class="page-wrapper">'
            f'<section class="{page_class}" data-page="{page.number}">{page.html}</section>'
            f"</div>"
        )
    return "\n".join(blocks)


def generate_document(
    pages: Sequence[ParsedPage],
    page_size: PageSize,
    *,
    title: str = DOCUMENT_TITLE,
) -> str:
    """
    Build the complete document for the rendering surface.

    Args:
        pages: Rendered pages
        page_size: Page geometry shared by preview and export
        title: Document title

    Returns:
        HTML5 document text
    """
    styles = generate_print_styles(page_size)
    content = generate_paginated_html(pages)
    script = generate_scale_script(page_size)
    logger.debug(
        f"Assembled {len(pages)} page(s) at "
        f"{page_size.width}x{page_size.height}mm (margin {page_size.margin}mm)"
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
  <style>
{styles}
  </style>
</head>
<body>
{content}
{script}
</body>
</html>
"""


def assemble(text: str, page_size: PageSize) -> str:
    """Split, render and assemble source text in one call."""
    return generate_document(parse_markdown_to_pages(text), page_size)

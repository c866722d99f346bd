"""
Module: pagination.renderer

Purpose:
    Render page text to HTML with markdown-it-py. Each page is rendered
    on its own: a list, fence or blockquote left open on one page does
    not carry over to the next.

Key Functions:
    - markdown_to_html(): Render a single page
    - parse_markdown_to_pages(): Split source text and render every page

Dependencies:
    - markdown-it-py: CommonMark parser
    - linkify-it-py: Bare URL detection (required by the linkify option)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from markdown_it import MarkdownIt

from mdpdf_toolkit.core.models import ParsedPage

from .splitter import split_by_page_delimiters

logger = logging.getLogger(__name__)

MARKDOWN_OPTIONS = {
    "html": True,
    "linkify": True,
    "typographer": True,
    "breaks": False,
}


@lru_cache(maxsize=1)
def _get_parser() -> MarkdownIt:
    """Shared parser; js-default keeps tables and strikethrough enabled."""
    return MarkdownIt("js-default", MARKDOWN_OPTIONS)


def markdown_to_html(markdown: str) -> str:
    """
    Convert one page of Markdown to HTML.

    Raw HTML is passed through, bare URLs become links, and quotes and
    dashes get typographic replacements. A single newline does not
    produce a ``<br>``.
    """
    return _get_parser().render(markdown)


def parse_markdown_to_pages(text: str) -> List[ParsedPage]:
    """
    Split text on page delimiters and render each page.

    Args:
        text: Full source text

    Returns:
        Pages in document order, indexed from zero

    Example:
        >>> pages = parse_markdown_to_pages("# One\\f# Two")
        >>> [p.index for p in pages]
        [0, 1]
    """
    pages = [
        ParsedPage(index=index, markdown=content, html=markdown_to_html(content))
        for index, content in enumerate(split_by_page_delimiters(text))
    ]
    logger.debug(f"Parsed {len(pages)} page(s) from {len(text)} characters")
    return pages

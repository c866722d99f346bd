"""
Module: pagination

Purpose:
    Turn source text into pages: split on page delimiters, then render
    each page to HTML on its own.

Key Functions:
    - split_by_page_delimiters(): Raw text to page strings
    - markdown_to_html(): Render one page of Markdown
    - parse_markdown_to_pages(): Split and render in one step

Dependencies:
    - markdown-it-py (+ linkify-it-py): Markdown rendering

Used By:
    - layout.assembler: Document assembly
    - controller: Rendered document cache
"""

from .splitter import split_by_page_delimiters, PAGE_DELIMITER, FORM_FEED
from .renderer import markdown_to_html, parse_markdown_to_pages

__all__ = [
    "split_by_page_delimiters",
    "PAGE_DELIMITER",
    "FORM_FEED",
    "markdown_to_html",
    "parse_markdown_to_pages",
]

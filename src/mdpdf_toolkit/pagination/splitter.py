"""
Module: pagination.splitter

Purpose:
    Split source text into page strings. Two delimiters are recognised
    and may be mixed freely in one document:

    - a line consisting of exactly ``---page---``
    - the form feed character, anywhere in the text

    Delimiters are matched on the raw text before any Markdown
    rendering, so a delimiter inside a code fence still breaks the page.

Key Functions:
    - split_by_page_delimiters(): Main entry point

Used By:
    - pagination.renderer: parse_markdown_to_pages()
"""

from __future__ import annotations

import re
from typing import List

PAGE_DELIMITER = "---page---"
FORM_FEED = "\f"

_PAGE_DELIMITER_RE = re.compile(rf"^{re.escape(PAGE_DELIMITER)}$|{FORM_FEED}", re.MULTILINE)


def split_by_page_delimiters(text: str) -> List[str]:
    """
    Split text into page contents.

    Line endings are normalised to LF first. The first segment is always
    kept, even when empty, so every document has at least one page. Later
    segments are dropped when they hold only whitespace, so a trailing
    delimiter does not produce a blank page.

    Args:
        text: Full source text

    Returns:
        Non-empty list of page strings, delimiters removed

    Example:
        >>> split_by_page_delimiters("A\\n---page---\\nB")
        ['A\\n', '\\nB']
        >>> split_by_page_delimiters("A\\n---page---\\n")
        ['A\\n']
    """
    normalized = text.replace("\r\n", "\n")
    segments = _PAGE_DELIMITER_RE.split(normalized)

    pages = [
        segment
        for index, segment in enumerate(segments)
        if index == 0 or segment.strip()
    ]
    return pages or [""]

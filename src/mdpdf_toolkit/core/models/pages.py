"""
Module: pages

Purpose:
    ParsedPage - one page of source text with its rendered HTML.
    Pages are regenerated on every parse; ``index`` is the position in
    the current document, not a stable identity across edits.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParsedPage:
    """
    A single rendered page (immutable).

    Attributes:
        index: Zero-based position in the document
        markdown: Raw page text as split from the source
        html: Rendered markup for this page only
    """

    index: int
    markdown: str
    html: str

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"index must be non-negative: {self.index}")

    @property
    def number(self) -> int:
        """1-based page number shown in the preview label."""
        return self.index + 1

"""Shared helpers used across pagination, layout and output."""

from .units import MM_TO_PX, MM_TO_PT, mm_to_px, mm_to_pt, format_mm, format_number

__all__ = [
    "MM_TO_PX",
    "MM_TO_PT",
    "mm_to_px",
    "mm_to_pt",
    "format_mm",
    "format_number",
]

"""
Module: common.units

Purpose:
    Physical unit conversions shared by layout and export.
    CSS reference pixels are 1/96 inch, PDF points are 1/72 inch.

Key Functions:
    - mm_to_px(): Millimeters to CSS reference pixels
    - mm_to_pt(): Millimeters to PDF points
    - format_mm(): Render a millimeter value as a CSS length

Used By:
    - layout.stylesheet: CSS lengths
    - layout.scale: Preview scale computation
    - output.pdf_writer: PDF page size
"""

from __future__ import annotations

MM_PER_INCH = 25.4
CSS_PX_PER_INCH = 96
PDF_PT_PER_INCH = 72

# 96 / 25.4, written out to match the value embedded in the preview script
MM_TO_PX = 3.7795275591
MM_TO_PT = PDF_PT_PER_INCH / MM_PER_INCH


def mm_to_px(mm: float) -> float:
    """Convert millimeters to CSS reference pixels (96 dpi)."""
    return mm * MM_TO_PX


def mm_to_pt(mm: float) -> float:
    """Convert millimeters to PDF points (1/72 inch)."""
    return mm * MM_TO_PT


def format_mm(value: float) -> str:
    """
    Format a millimeter value as a CSS length.

    Integral values drop the decimal part so ``210.0`` becomes ``210mm``.

    Example:
        >>> format_mm(12.5)
        '12.5mm'
    """
    return f"{format_number(value)}mm"


def format_number(value: float) -> str:
    """Format a number without trailing zeros."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")

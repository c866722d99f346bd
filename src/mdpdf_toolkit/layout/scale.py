"""
Module: layout.scale

Purpose:
    Fit-to-width preview scaling. The rendering surface runs a small
    script that recomputes the scale on load and on every resize and
    writes it to the ``--preview-scale`` custom property read by the
    stylesheet's transform.

    compute_preview_scale() is the same formula in Python, used to
    check the live surface and by callers that size their own viewport.

Key Functions:
    - compute_preview_scale(): Scale for a viewport width
    - generate_scale_script(): Script embedded in the assembled document
"""

from __future__ import annotations

from mdpdf_toolkit.common.units import MM_TO_PX, format_number
from mdpdf_toolkit.core.models import PageSize

# Horizontal space kept free around the pages (body padding on both sides)
PREVIEW_PADDING_PX = 40

SCALE_PROPERTY = "--preview-scale"


def compute_preview_scale(viewport_width_px: float, page_width_mm: float) -> float:
    """
    Scale that fits a page's width into the viewport.

    Never above 1: a page is never shown larger than its physical size.
    Height is not considered; tall pages scroll.

    Args:
        viewport_width_px: Inner width of the surface in CSS pixels
        page_width_mm: Page width in millimeters

    Returns:
        Scale factor in [0, 1]

    Example:
        >>> compute_preview_scale(2000, 210)
        1.0
    """
    available = viewport_width_px - PREVIEW_PADDING_PX
    page_width_px = page_width_mm * MM_TO_PX
    return max(0.0, min(available / page_width_px, 1.0))


def generate_scale_script(page_size: PageSize) -> str:
    """Build the inline script that keeps ``--preview-scale`` current."""
    return f"""<script>
  (function() {{
    var PAGE_WIDTH_MM = {format_number(page_size.width)};
    var MM_TO_PX = {MM_TO_PX};
    var PADDING_PX = {PREVIEW_PADDING_PX};

    function updateScale() {{
      var available = window.innerWidth - PADDING_PX;
      var pageWidthPx = PAGE_WIDTH_MM * MM_TO_PX;
      var scale = Math.max(0, Math.min(available / pageWidthPx, 1));
      document.documentElement.style.setProperty('{SCALE_PROPERTY}', String(scale));
    }}

    updateScale();
    window.addEventListener('resize', updateScale);
  }})();
</script>"""

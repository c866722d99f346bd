"""
Module: layout

Purpose:
    Page geometry and document assembly for the rendering surface.

Key Functions:
    - generate_print_styles(): Stylesheet for a PageSize
    - generate_document(): Complete HTML document for pages
    - compute_preview_scale(): Fit-to-width scale

Used By:
    - controller: Rendered document cache
    - output.surface: Page selector and scale property
"""

from .stylesheet import generate_print_styles, DEFAULT_PREVIEW_SCALE
from .scale import compute_preview_scale, generate_scale_script, PREVIEW_PADDING_PX, SCALE_PROPERTY
from .assembler import (
    generate_paginated_html,
    generate_document,
    assemble,
    PAGE_SELECTOR,
)

__all__ = [
    "generate_print_styles",
    "DEFAULT_PREVIEW_SCALE",
    "compute_preview_scale",
    "generate_scale_script",
    "PREVIEW_PADDING_PX",
    "SCALE_PROPERTY",
    "generate_paginated_html",
    "generate_document",
    "assemble",
    "PAGE_SELECTOR",
]

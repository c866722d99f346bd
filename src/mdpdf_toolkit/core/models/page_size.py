"""
Module: page_size

Purpose:
    Provides the PageSize dataclass - the single description of page
    geometry used by the stylesheet, the preview scale and the PDF
    writer. Keeping one value for all three is what makes the exported
    PDF match the preview.

Key Functions:
    - PageSize.from_user_input(): Build a PageSize from free-form entry
    - get_preset(): Look up a named preset
    - preset_name_for(): Find the preset matching a PageSize

Dependencies:
    - dataclasses (std)

Used By:
    - layout.stylesheet, layout.scale, layout.assembler
    - output.exporter, output.pdf_writer
    - cli: --preset / --width / --height / --margin
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Literal

Orientation = Literal["portrait", "landscape"]

# Bounds offered to free-form entry (millimeters)
MIN_DIMENSION_MM = 50
MAX_DIMENSION_MM = 500
MAX_MARGIN_MM = 50

CUSTOM_PRESET = "custom"


@dataclass(frozen=True, slots=True)
class PageSize:
    """
    Physical page geometry (immutable).

    All values are millimeters. The margin is applied on every side as
    padding of the page element, so the content box is
    ``width - 2*margin`` by ``height - 2*margin``.

    Attributes:
        width: Page width in mm (> 0)
        height: Page height in mm (> 0)
        margin: Margin on each side in mm (>= 0, less than half the
            smaller dimension)

    Example:
        >>> size = PageSize(width=210, height=297, margin=20)
        >>> size.content_width
        170
    """

    width: float
    height: float
    margin: float

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        for name in ("width", "height", "margin"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number: {value}")
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.margin * 2 >= min(self.width, self.height):
            raise ValueError(
                f"margin {self.margin}mm leaves no content area on a "
                f"{self.width}x{self.height}mm page"
            )

    @classmethod
    def from_user_input(cls, width: float, height: float, margin: float) -> "PageSize":
        """
        Build a PageSize from free-form entry, enforcing the entry bounds.

        Width and height must lie within 50-500mm and the margin within
        0-50mm, on top of the structural checks in ``__post_init__``.

        Raises:
            ValueError: If any field is out of bounds
        """
        for name, value in (("width", width), ("height", height)):
            if not MIN_DIMENSION_MM <= value <= MAX_DIMENSION_MM:
                raise ValueError(
                    f"{name} must be between {MIN_DIMENSION_MM} and "
                    f"{MAX_DIMENSION_MM}mm: {value}"
                )
        if not 0 <= margin <= MAX_MARGIN_MM:
            raise ValueError(f"margin must be between 0 and {MAX_MARGIN_MM}mm: {margin}")
        return cls(width=width, height=height, margin=margin)

    @property
    def content_width(self) -> float:
        """Width inside the margins."""
        return self.width - self.margin * 2

    @property
    def content_height(self) -> float:
        """Height inside the margins."""
        return self.height - self.margin * 2

    @property
    def orientation(self) -> Orientation:
        """Landscape when wider than tall, otherwise portrait."""
        return "landscape" if self.width > self.height else "portrait"


PAGE_PRESETS: Dict[str, PageSize] = {
    "A4": PageSize(width=210, height=297, margin=20),
    "A5": PageSize(width=148, height=210, margin=15),
    "Letter": PageSize(width=216, height=279, margin=20),
    "Slide (16:9)": PageSize(width=254, height=143, margin=10),
    "Slide (4:3)": PageSize(width=254, height=190, margin=10),
    "Custom Book": PageSize(width=180, height=250, margin=15),
}

DEFAULT_PAGE_SIZE = PAGE_PRESETS["Slide (16:9)"]


def get_preset(name: str) -> PageSize:
    """
    Look up a preset by name (case-insensitive).

    Raises:
        KeyError: If no preset has that name
    """
    for preset_name, size in PAGE_PRESETS.items():
        if preset_name.lower() == name.strip().lower():
            return size
    raise KeyError(f"Unknown page preset: {name!r}")


def preset_name_for(page_size: PageSize) -> str:
    """Return the name of the preset equal to page_size, or "custom"."""
    for name, size in PAGE_PRESETS.items():
        if size == page_size:
            return name
    return CUSTOM_PRESET

"""
Module: config

Purpose:
    Configuration dataclasses for export, the editing surface and the
    headless rendering surface. Immutable, validated on construction.

Key Classes:
    - ExportOptions: Page size and filename for an export
    - EditorConfig: Options handed to the text editing collaborator
    - SurfaceConfig: Headless browser settings

Dependencies:
    - dataclasses (std)

Used By:
    - output.exporter: PdfExporter
    - output.surface: BrowserSurface
    - cli: Argument mapping
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mdpdf_toolkit.core.models import DEFAULT_PAGE_SIZE, PageSize

DEFAULT_FILENAME = "document"


@dataclass(frozen=True)
class ExportOptions:
    """
    Options for one PDF export (immutable).

    Attributes:
        page_size: Page geometry, shared with the preview
        filename: Output name without extension; empty or None falls
            back to "document"

    Example:
        >>> ExportOptions(page_size=PageSize(210, 297, 20), filename="report")
    """

    page_size: PageSize = field(default_factory=lambda: DEFAULT_PAGE_SIZE)
    filename: Optional[str] = DEFAULT_FILENAME

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.page_size, PageSize):
            raise TypeError(f"page_size must be a PageSize: {self.page_size!r}")
        if self.filename and any(sep in self.filename for sep in ("/", "\\")):
            raise ValueError(f"filename must not contain path separators: {self.filename!r}")


@dataclass(frozen=True)
class EditorConfig:
    """
    Options for the text editing collaborator.

    Attributes:
        placeholder: Text shown while the editor is empty
        line_numbers: Show a line number gutter
        line_wrapping: Soft-wrap long lines
    """

    placeholder: Optional[str] = None
    line_numbers: bool = True
    line_wrapping: bool = True


@dataclass(frozen=True)
class SurfaceConfig:
    """
    Settings for the headless rendering surface.

    Attributes:
        viewport_width: Initial viewport width in CSS pixels
        viewport_height: Initial viewport height in CSS pixels
        capture_scale: Device scale factor used for page captures
        headless: Run Chromium without a window
        timeout_ms: Default timeout for browser operations
    """

    viewport_width: int = 1280
    viewport_height: int = 900
    capture_scale: float = 2.0
    headless: bool = True
    timeout_ms: float = 30_000

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise ValueError(
                f"viewport must be positive: {self.viewport_width}x{self.viewport_height}"
            )
        if self.capture_scale <= 0:
            raise ValueError(f"capture_scale must be positive: {self.capture_scale}")
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative: {self.timeout_ms}")

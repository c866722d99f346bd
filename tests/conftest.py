import asyncio
import io
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest
from PIL import Image

# Add src to sys.path so we can import mdpdf_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from mdpdf_toolkit.common.units import mm_to_px  # noqa: E402
from mdpdf_toolkit.core.models import PageSize  # noqa: E402

# Small capture scale keeps synthetic page images light
TEST_CAPTURE_SCALE = 0.25

PAGE_COLORS = [
    (255, 0, 0),
    (0, 128, 0),
    (0, 0, 255),
    (255, 255, 0),
    (0, 255, 255),
]


def make_png(size: Tuple[int, int], color=(255, 255, 255), mode: str = "RGB") -> bytes:
    """Encode a solid-color image as PNG."""
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class FakeSurface:
    """
    In-memory rendering surface.

    Pages are solid-color images sized from the page geometry. Records
    capture order and how many captures ran at the same time.
    """

    def __init__(
        self,
        page_size: PageSize,
        colors: Sequence[Tuple[int, int, int]] = (),
        *,
        capture_scale: float = TEST_CAPTURE_SCALE,
        available: bool = True,
        fail_on: Optional[int] = None,
        gate: Optional[asyncio.Event] = None,
        image_size: Optional[Tuple[int, int]] = None,
        count_error: Optional[Exception] = None,
        mode_error: Optional[Exception] = None,
    ) -> None:
        self.page_size = page_size
        self.colors = list(colors)
        self.capture_scale = capture_scale
        self.available = available
        self.fail_on = fail_on
        self.gate = gate
        self.image_size = image_size
        self.count_error = count_error
        self.mode_error = mode_error
        self.captured: List[int] = []
        self.active = 0
        self.max_active = 0
        self.in_capture_mode = False
        self.capture_mode_flags: List[bool] = []
        self.loaded_html: Optional[str] = None

    async def __aenter__(self) -> "FakeSurface":
        return self

    async def __aexit__(self, *exc) -> None:
        self.available = False

    @property
    def is_available(self) -> bool:
        return self.available

    async def load(self, document_html: str) -> None:
        self.loaded_html = document_html
        count = document_html.count('<section class="page')
        self.colors = [PAGE_COLORS[i % len(PAGE_COLORS)] for i in range(count)]
        self.available = True

    async def count_pages(self) -> int:
        if self.count_error is not None:
            raise self.count_error
        return len(self.colors)

    async def capture_page(self, index: int) -> bytes:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.gate is not None:
                await self.gate.wait()
            await asyncio.sleep(0)
            if index == self.fail_on:
                raise RuntimeError("capture exploded")
            self.captured.append(index)
            self.capture_mode_flags.append(self.in_capture_mode)
            return make_png(self.expected_size(), self.colors[index])
        finally:
            self.active -= 1

    @asynccontextmanager
    async def capture_mode(self):
        if self.mode_error is not None:
            raise self.mode_error
        self.in_capture_mode = True
        try:
            yield
        finally:
            self.in_capture_mode = False

    def expected_size(self) -> Tuple[int, int]:
        if self.image_size is not None:
            return self.image_size
        return (
            round(mm_to_px(self.page_size.width) * self.capture_scale),
            round(mm_to_px(self.page_size.height) * self.capture_scale),
        )


@pytest.fixture
def a4():
    """A4 portrait with 20mm margins."""
    return PageSize(width=210, height=297, margin=20)


@pytest.fixture
def slide():
    """16:9 slide, landscape."""
    return PageSize(width=254, height=143, margin=10)


@pytest.fixture
def fake_surface_factory():
    """Factory for FakeSurface instances."""
    def _create(page_size: PageSize, page_count: int = 3, **kwargs) -> FakeSurface:
        colors = [PAGE_COLORS[i % len(PAGE_COLORS)] for i in range(page_count)]
        return FakeSurface(page_size, colors, **kwargs)
    return _create


@pytest.fixture
def png_factory():
    """Factory for solid-color PNG bytes."""
    return make_png


@pytest.fixture
def fake_surface_cls():
    """The FakeSurface class, for patching surface constructors."""
    return FakeSurface

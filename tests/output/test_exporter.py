"""
Tests for the export pipeline and the PdfExporter front end.

Pages come from an in-memory surface so the pipeline can be checked
without a browser; the resulting PDFs are read back with pypdf.
"""

import asyncio
import io
import logging
from unittest.mock import patch

import pytest
from pypdf import PdfReader

from mdpdf_toolkit.config import ExportOptions
from mdpdf_toolkit.output import (
    CallbackError,
    CaptureError,
    EmptyDocumentError,
    ExportError,
    PageCountMismatchError,
    PdfAssembler,
    PdfExporter,
    SurfaceUnavailableError,
    build_filename,
    export_to_pdf,
)


def _page_colors(blob):
    reader = PdfReader(io.BytesIO(blob))
    colors = []
    for page in reader.pages:
        image = page.images[0].image.convert("RGB")
        colors.append(image.getpixel((image.width // 2, image.height // 2)))
    return colors


class TestBuildFilename:
    def test_default_stem(self):
        assert build_filename(None) == "document.pdf"

    def test_empty_stem_uses_default(self):
        assert build_filename("") == "document.pdf"

    def test_custom_stem(self):
        assert build_filename("notes") == "notes.pdf"


class TestExportToPdf:
    def test_one_pdf_page_per_rendered_page_in_order(self, a4, fake_surface_factory):
        # Arrange
        surface = fake_surface_factory(a4, page_count=4)

        # Act
        result = asyncio.run(export_to_pdf(surface, a4))

        # Assert
        assert result.page_count == 4
        assert _page_colors(result.blob) == surface.colors
        assert surface.captured == [0, 1, 2, 3]

    def test_single_page_document(self, slide, fake_surface_factory):
        surface = fake_surface_factory(slide, page_count=1)

        result = asyncio.run(export_to_pdf(surface, slide))

        assert len(PdfReader(io.BytesIO(result.blob)).pages) == 1

    def test_captures_never_overlap(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=5)

        asyncio.run(export_to_pdf(surface, a4))

        assert surface.max_active == 1

    def test_captures_run_in_capture_mode(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=3)

        asyncio.run(export_to_pdf(surface, a4))

        assert surface.capture_mode_flags == [True, True, True]
        assert surface.in_capture_mode is False

    def test_default_and_custom_filename(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=1)

        default = asyncio.run(export_to_pdf(surface, a4))
        custom = asyncio.run(export_to_pdf(surface, a4, "slides"))

        assert default.filename == "document.pdf"
        assert custom.filename == "slides.pdf"

    def test_when_surface_unavailable_then_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, available=False)

        with pytest.raises(SurfaceUnavailableError, match="Cannot access rendering surface content"):
            asyncio.run(export_to_pdf(surface, a4))
        assert surface.captured == []

    def test_when_no_pages_then_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=0)

        with pytest.raises(EmptyDocumentError, match="No pages found in document"):
            asyncio.run(export_to_pdf(surface, a4))

    def test_when_capture_fails_then_export_aborts(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=4, fail_on=1)
        received = []

        with pytest.raises(CaptureError) as excinfo:
            asyncio.run(export_to_pdf(surface, a4, on_export=lambda b, n: received.append(n)))

        assert excinfo.value.page_index == 1
        assert "Failed to capture page 2" in str(excinfo.value)
        assert surface.captured == [0]
        assert received == []
        assert surface.in_capture_mode is False

    def test_when_page_count_differs_then_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=2)

        with pytest.raises(PageCountMismatchError):
            asyncio.run(export_to_pdf(surface, a4, expected_pages=3))
        assert surface.captured == []

    def test_sync_callback_receives_blob_and_name(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=2)
        received = []

        result = asyncio.run(
            export_to_pdf(surface, a4, "out", lambda blob, name: received.append((blob, name)))
        )

        assert received == [(result.blob, "out.pdf")]

    def test_async_callback_is_awaited(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=1)
        received = []

        async def on_export(blob, name):
            await asyncio.sleep(0)
            received.append(name)

        asyncio.run(export_to_pdf(surface, a4, on_export=on_export))

        assert received == ["document.pdf"]

    def test_when_callback_fails_then_blob_kept_on_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=2)

        def on_export(blob, name):
            raise OSError("disk full")

        with pytest.raises(CallbackError, match="disk full") as excinfo:
            asyncio.run(export_to_pdf(surface, a4, on_export=on_export))

        assert excinfo.value.blob.startswith(b"%PDF")
        assert excinfo.value.filename == "document.pdf"
        assert isinstance(excinfo.value, ExportError)

    def test_when_count_fails_then_surface_unavailable(self, a4, fake_surface_factory):
        surface = fake_surface_factory(
            a4, count_error=RuntimeError("Target page, context or browser has been closed")
        )

        with pytest.raises(SurfaceUnavailableError, match="browser has been closed"):
            asyncio.run(export_to_pdf(surface, a4))

    def test_when_capture_mode_fails_then_export_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, mode_error=RuntimeError("emulate_media failed"))

        with pytest.raises(ExportError, match="emulate_media failed"):
            asyncio.run(export_to_pdf(surface, a4))
        assert surface.captured == []

    def test_when_serialization_fails_then_export_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=2)
        received = []

        with patch.object(PdfAssembler, "to_bytes", side_effect=RuntimeError("canvas broken")):
            with pytest.raises(ExportError, match="Failed to export PDF: canvas broken"):
                asyncio.run(export_to_pdf(surface, a4, on_export=lambda b, n: received.append(n)))
        assert received == []

    def test_when_capture_size_off_then_warning(self, a4, fake_surface_factory, caplog):
        surface = fake_surface_factory(a4, page_count=1, image_size=(10, 10))

        with caplog.at_level(logging.WARNING, logger="mdpdf_toolkit.output.exporter"):
            result = asyncio.run(export_to_pdf(surface, a4))

        assert result.page_count == 1
        assert "Page 1 captured at 10x10px" in caplog.text

    def test_when_capture_size_matches_then_no_warning(self, a4, fake_surface_factory, caplog):
        surface = fake_surface_factory(a4, page_count=2)

        with caplog.at_level(logging.WARNING, logger="mdpdf_toolkit.output.exporter"):
            asyncio.run(export_to_pdf(surface, a4))

        assert "captured at" not in caplog.text


class TestPdfExporter:
    def test_success_returns_blob_and_clears_state(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=2)
        exporter = PdfExporter(surface, ExportOptions(page_size=a4, filename="x"))

        blob = asyncio.run(exporter.export())

        assert blob.startswith(b"%PDF")
        assert exporter.error is None
        assert exporter.is_exporting is False
        assert exporter.last_result.filename == "x.pdf"

    def test_failure_sets_error_and_allows_retry(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=3, fail_on=2)
        exporter = PdfExporter(surface, ExportOptions(page_size=a4))

        assert asyncio.run(exporter.export()) is None
        assert "Failed to capture page 3" in exporter.error
        assert exporter.is_exporting is False

        surface.fail_on = None
        assert asyncio.run(exporter.export()) is not None
        assert exporter.error is None

    def test_unavailable_surface_reported_as_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, available=False)
        exporter = PdfExporter(surface, ExportOptions(page_size=a4))

        assert asyncio.run(exporter.export()) is None
        assert exporter.error == "Cannot access rendering surface content"

    def test_callback_failure_reported_as_error(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=1)

        def on_export(blob, name):
            raise ValueError("nope")

        exporter = PdfExporter(surface, ExportOptions(page_size=a4), on_export)

        assert asyncio.run(exporter.export()) is None
        assert "nope" in exporter.error
        assert exporter.is_exporting is False

    def test_concurrent_export_is_rejected(self, a4, fake_surface_factory):
        async def scenario():
            gate = asyncio.Event()
            surface = fake_surface_factory(a4, page_count=2, gate=gate)
            exporter = PdfExporter(surface, ExportOptions(page_size=a4))

            first = asyncio.create_task(exporter.export())
            while not exporter.is_exporting:
                await asyncio.sleep(0)

            second = await exporter.export()
            gate.set()
            return await first, second, surface, exporter

        first, second, surface, exporter = asyncio.run(scenario())

        assert second is None
        assert first.startswith(b"%PDF")
        assert surface.captured == [0, 1]
        assert exporter.is_exporting is False
        assert exporter.error is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"count_error": RuntimeError("Target page, context or browser has been closed")},
            {"mode_error": RuntimeError("emulate_media failed")},
        ],
    )
    def test_surface_failures_become_error_state(self, a4, fake_surface_factory, kwargs):
        surface = fake_surface_factory(a4, **kwargs)
        exporter = PdfExporter(surface, ExportOptions(page_size=a4))

        assert asyncio.run(exporter.export()) is None
        assert exporter.error
        assert exporter.is_exporting is False

    def test_serialization_failure_becomes_error_state(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=1)
        exporter = PdfExporter(surface, ExportOptions(page_size=a4))

        with patch.object(PdfAssembler, "to_bytes", side_effect=RuntimeError("canvas broken")):
            assert asyncio.run(exporter.export()) is None

        assert "canvas broken" in exporter.error
        assert exporter.is_exporting is False

    def test_unexpected_error_becomes_error_state(self, a4, fake_surface_factory):
        surface = fake_surface_factory(a4, page_count=1)
        exporter = PdfExporter(surface, ExportOptions(page_size=a4))

        with patch("mdpdf_toolkit.output.exporter.build_filename", side_effect=KeyError()):
            assert asyncio.run(exporter.export()) is None

        assert exporter.error == "Failed to export PDF"
        assert exporter.is_exporting is False

"""
Command line entry point.

Commands:
    presets   List page size presets
    pages     Show how a document splits into pages
    preview   Write the assembled preview document (HTML)
    export    Export a raster PDF through headless Chromium
    print     Print to PDF with the browser's native print engine

Page size:
    --preset NAME, optionally refined with --width/--height/--margin (mm)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mdpdf_toolkit import __version__
from mdpdf_toolkit.config import DEFAULT_FILENAME, ExportOptions, SurfaceConfig
from mdpdf_toolkit.controller import DocumentSession, print_markdown
from mdpdf_toolkit.core.models import (
    DEFAULT_PAGE_SIZE,
    PAGE_PRESETS,
    PageSize,
    get_preset,
    preset_name_for,
)
from mdpdf_toolkit.output import BrowserSurface, PdfExporter
from mdpdf_toolkit.samples import SAMPLE_MARKDOWN

logger = logging.getLogger("mdpdf")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdpdf",
        description="Paginate Markdown with ---page--- / form feed delimiters and export to PDF.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("presets", help="List page size presets")

    for name, help_text in (
        ("pages", "Show how the document splits into pages"),
        ("preview", "Write the assembled preview document (HTML)"),
        ("export", "Export a raster PDF (one capture per page)"),
        ("print", "Print to PDF with the browser's print engine"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("input", nargs="?", help="Markdown file ('-' for stdin)")
        cmd.add_argument("--sample", action="store_true", help="Use the built-in sample document")
        _add_page_size_args(cmd)
        if name != "pages":
            cmd.add_argument("--output", "-o", type=Path, help="Output file path")
        if name in ("export", "print"):
            cmd.add_argument("--headed", action="store_true", help="Show the browser window")
            cmd.add_argument("--timeout", type=float, default=30.0, help="Browser timeout in seconds (default: 30)")
    return parser


def _add_page_size_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument(
        "--preset",
        default=None,
        help=f"Page size preset (default: {preset_name_for(DEFAULT_PAGE_SIZE)})",
    )
    cmd.add_argument("--width", type=float, help="Page width in mm (50-500)")
    cmd.add_argument("--height", type=float, help="Page height in mm (50-500)")
    cmd.add_argument("--margin", type=float, help="Page margin in mm (0-50)")


def resolve_page_size(args: argparse.Namespace) -> PageSize:
    """
    Page size from --preset and individual overrides.

    Raises:
        ValueError: If a value is out of bounds
        KeyError: If the preset is unknown
    """
    base = get_preset(args.preset) if args.preset else DEFAULT_PAGE_SIZE
    overrides = {
        field: value
        for field in ("width", "height", "margin")
        if (value := getattr(args, field)) is not None
    }
    if not overrides:
        return base
    values = {"width": base.width, "height": base.height, "margin": base.margin, **overrides}
    return PageSize.from_user_input(**values)


def read_source(args: argparse.Namespace) -> str:
    if args.sample:
        return SAMPLE_MARKDOWN
    if not args.input:
        raise ValueError("Provide an input file or --sample")
    if args.input == "-":
        return sys.stdin.read()
    return Path(args.input).read_text(encoding="utf-8")


def _default_output(args: argparse.Namespace, suffix: str) -> Path:
    if args.output is not None:
        return args.output
    stem = Path(args.input).stem if args.input and args.input != "-" else DEFAULT_FILENAME
    return Path.cwd() / f"{stem}{suffix}"


def _surface_config(args: argparse.Namespace) -> SurfaceConfig:
    return SurfaceConfig(headless=not args.headed, timeout_ms=args.timeout * 1000)


def _cmd_presets() -> int:
    for name, size in PAGE_PRESETS.items():
        print(f"{name:<14} {size.width:g} x {size.height:g} mm, margin {size.margin:g} mm")
    return 0


def _cmd_pages(session: DocumentSession) -> int:
    document = session.document
    size = document.page_size
    print(
        f"{document.page_count} page(s) at {size.width:g} x {size.height:g} mm "
        f"({preset_name_for(size)}, {size.orientation})"
    )
    for page in document.pages:
        first_line = next((line.strip() for line in page.markdown.splitlines() if line.strip()), "")
        print(f"  Page {page.number}: {len(page.markdown)} chars  {first_line[:60]}")
    return 0


def _cmd_preview(session: DocumentSession, output: Path) -> int:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(session.document.html, encoding="utf-8")
    print(f"Saved preview to: {output}")
    return 0


async def _cmd_export(session: DocumentSession, output: Path, config: SurfaceConfig) -> int:
    options = ExportOptions(page_size=session.page_size, filename=output.stem)

    def save(blob: bytes, filename: str) -> None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(blob)
        logger.info(f"Wrote {filename} to {output}")

    async with BrowserSurface(config) as surface:
        document = await session.show(surface)
        exporter = PdfExporter(surface, options, on_export=save)
        blob = await exporter.export(expected_pages=document.page_count)

    if blob is None:
        print(f"Export failed: {exporter.error}", file=sys.stderr)
        return 1
    print(f"Saved PDF to: {output} ({document.page_count} pages)")
    return 0


async def _cmd_print(session: DocumentSession, output: Path, config: SurfaceConfig) -> int:
    blob = await print_markdown(session.text, session.page_size, surface_config=config)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(blob)
    print(f"Saved printed PDF to: {output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    if args.command == "presets":
        return _cmd_presets()

    try:
        page_size = resolve_page_size(args)
        text = read_source(args)
    except (ValueError, KeyError, OSError) as e:
        print(str(e).strip("'\""), file=sys.stderr)
        return 2

    session = DocumentSession(text, page_size)
    if args.command == "pages":
        return _cmd_pages(session)
    if args.command == "preview":
        return _cmd_preview(session, _default_output(args, ".html"))

    from playwright.async_api import Error as PlaywrightError

    try:
        if args.command == "export":
            return asyncio.run(_cmd_export(session, _default_output(args, ".pdf"), _surface_config(args)))
        return asyncio.run(_cmd_print(session, _default_output(args, ".pdf"), _surface_config(args)))
    except PlaywrightError as e:
        logger.error(f"Rendering surface failed: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

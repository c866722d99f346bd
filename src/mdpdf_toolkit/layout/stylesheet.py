"""
Module: layout.stylesheet

Purpose:
    Generate the CSS that gives every page its exact physical size.
    Three rule sets are active at once:

    - base/print: page box equal to the page size, margin as padding,
      page breaks after every page but the last, @page size with zero
      page margin
    - screen: full-size page scaled down by ``--preview-scale`` inside a
      wrapper that reserves the scaled footprint, plus a page label
    - typography: fixed text styling shared by preview and print

    Physical lengths stay in millimeters; the browser's own unit
    conversion is used for both preview and print.

Key Functions:
    - generate_print_styles(): Build the full stylesheet for a PageSize

Used By:
    - layout.assembler: Embedded in the assembled document
"""

from __future__ import annotations

from mdpdf_toolkit.common.units import format_mm, format_number
from mdpdf_toolkit.core.models import PageSize

# Used until the preview script has measured the viewport
DEFAULT_PREVIEW_SCALE = 0.5

PAGE_GAP_PX = 20

TYPOGRAPHY_CSS = """\
/* Typography */
h1, h2, h3, h4, h5, h6 {
  margin-top: 0;
  margin-bottom: 0.5em;
  font-weight: 600;
  line-height: 1.3;
  page-break-after: avoid;
  break-after: avoid;
}

h1 { font-size: 2em; }
h2 { font-size: 1.5em; }
h3 { font-size: 1.25em; }
h4 { font-size: 1em; }
h5 { font-size: 0.875em; }
h6 { font-size: 0.75em; }

p {
  margin: 0 0 1em 0;
}

ul, ol {
  margin: 0 0 1em 0;
  padding-left: 2em;
}

li {
  margin-bottom: 0.25em;
}

pre {
  background: #f5f5f5;
  padding: 1em;
  border-radius: 4px;
  overflow-x: auto;
  margin: 0 0 1em 0;
}

code {
  font-family: 'SFMono-Regular', Consolas, 'Liberation Mono', Menlo, monospace;
  font-size: 0.9em;
  background: #f5f5f5;
  padding: 0.2em 0.4em;
  border-radius: 3px;
}

pre code {
  padding: 0;
  background: none;
}

blockquote {
  margin: 0 0 1em 0;
  padding: 0.5em 1em;
  border-left: 4px solid #ddd;
  color: #666;
}

table {
  width: 100%;
  border-collapse: collapse;
  margin: 0 0 1em 0;
}

th, td {
  padding: 0.5em;
  border: 1px solid #ddd;
  text-align: left;
}

th {
  background: #f5f5f5;
  font-weight: 600;
}

hr {
  border: none;
  border-top: 1px solid #ddd;
  margin: 1.5em 0;
}

a {
  color: #0066cc;
  text-decoration: none;
}

img {
  max-width: 100%;
  max-height: var(--page-content-height);
  height: auto;
}
"""


def generate_print_styles(page_size: PageSize) -> str:
    """
    Generate the stylesheet for a page size.

    Args:
        page_size: Page geometry in millimeters

    Returns:
        CSS text

    Example:
        >>> css = generate_print_styles(PageSize(210, 297, 20))
        >>> "size: 210mm 297mm;" in css
        True
    """
    return "\n".join(
        [
            _base_rules(page_size),
            TYPOGRAPHY_CSS,
            _print_rules(page_size),
            _screen_rules(page_size),
        ]
    )


def _page_box(page_size: PageSize) -> str:
    """Declarations that pin a page element to the physical page box."""
    width = format_mm(page_size.width)
    height = format_mm(page_size.height)
    return (
        f"  width: {width};\n"
        f"  height: {height};\n"
        f"  min-height: {height};\n"
        f"  max-height: {height};\n"
        f"  padding: {format_mm(page_size.margin)};\n"
    )


def _base_rules(page_size: PageSize) -> str:
    return (
        "/* Reset and base styles */\n"
        "*, *::before, *::after {\n"
        "  box-sizing: border-box;\n"
        "}\n"
        "\n"
        ":root {\n"
        f"  --page-width: {format_mm(page_size.width)};\n"
        f"  --page-height: {format_mm(page_size.height)};\n"
        f"  --page-content-width: {format_mm(page_size.content_width)};\n"
        f"  --page-content-height: {format_mm(page_size.content_height)};\n"
        "}\n"
        "\n"
        "html, body {\n"
        "  margin: 0;\n"
        "  padding: 0;\n"
        "  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, "
        "'Helvetica Neue', Arial, sans-serif;\n"
        "  font-size: 12pt;\n"
        "  line-height: 1.6;\n"
        "  color: #000;\n"
        "  background: #fff;\n"
        "}\n"
        "\n"
        "/* Page box: full physical page, margin applied as padding */\n"
        ".page {\n"
        f"{_page_box(page_size)}"
        "  margin: 0;\n"
        "  background: #fff;\n"
        "  overflow: hidden;\n"
        "  page-break-after: always;\n"
        "  break-after: page;\n"
        "  page-break-inside: avoid;\n"
        "  break-inside: avoid;\n"
        "}\n"
        "\n"
        ".page.last-page {\n"
        "  page-break-after: auto;\n"
        "  break-after: auto;\n"
        "}\n"
        "\n"
        "@page {\n"
        f"  size: {format_mm(page_size.width)} {format_mm(page_size.height)};\n"
        "  margin: 0;\n"
        "}\n"
    )


def _print_rules(page_size: PageSize) -> str:
    return (
        "@media print {\n"
        "  html, body {\n"
        f"    width: {format_mm(page_size.width)};\n"
        "    margin: 0;\n"
        "    padding: 0;\n"
        "    -webkit-print-color-adjust: exact;\n"
        "    print-color-adjust: exact;\n"
        "  }\n"
        "\n"
        "  .page-wrapper {\n"
        "    display: contents;\n"
        "  }\n"
        "\n"
        "  .page {\n"
        "    box-shadow: none;\n"
        "    transform: none;\n"
        "  }\n"
        "\n"
        "  img, figure {\n"
        "    page-break-inside: avoid;\n"
        "    break-inside: avoid;\n"
        "  }\n"
        "}\n"
    )


def _screen_rules(page_size: PageSize) -> str:
    width = format_mm(page_size.width)
    height = format_mm(page_size.height)
    return (
        "@media screen {\n"
        "  :root {\n"
        f"    --preview-scale: {format_number(DEFAULT_PREVIEW_SCALE)};\n"
        "  }\n"
        "\n"
        "  body {\n"
        "    background: #e5e5e5;\n"
        f"    padding: {PAGE_GAP_PX}px;\n"
        "    display: flex;\n"
        "    flex-direction: column;\n"
        "    align-items: center;\n"
        f"    gap: {PAGE_GAP_PX}px;\n"
        "    min-height: 100vh;\n"
        "  }\n"
        "\n"
        "  /* Reserves the scaled footprint; the page keeps its true size */\n"
        "  .page-wrapper {\n"
        f"    width: calc({width} * var(--preview-scale));\n"
        f"    height: calc({height} * var(--preview-scale));\n"
        "    position: relative;\n"
        "    flex-shrink: 0;\n"
        "  }\n"
        "\n"
        "  .page {\n"
        "    position: absolute;\n"
        "    top: 0;\n"
        "    left: 0;\n"
        "    transform: scale(var(--preview-scale));\n"
        "    transform-origin: top left;\n"
        "    box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);\n"
        "  }\n"
        "\n"
        "  .page::before {\n"
        "    content: 'Page ' attr(data-page);\n"
        "    position: absolute;\n"
        "    top: 8px;\n"
        "    right: 12px;\n"
        "    font-size: 10px;\n"
        "    color: #999;\n"
        "    font-family: sans-serif;\n"
        "  }\n"
        "}\n"
    )
